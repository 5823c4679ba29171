"""Natural-language labels for relationship paths."""

from collections.abc import Sequence

import networkx as nx

from .graph import DEFAULT_MAX_DISTANCE, find_paths
from .models import Gender, Person, RelationshipType

NO_RELATIONSHIP = "No relationship found"
UNKNOWN = "Unknown"
PATH_SEPARATOR = " → "

T = RelationshipType

# (feminine, masculine) noun, picked by the gender of the person the hop reaches
GENDERED_LABELS: dict[RelationshipType, tuple[str, str]] = {
    T.PARENT: ("mother", "father"),
    T.CHILD: ("daughter", "son"),
    T.SPOUSE: ("wife", "husband"),
    T.SIBLING: ("sister", "brother"),
    T.GRANDPARENT: ("grandmother", "grandfather"),
    T.GRANDCHILD: ("granddaughter", "grandson"),
    T.STEP_PARENT: ("stepmother", "stepfather"),
    T.STEP_CHILD: ("stepdaughter", "stepson"),
    T.ADOPTED_PARENT: ("adoptive mother", "adoptive father"),
    T.ADOPTED_CHILD: ("adopted daughter", "adopted son"),
}

COMPOUND_LABELS: dict[tuple[RelationshipType, ...], tuple[str, str]] = {
    (T.PARENT, T.SPOUSE): ("mother-in-law", "father-in-law"),
    (T.SIBLING, T.SPOUSE): ("sister-in-law", "brother-in-law"),
    (T.CHILD, T.SPOUSE): ("daughter-in-law", "son-in-law"),
    (T.PARENT, T.SPOUSE, T.CHILD): ("step-sibling", "step-sibling"),
    (T.PARENT, T.CHILD): ("half-sibling", "half-sibling"),
}


def _pick(labels: tuple[str, str], person: Person) -> str:
    feminine, masculine = labels
    return feminine if person.gender == Gender.FEMALE else masculine


def direct_label(relationship_type: RelationshipType, from_person: Person, to_person: Person) -> str:
    """Label a single hop; aunt, uncle, niece, nephew, cousin and in-law are ungendered."""
    relationship_type = RelationshipType(relationship_type)
    if relationship_type in GENDERED_LABELS:
        return _pick(GENDERED_LABELS[relationship_type], to_person)
    return relationship_type.value


def compound_label(
    path: Sequence[RelationshipType], from_person: Person, to_person: Person
) -> str | None:
    labels = COMPOUND_LABELS.get(tuple(RelationshipType(t) for t in path))
    if labels is None:
        return None
    return _pick(labels, to_person)


def descriptive_label(path: Sequence[RelationshipType], from_person: Person, to_person: Person) -> str:
    """Fallback for uncurated shapes: first hop labelled, then the raw type tokens."""
    first, *rest = path
    parts = [direct_label(first, from_person, to_person)]
    parts.extend(RelationshipType(t).value for t in rest)
    return PATH_SEPARATOR.join(parts)


def label_path(
    path: Sequence[RelationshipType],
    from_person: Person,
    to_person: Person,
    people: Sequence[Person] = (),
) -> str:
    """
    Convert a sequence of relationship hops into a kinship term.

    Args:
        path: Relationship types along the path, in order
        from_person: Person the path starts at
        to_person: Person the path ends at; their gender picks gendered terms
        people: All known people (available for disambiguating compound shapes)

    Returns:
        "self" for an empty path, a direct or curated compound label where one exists,
        otherwise a descriptive arrow-joined chain such as "mother → sibling".
    """
    if len(path) == 0:
        return "self"

    if len(path) == 1:
        return direct_label(path[0], from_person, to_person)

    label = compound_label(path, from_person, to_person)
    if label is not None:
        return label

    return descriptive_label(path, from_person, to_person)


def label_between(
    G: nx.DiGraph,
    people: Sequence[Person],
    from_id: str,
    to_id: str,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> str:
    """Label the shortest path between two people by id."""
    by_id = {p.id: p for p in people}
    from_person = by_id.get(from_id)
    to_person = by_id.get(to_id)
    if from_person is None or to_person is None:
        return UNKNOWN

    paths = find_paths(G, from_id, to_id, max_distance)
    if not paths:
        return NO_RELATIONSHIP

    return label_path(paths[0].path, from_person, to_person, people)
