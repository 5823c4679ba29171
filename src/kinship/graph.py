"""NetworkX relationship graph building, path finding and relative queries."""

import logging
from collections import deque
from collections.abc import Callable, Iterable

import networkx as nx

from .models import (
    Person,
    PathSegment,
    Relationship,
    RelationshipPath,
    RelationshipType,
    RelativeMatch,
    reverse_type,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISTANCE = 6

PathPredicate = Callable[[RelationshipPath], bool]


def build_graph(people: Iterable[Person], relationships: Iterable[Relationship]) -> nx.DiGraph:
    """
    Build a bidirectional relationship graph.

    Every person becomes a node, even without relationships. Each relationship adds its
    forward edge and the edge back with the reverse type; a later record for the same
    pair overwrites an earlier one. Ids referenced only by relationships get a bare node.

    Edge (a, b) carries `relationship_type`, so `G[a][b]["relationship_type"]` is the type
    observed from a to b.
    """
    G = nx.DiGraph()

    # Note: use 'person' as the attribute name so it doesn't clash with networkx keywords
    for person in people:
        G.add_node(person.id, person=person)

    for rel in relationships:
        G.add_edge(rel.person_id, rel.related_person_id, relationship_type=rel.relationship_type)

        reverse = reverse_type(rel.relationship_type)
        if reverse is not None:
            G.add_edge(rel.related_person_id, rel.person_id, relationship_type=reverse)

    logger.debug("Built relationship graph: %d nodes, %d edges", G.number_of_nodes(), G.number_of_edges())
    return G


def edge_type(G: nx.DiGraph, from_id: str, to_id: str) -> RelationshipType | None:
    """Return the relationship type stored on the direct edge, or None."""
    if not G.has_edge(from_id, to_id):
        return None
    return G.edges[from_id, to_id]["relationship_type"]


def path_confidence(length: int) -> float:
    """Confidence decays by 0.1 per hop after the first, floored at 0.5."""
    if length == 0:
        return 1.0
    return max(0.5, 1.0 - (length - 1) * 0.1)


def find_paths(
    G: nx.DiGraph, from_id: str, to_id: str, max_distance: int = DEFAULT_MAX_DISTANCE
) -> list[RelationshipPath]:
    """
    Find relationship paths between two people with a breadth-first search.

    A node is only marked visited once it has been dequeued as a non-target, so several
    paths to `to_id` can be collected; the queue is drained rather than stopping at the
    first hit. The number of paths returned is not capped.

    Args:
        G: Graph from `build_graph`
        from_id: Starting person id
        to_id: Target person id
        max_distance: Maximum number of hops (default 6)

    Returns:
        Paths sorted by distance ascending, then confidence descending. Empty if either
        person is unknown or unreachable within `max_distance`.
    """
    if from_id not in G:
        return []

    if from_id == to_id:
        return [RelationshipPath(segments=(), distance=0, confidence=1.0)]

    paths: list[RelationshipPath] = []
    visited: set[str] = set()
    queue: deque[tuple[str, tuple[PathSegment, ...], int]] = deque([(from_id, (), 0)])

    while queue:
        person_id, segments, distance = queue.popleft()

        if person_id == to_id:
            paths.append(
                RelationshipPath(
                    segments=segments, distance=distance, confidence=path_confidence(len(segments))
                )
            )
            continue

        if person_id in visited:
            continue
        visited.add(person_id)

        if distance + 1 > max_distance:
            continue

        for neighbor_id, edge_data in G.adj[person_id].items():
            if neighbor_id in visited:
                continue
            segment = PathSegment(person_id=neighbor_id, relationship_type=edge_data["relationship_type"])
            queue.append((neighbor_id, segments + (segment,), distance + 1))

    paths.sort(key=lambda p: (p.distance, -p.confidence))
    return paths


def _matches(*expected: RelationshipType) -> PathPredicate:
    def predicate(path: RelationshipPath) -> bool:
        return path.path == expected

    return predicate


def _is_in_law(path: RelationshipPath) -> bool:
    return path.distance > 1 and RelationshipType.SPOUSE in path.path


RELATIVE_FILTERS: dict[str, PathPredicate] = {
    "cousins": _matches(RelationshipType.PARENT, RelationshipType.SIBLING, RelationshipType.CHILD),
    "auntsAndUncles": _matches(RelationshipType.PARENT, RelationshipType.SIBLING),
    "niecesAndNephews": _matches(RelationshipType.SIBLING, RelationshipType.CHILD),
    "grandparents": _matches(RelationshipType.PARENT, RelationshipType.PARENT),
    "grandchildren": _matches(RelationshipType.CHILD, RelationshipType.CHILD),
    "inLaws": _is_in_law,
}

# snake_case spellings for Python callers and the CLI
_FILTER_ALIASES = {
    "aunts_and_uncles": "auntsAndUncles",
    "nieces_and_nephews": "niecesAndNephews",
    "in_laws": "inLaws",
}


def resolve_filter(predicate: str | PathPredicate) -> PathPredicate:
    """Turn a filter name (or an existing callable) into a path predicate."""
    if callable(predicate):
        return predicate

    name = _FILTER_ALIASES.get(predicate, predicate)
    if name not in RELATIVE_FILTERS:
        raise ValueError(
            f"Unknown relative query {predicate!r}; expected one of {sorted(RELATIVE_FILTERS)}"
        )
    return RELATIVE_FILTERS[name]


def query_relatives(
    G: nx.DiGraph,
    person_id: str,
    predicate: str | PathPredicate,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> list[RelativeMatch]:
    """
    Find every other person whose paths from `person_id` satisfy `predicate`.

    Runs `find_paths` once per node in the graph, so cost grows with the number of people.
    """
    matcher = resolve_filter(predicate)
    relatives: list[RelativeMatch] = []

    for target_id in G.nodes:
        if target_id == person_id:
            continue

        kept = tuple(path for path in find_paths(G, person_id, target_id, max_distance) if matcher(path))
        if kept:
            relatives.append(RelativeMatch(person_id=target_id, paths=kept))

    logger.debug("Relative query from %s matched %d people", person_id, len(relatives))
    return relatives
