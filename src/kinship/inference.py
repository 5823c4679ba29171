"""Rule-based inference of derived relationships."""

import logging
from collections.abc import Iterable, Sequence
from uuid import uuid4

from .models import Gender, Person, Relationship, RelationshipType, reverse_type

logger = logging.getLogger(__name__)

SIBLING_CONFIDENCE = 0.95
GRANDPARENT_CONFIDENCE = 0.9
AUNT_UNCLE_CONFIDENCE = 0.85
COUSIN_CONFIDENCE = 0.8
IN_LAW_CONFIDENCE = 0.7


DECLARED_CONFIDENCE = 1.0
INFERRED_CONFIDENCE = 0.8


def new_relationship_id() -> str:
    return f"rel_{uuid4().hex}"


def declare_relationship(
    person_id: str,
    related_person_id: str,
    relationship_type: RelationshipType,
    is_inferred: bool = False,
) -> list[Relationship]:
    """Create a relationship record together with its reciprocal."""
    relationship_type = RelationshipType(relationship_type)
    confidence = INFERRED_CONFIDENCE if is_inferred else DECLARED_CONFIDENCE
    records = [
        Relationship(
            id=new_relationship_id(),
            person_id=person_id,
            related_person_id=related_person_id,
            relationship_type=relationship_type,
            is_inferred=is_inferred,
            confidence=confidence,
        )
    ]

    reciprocal = reverse_type(relationship_type)
    if reciprocal is not None:
        records.append(
            Relationship(
                id=new_relationship_id(),
                person_id=related_person_id,
                related_person_id=person_id,
                relationship_type=reciprocal,
                is_inferred=is_inferred,
                confidence=confidence,
            )
        )
    return records


class _RelationshipBuffer:
    """Growing copy of the relationship list with lookup indexes kept in step."""

    def __init__(self, relationships: Iterable[Relationship]):
        self.relationships: list[Relationship] = []
        self._keys: set[tuple[str, str, RelationshipType]] = set()
        self._siblings: dict[str, list[str]] = {}
        for rel in relationships:
            self._append(rel)

    def _append(self, rel: Relationship) -> None:
        self.relationships.append(rel)
        self._keys.add((rel.person_id, rel.related_person_id, rel.relationship_type))
        if rel.relationship_type == RelationshipType.SIBLING:
            self._siblings.setdefault(rel.person_id, []).append(rel.related_person_id)
            self._siblings.setdefault(rel.related_person_id, []).append(rel.person_id)

    def holds(self, person_id: str, related_id: str, relationship_type: RelationshipType) -> bool:
        return (person_id, related_id, relationship_type) in self._keys

    def exists(self, person1: str, person2: str, relationship_type: RelationshipType) -> bool:
        """True if the type is recorded between the pair in either direction."""
        return self.holds(person1, person2, relationship_type) or self.holds(
            person2, person1, relationship_type
        )

    def siblings_of(self, person_id: str) -> list[str]:
        # dict.fromkeys de-duplicates while preserving order
        return list(dict.fromkeys(self._siblings.get(person_id, [])))

    def add(
        self, person1: str, person2: str, relationship_type: RelationshipType, confidence: float
    ) -> bool:
        """Add an inferred edge and its reciprocal unless the pair already has that type."""
        if person1 == person2 or self.exists(person1, person2, relationship_type):
            return False

        self._append(
            Relationship(
                id=new_relationship_id(),
                person_id=person1,
                related_person_id=person2,
                relationship_type=relationship_type,
                is_inferred=True,
                confidence=confidence,
            )
        )

        reciprocal = reverse_type(relationship_type)
        if reciprocal is not None and not self.holds(person2, person1, reciprocal):
            self._append(
                Relationship(
                    id=new_relationship_id(),
                    person_id=person2,
                    related_person_id=person1,
                    relationship_type=reciprocal,
                    is_inferred=True,
                    confidence=confidence,
                )
            )
        return True


def infer_relationships(
    people: Sequence[Person], relationships: Sequence[Relationship]
) -> list[Relationship]:
    """
    Derive siblings, grandparents, aunts/uncles, cousins and in-laws in a single pass.

    Parent and spouse groupings are read from the input list only. Sibling lookups read the
    list as it grows, so siblings found by the first rule feed the aunt/uncle and cousin rules.
    Running the result through again adds nothing new.

    Returns:
        A new list: the input relationships followed by the inferred ones.
    """
    people_by_id = {p.id: p for p in people}
    buffer = _RelationshipBuffer(relationships)

    parent_rels = [r for r in relationships if r.relationship_type == RelationshipType.PARENT]
    spouse_rels = [r for r in relationships if r.relationship_type == RelationshipType.SPOUSE]

    children_by_parent: dict[str, list[str]] = {}
    parents_by_child: dict[str, list[str]] = {}
    for rel in parent_rels:
        children_by_parent.setdefault(rel.person_id, []).append(rel.related_person_id)
        parents_by_child.setdefault(rel.related_person_id, []).append(rel.person_id)

    # De-duplicate while preserving order
    children_by_parent = {k: list(dict.fromkeys(v)) for k, v in children_by_parent.items()}
    parents_by_child = {k: list(dict.fromkeys(v)) for k, v in parents_by_child.items()}

    # 1. Children of the same parent are siblings
    for children in children_by_parent.values():
        for i, first in enumerate(children):
            for second in children[i + 1 :]:
                buffer.add(first, second, RelationshipType.SIBLING, SIBLING_CONFIDENCE)

    # 2. A parent's parent is a grandparent
    for parent_id, children in children_by_parent.items():
        for grandparent_id in parents_by_child.get(parent_id, []):
            for child_id in children:
                buffer.add(grandparent_id, child_id, RelationshipType.GRANDPARENT, GRANDPARENT_CONFIDENCE)

    # 3. A parent's sibling is an aunt or uncle
    for parent_id, children in children_by_parent.items():
        for sibling_id in buffer.siblings_of(parent_id):
            sibling = people_by_id.get(sibling_id)
            if sibling is None:
                continue
            kind = RelationshipType.AUNT if sibling.gender == Gender.FEMALE else RelationshipType.UNCLE
            for child_id in children:
                buffer.add(sibling_id, child_id, kind, AUNT_UNCLE_CONFIDENCE)

    # 4. Children of siblings are cousins
    for parent1_id, children1 in children_by_parent.items():
        for parent2_id, children2 in children_by_parent.items():
            if parent1_id == parent2_id:
                continue
            if not buffer.exists(parent1_id, parent2_id, RelationshipType.SIBLING):
                continue
            for child1_id in children1:
                for child2_id in children2:
                    buffer.add(child1_id, child2_id, RelationshipType.COUSIN, COUSIN_CONFIDENCE)

    # 5. A spouse's parents are in-laws
    for rel in spouse_rels:
        for parent_id in parents_by_child.get(rel.person_id, []):
            buffer.add(parent_id, rel.related_person_id, RelationshipType.IN_LAW, IN_LAW_CONFIDENCE)
        for parent_id in parents_by_child.get(rel.related_person_id, []):
            buffer.add(parent_id, rel.person_id, RelationshipType.IN_LAW, IN_LAW_CONFIDENCE)

    added = len(buffer.relationships) - len(relationships)
    logger.debug("Inferred %d relationship records from %d declared", added, len(relationships))
    return buffer.relationships
