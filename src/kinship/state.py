"""Immutable family tree snapshot and the pure operations that update it.

Every operation takes a `FamilyTreeState` and returns a new one; nothing is mutated in
place and nothing is written anywhere. Saving a snapshot is up to the caller.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from uuid import uuid4

import networkx as nx

from .graph import build_graph
from .inference import declare_relationship, infer_relationships
from .models import Gender, Person, Relationship, RelationshipType, ValidationError
from .validation import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FamilyTreeState:
    people: tuple[Person, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    root_person_id: str | None = None
    validation_errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    def person(self, person_id: str) -> Person | None:
        return next((p for p in self.people if p.id == person_id), None)


def new_person_id() -> str:
    return f"person_{uuid4().hex}"


def add_person(
    state: FamilyTreeState, name: str, gender: Gender = Gender.OTHER, **fields
) -> tuple[FamilyTreeState, str]:
    """Add a person with a generated id; returns the new state and that id."""
    person = Person(id=new_person_id(), name=name, gender=gender, **fields)
    return replace(state, people=state.people + (person,)), person.id


def set_people(state: FamilyTreeState, people: Iterable[Person]) -> FamilyTreeState:
    return replace(state, people=tuple(people))


def update_person(state: FamilyTreeState, person_id: str, **updates) -> FamilyTreeState:
    """Apply field updates to one person; unknown ids leave the state unchanged."""
    updates.pop("id", None)
    people = tuple(replace(p, **updates) if p.id == person_id else p for p in state.people)
    return replace(state, people=people)


def delete_person(state: FamilyTreeState, person_id: str) -> FamilyTreeState:
    """Remove a person together with every relationship that mentions them."""
    return replace(
        state,
        people=tuple(p for p in state.people if p.id != person_id),
        relationships=tuple(
            r
            for r in state.relationships
            if r.person_id != person_id and r.related_person_id != person_id
        ),
        root_person_id=None if state.root_person_id == person_id else state.root_person_id,
    )


def add_relationship(
    state: FamilyTreeState,
    person_id: str,
    related_person_id: str,
    relationship_type: RelationshipType,
    is_inferred: bool = False,
) -> FamilyTreeState:
    """Record `person_id` as the `relationship_type` of `related_person_id`, plus the reciprocal."""
    records = declare_relationship(person_id, related_person_id, relationship_type, is_inferred)
    return replace(state, relationships=state.relationships + tuple(records))


def delete_relationship(state: FamilyTreeState, relationship_id: str) -> FamilyTreeState:
    return replace(
        state, relationships=tuple(r for r in state.relationships if r.id != relationship_id)
    )


def set_root_person(state: FamilyTreeState, person_id: str | None) -> FamilyTreeState:
    return replace(state, root_person_id=person_id)


def infer(state: FamilyTreeState) -> FamilyTreeState:
    """Replace the relationship list with the inference engine's augmented list."""
    relationships = infer_relationships(state.people, state.relationships)
    logger.info(
        "Inference added %d records (%d total)",
        len(relationships) - len(state.relationships),
        len(relationships),
    )
    return replace(state, relationships=tuple(relationships))


def run_validation(state: FamilyTreeState) -> FamilyTreeState:
    errors = validate(state.people, state.relationships)
    return replace(state, validation_errors=tuple(errors))


def relationship_graph(state: FamilyTreeState) -> nx.DiGraph:
    return build_graph(state.people, state.relationships)
