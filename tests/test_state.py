"""Tests for the immutable family tree snapshot and its operations."""

import dataclasses

import pytest

from kinship import state as ops
from kinship.models import Gender, RelationshipType, ValidationErrorType
from kinship.state import FamilyTreeState

T = RelationshipType


@pytest.fixture
def couple():
    s = FamilyTreeState()
    s, alice = ops.add_person(s, "Alice", Gender.FEMALE, birth_date="1950-01-01")
    s, bob = ops.add_person(s, "Bob", Gender.MALE, birth_date="1949-06-01")
    s = ops.add_relationship(s, alice, bob, T.SPOUSE)
    return s, alice, bob


class TestPeople:
    def test_add_person(self):
        empty = FamilyTreeState()
        s, person_id = ops.add_person(empty, "Alice", Gender.FEMALE, occupation="Librarian")

        assert person_id.startswith("person_")
        assert s.person(person_id).occupation == "Librarian"
        assert empty.people == ()

    def test_snapshot_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            FamilyTreeState().people = ()

    def test_update_person(self, couple):
        s, alice, _ = couple
        updated = ops.update_person(s, alice, name="Alice Smith", id="hijack")

        assert updated.person(alice).name == "Alice Smith"
        assert s.person(alice).name == "Alice"

    def test_update_unknown_person(self, couple):
        s, _, _ = couple
        assert ops.update_person(s, "ghost", name="x").people == s.people

    def test_delete_person_cascades(self, couple):
        s, alice, bob = couple
        s = ops.set_root_person(s, alice)
        s = ops.delete_person(s, alice)

        assert s.person(alice) is None
        assert s.person(bob) is not None
        assert s.relationships == ()
        assert s.root_person_id is None

    def test_set_people(self, couple):
        s, _, _ = couple
        assert ops.set_people(s, []).people == ()


class TestRelationships:
    def test_add_relationship_with_reciprocal(self, couple):
        s, alice, bob = couple
        s, child = ops.add_person(s, "Carol", Gender.FEMALE)
        s = ops.add_relationship(s, alice, child, T.PARENT)

        added = s.relationships[-2:]
        assert [(r.person_id, r.related_person_id, r.relationship_type) for r in added] == [
            (alice, child, T.PARENT),
            (child, alice, T.CHILD),
        ]

    def test_inferred_flag_sets_confidence(self, couple):
        s, alice, bob = couple
        s = ops.add_relationship(s, alice, bob, T.COUSIN, is_inferred=True)
        assert all(r.confidence == 0.8 for r in s.relationships[-2:])

    def test_delete_relationship(self, couple):
        s, _, _ = couple
        first = s.relationships[0]
        s = ops.delete_relationship(s, first.id)
        assert first.id not in {r.id for r in s.relationships}
        assert len(s.relationships) == 1

    def test_graph_for_snapshot(self, couple):
        s, alice, bob = couple
        G = ops.relationship_graph(s)
        assert G[alice][bob]["relationship_type"] == T.SPOUSE


class TestDerivedOperations:
    def test_infer_then_validate(self, couple):
        s, alice, bob = couple
        s, kid1 = ops.add_person(s, "Kid 1", birth_date="1980-01-01")
        s, kid2 = ops.add_person(s, "Kid 2", birth_date="1982-01-01")
        for kid in (kid1, kid2):
            s = ops.add_relationship(s, alice, kid, T.PARENT)

        inferred = ops.infer(s)
        assert len(inferred.relationships) > len(s.relationships)
        assert any(r.relationship_type == T.SIBLING for r in inferred.relationships)

        validated = ops.run_validation(inferred)
        types = {e.type for e in validated.validation_errors}
        # Alice has two children: reported by the coarse duplicate check
        assert ValidationErrorType.DUPLICATE_RELATIONSHIP in types
        assert s.validation_errors == ()
