"""Tests for relationship labels."""

import pytest

from conftest import declared, person
from kinship.graph import build_graph
from kinship.labels import NO_RELATIONSHIP, UNKNOWN, label_between, label_path
from kinship.models import Gender, RelationshipType

T = RelationshipType

ME = person("me", Gender.MALE)
WOMAN = person("w", Gender.FEMALE)
MAN = person("m", Gender.MALE)
OTHER = person("o", Gender.OTHER)


class TestDirectLabels:
    def test_self(self):
        assert label_path([], ME, ME) == "self"

    @pytest.mark.parametrize(
        "relationship_type,feminine,masculine",
        [
            (T.PARENT, "mother", "father"),
            (T.CHILD, "daughter", "son"),
            (T.SPOUSE, "wife", "husband"),
            (T.SIBLING, "sister", "brother"),
            (T.GRANDPARENT, "grandmother", "grandfather"),
            (T.GRANDCHILD, "granddaughter", "grandson"),
            (T.STEP_PARENT, "stepmother", "stepfather"),
            (T.STEP_CHILD, "stepdaughter", "stepson"),
            (T.ADOPTED_PARENT, "adoptive mother", "adoptive father"),
            (T.ADOPTED_CHILD, "adopted daughter", "adopted son"),
        ],
    )
    def test_gendered_by_target(self, relationship_type, feminine, masculine):
        assert label_path([relationship_type], ME, WOMAN) == feminine
        assert label_path([relationship_type], ME, MAN) == masculine

    def test_other_gender_uses_masculine_term(self):
        assert label_path([T.PARENT], ME, OTHER) == "father"

    @pytest.mark.parametrize(
        "relationship_type", [T.AUNT, T.UNCLE, T.NIECE, T.NEPHEW, T.COUSIN, T.IN_LAW]
    )
    def test_ungendered_pass_through(self, relationship_type):
        assert label_path([relationship_type], ME, WOMAN) == relationship_type.value
        assert label_path([relationship_type], ME, MAN) == relationship_type.value

    def test_accepts_plain_strings(self):
        assert label_path(["parent"], ME, WOMAN) == "mother"


class TestCompoundLabels:
    def test_parent_spouse(self):
        assert label_path([T.PARENT, T.SPOUSE], ME, WOMAN) == "mother-in-law"
        assert label_path([T.PARENT, T.SPOUSE], ME, MAN) == "father-in-law"

    def test_sibling_spouse(self):
        assert label_path([T.SIBLING, T.SPOUSE], ME, WOMAN) == "sister-in-law"
        assert label_path([T.SIBLING, T.SPOUSE], ME, MAN) == "brother-in-law"

    def test_child_spouse(self):
        assert label_path([T.CHILD, T.SPOUSE], ME, WOMAN) == "daughter-in-law"
        assert label_path([T.CHILD, T.SPOUSE], ME, MAN) == "son-in-law"

    def test_step_and_half_siblings(self):
        assert label_path([T.PARENT, T.SPOUSE, T.CHILD], ME, WOMAN) == "step-sibling"
        assert label_path([T.PARENT, T.CHILD], ME, MAN) == "half-sibling"


class TestDescriptiveFallback:
    def test_parent_sibling(self):
        assert label_path([T.PARENT, T.SIBLING], ME, WOMAN) == "mother → sibling"

    def test_long_chain(self):
        assert label_path([T.PARENT, T.SIBLING, T.CHILD], ME, MAN) == "father → sibling → child"

    def test_first_hop_ungendered(self):
        assert label_path([T.COUSIN, T.SPOUSE], ME, WOMAN) == "cousin → spouse"


class TestLabelBetween:
    def test_spouses(self):
        people = [person("a", Gender.MALE), person("b", Gender.FEMALE)]
        G = build_graph(people, declared(("a", "b", T.SPOUSE)))
        assert label_between(G, people, "a", "b") == "wife"
        assert label_between(G, people, "b", "a") == "husband"

    def test_self(self):
        people = [person("a")]
        G = build_graph(people, [])
        assert label_between(G, people, "a", "a") == "self"

    def test_no_path(self):
        people = [person("a"), person("b")]
        G = build_graph(people, [])
        assert label_between(G, people, "a", "b") == NO_RELATIONSHIP

    def test_unknown_person(self):
        people = [person("a")]
        G = build_graph(people, [])
        assert label_between(G, people, "a", "ghost") == UNKNOWN
