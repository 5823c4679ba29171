"""Shared fixtures for the kinship test suite."""

from pathlib import Path

import pytest

from kinship.inference import declare_relationship
from kinship.models import Gender, Person, Relationship, RelationshipType


def person(person_id: str, gender: Gender = Gender.OTHER, birth_date: str | None = None, **fields) -> Person:
    return Person(id=person_id, name=fields.pop("name", person_id), gender=gender, birth_date=birth_date, **fields)


def rel(person_id: str, related_id: str, relationship_type: RelationshipType, rel_id: str | None = None) -> Relationship:
    """A single one-directional record, as found in imported data."""
    return Relationship(
        id=rel_id or f"{person_id}-{relationship_type.value}-{related_id}",
        person_id=person_id,
        related_person_id=related_id,
        relationship_type=relationship_type,
    )


def declared(*triples: tuple[str, str, RelationshipType]) -> list[Relationship]:
    """Declared records with their reciprocals."""
    records: list[Relationship] = []
    for person_id, related_id, relationship_type in triples:
        records.extend(declare_relationship(person_id, related_id, relationship_type))
    return records


@pytest.fixture
def family_people() -> list[Person]:
    """
    Three generations:

        George + Helen
          ├── Paul + Mary
          │     ├── Anna
          │     └── Ben
          └── Susan
                └── Carl
    """
    return [
        person("george", Gender.MALE, "1920-04-01", name="George"),
        person("helen", Gender.FEMALE, "1922-06-15", name="Helen"),
        person("paul", Gender.MALE, "1950-01-10", name="Paul"),
        person("mary", Gender.FEMALE, "1951-09-30", name="Mary"),
        person("susan", Gender.FEMALE, "1953-03-03", name="Susan"),
        person("anna", Gender.FEMALE, "1975-05-05", name="Anna"),
        person("ben", Gender.MALE, "1977-07-07", name="Ben"),
        person("carl", Gender.MALE, "1980-08-08", name="Carl"),
    ]


@pytest.fixture
def family_relationships() -> list[Relationship]:
    P = RelationshipType.PARENT
    S = RelationshipType.SPOUSE
    return declared(
        ("george", "helen", S),
        ("george", "paul", P),
        ("helen", "paul", P),
        ("george", "susan", P),
        ("helen", "susan", P),
        ("paul", "mary", S),
        ("paul", "anna", P),
        ("mary", "anna", P),
        ("paul", "ben", P),
        ("mary", "ben", P),
        ("susan", "carl", P),
    )


GEDCOM_TEXT = """0 HEAD
1 SOUR TEST
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 BIRT
2 DATE 2 MAR 1950
2 PLAC Boston
0 @I2@ INDI
1 NAME Mary /Jones/
1 SEX F
1 BIRT
2 DATE 1952
0 @I3@ INDI
1 NAME Anna /Smith/
1 SEX F
1 DEAT Y
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I3@
0 TRLR
"""


@pytest.fixture
def gedcom_file(tmp_path: Path) -> Path:
    path = tmp_path / "family.ged"
    path.write_text(GEDCOM_TEXT, encoding="utf-8")
    return path
