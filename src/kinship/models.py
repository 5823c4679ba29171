"""Data classes for people, relationships and derived query results."""

from dataclasses import dataclass, field
from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class RelationshipType(str, Enum):
    """Closed set of relationship kinds.

    A relationship record reads "person_id is the <type> of related_person_id",
    so a PARENT record names the parent in person_id.
    """

    PARENT = "parent"
    CHILD = "child"
    SPOUSE = "spouse"
    SIBLING = "sibling"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    AUNT = "aunt"
    UNCLE = "uncle"
    NIECE = "niece"
    NEPHEW = "nephew"
    COUSIN = "cousin"
    STEP_PARENT = "step-parent"
    STEP_CHILD = "step-child"
    ADOPTED_PARENT = "adopted-parent"
    ADOPTED_CHILD = "adopted-child"
    IN_LAW = "in-law"


REVERSE_TYPES: dict[RelationshipType, RelationshipType] = {
    RelationshipType.PARENT: RelationshipType.CHILD,
    RelationshipType.CHILD: RelationshipType.PARENT,
    RelationshipType.SPOUSE: RelationshipType.SPOUSE,
    RelationshipType.SIBLING: RelationshipType.SIBLING,
    RelationshipType.GRANDPARENT: RelationshipType.GRANDCHILD,
    RelationshipType.GRANDCHILD: RelationshipType.GRANDPARENT,
    RelationshipType.AUNT: RelationshipType.NIECE,
    RelationshipType.UNCLE: RelationshipType.NEPHEW,
    RelationshipType.NIECE: RelationshipType.AUNT,
    RelationshipType.NEPHEW: RelationshipType.UNCLE,
    RelationshipType.COUSIN: RelationshipType.COUSIN,
    RelationshipType.STEP_PARENT: RelationshipType.STEP_CHILD,
    RelationshipType.STEP_CHILD: RelationshipType.STEP_PARENT,
    RelationshipType.ADOPTED_PARENT: RelationshipType.ADOPTED_CHILD,
    RelationshipType.ADOPTED_CHILD: RelationshipType.ADOPTED_PARENT,
    RelationshipType.IN_LAW: RelationshipType.IN_LAW,
}


def reverse_type(relationship_type: RelationshipType) -> RelationshipType | None:
    """Return the type that holds in the opposite direction, if any."""
    return REVERSE_TYPES.get(RelationshipType(relationship_type))


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    gender: Gender = Gender.OTHER
    first_name: str | None = None
    last_name: str | None = None
    birth_date: str | None = None  # free-form, parsed leniently by validation
    death_date: str | None = None
    is_deceased: bool = False
    birth_place: str | None = None
    occupation: str | None = None
    notes: str | None = None
    profile_image: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "gender", Gender(self.gender))


@dataclass(frozen=True)
class Relationship:
    id: str
    person_id: str
    related_person_id: str
    relationship_type: RelationshipType
    is_inferred: bool = False
    confidence: float = 1.0
    notes: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "relationship_type", RelationshipType(self.relationship_type))


@dataclass(frozen=True)
class PathSegment:
    """One hop of a path: the type traversed and the person reached."""

    person_id: str
    relationship_type: RelationshipType


@dataclass(frozen=True)
class RelationshipPath:
    segments: tuple[PathSegment, ...]
    distance: int
    confidence: float

    @property
    def path(self) -> tuple[RelationshipType, ...]:
        return tuple(segment.relationship_type for segment in self.segments)


@dataclass(frozen=True)
class RelativeMatch:
    person_id: str
    paths: tuple[RelationshipPath, ...]


class ValidationErrorType(str, Enum):
    CIRCULAR_REFERENCE = "circular_reference"
    AGE_CONFLICT = "age_conflict"
    DUPLICATE_RELATIONSHIP = "duplicate_relationship"
    MISSING_DATA = "missing_data"
    LOGICAL_ERROR = "logical_error"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationError:
    """A single finding reported by the consistency validator."""

    id: str
    type: ValidationErrorType
    severity: Severity
    message: str
    affected_persons: tuple[str, ...] = field(default_factory=tuple)
    suggested_action: str | None = None
