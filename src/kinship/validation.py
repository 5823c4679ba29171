"""Consistency checks for people and relationship data."""

import logging
from collections.abc import Sequence
from datetime import date

import networkx as nx

from .models import (
    Person,
    Relationship,
    RelationshipType,
    Severity,
    ValidationError,
    ValidationErrorType,
)
from .parsing import parse_date

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25
MIN_PARENT_AGE_YEARS = 10
MAX_SPOUSE_AGE_GAP_YEARS = 50


def _years_between(earlier: date, later: date) -> float:
    return (later - earlier).days / DAYS_PER_YEAR


def _people_with_circular_ancestry(parent_graph: nx.DiGraph) -> set[str]:
    """
    People who sit on a parent cycle or descend from someone who does.

    `parent_graph` points from child to parent, so a person's ancestors are its
    networkx descendants. Diamond ancestry (one ancestor reached along two lines) is not a cycle.
    """
    flagged: set[str] = set()
    for component in nx.strongly_connected_components(parent_graph):
        member = next(iter(component))
        if len(component) == 1 and not parent_graph.has_edge(member, member):
            continue
        if member in flagged:
            continue
        flagged.update(component)
        # everyone below the cycle reaches it by walking up parent edges
        flagged.update(nx.ancestors(parent_graph, member))
    return flagged


def check_circular_references(
    people: Sequence[Person], relationships: Sequence[Relationship]
) -> list[ValidationError]:
    # Create a child -> parent graph with only parent records for cycle detection
    parent_edges = [
        (rel.related_person_id, rel.person_id)
        for rel in relationships
        if rel.relationship_type == RelationshipType.PARENT
    ]
    parent_graph = nx.DiGraph(parent_edges)
    circular = _people_with_circular_ancestry(parent_graph)

    errors: list[ValidationError] = []
    for person in people:
        if person.id in circular:
            errors.append(
                ValidationError(
                    id=f"circular_{person.id}",
                    type=ValidationErrorType.CIRCULAR_REFERENCE,
                    severity=Severity.ERROR,
                    message=f"Circular reference detected in family tree involving {person.name}",
                    affected_persons=(person.id,),
                    suggested_action="Review and correct parent-child relationships",
                )
            )
    return errors


def check_parent_ages(
    people_by_id: dict[str, Person], relationships: Sequence[Relationship]
) -> list[ValidationError]:
    errors: list[ValidationError] = []

    for rel in relationships:
        if rel.relationship_type != RelationshipType.PARENT:
            continue

        parent = people_by_id.get(rel.person_id)
        child = people_by_id.get(rel.related_person_id)
        if parent is None or child is None:
            continue

        parent_birth = parse_date(parent.birth_date)
        child_birth = parse_date(child.birth_date)
        if parent_birth is None or child_birth is None:
            continue

        if parent_birth > child_birth:
            errors.append(
                ValidationError(
                    id=f"age_conflict_{rel.id}",
                    type=ValidationErrorType.AGE_CONFLICT,
                    severity=Severity.ERROR,
                    message=f"{parent.name} cannot be the parent of {child.name} - birth date conflict",
                    affected_persons=(parent.id, child.id),
                    suggested_action="Check and correct birth dates",
                )
            )

        # A parent born after the child also lands here, with a negative gap
        years = _years_between(parent_birth, child_birth)
        if years < MIN_PARENT_AGE_YEARS:
            errors.append(
                ValidationError(
                    id=f"young_parent_{rel.id}",
                    type=ValidationErrorType.LOGICAL_ERROR,
                    severity=Severity.WARNING,
                    message=(
                        f"{parent.name} is unusually young to be the parent of {child.name} "
                        f"({round(years)} years difference)"
                    ),
                    affected_persons=(parent.id, child.id),
                    suggested_action="Verify parent-child relationship and birth dates",
                )
            )

    return errors


def check_duplicate_relationships(
    people_by_id: dict[str, Person], relationships: Sequence[Relationship]
) -> list[ValidationError]:
    """
    Flag any person holding one relationship type towards more than one person.

    This is deliberately coarse: two children under the same parent are reported too.
    """
    targets: dict[tuple[str, RelationshipType], dict[str, None]] = {}
    for rel in relationships:
        targets.setdefault((rel.person_id, rel.relationship_type), {})[rel.related_person_id] = None

    errors: list[ValidationError] = []
    for (person_id, relationship_type), related in targets.items():
        if len(related) <= 1:
            continue

        person = people_by_id.get(person_id)
        name = person.name if person else "Unknown"
        errors.append(
            ValidationError(
                id=f"duplicate_{person_id}-{relationship_type.value}",
                type=ValidationErrorType.DUPLICATE_RELATIONSHIP,
                severity=Severity.WARNING,
                message=f"{name} has multiple {relationship_type.value} relationships",
                affected_persons=(person_id, *related),
                suggested_action="Review and consolidate duplicate relationships",
            )
        )
    return errors


def check_missing_data(people: Sequence[Person]) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for person in people:
        if not person.birth_date and not person.is_deceased:
            errors.append(
                ValidationError(
                    id=f"missing_birth_{person.id}",
                    type=ValidationErrorType.MISSING_DATA,
                    severity=Severity.INFO,
                    message=f"{person.name} is missing birth date",
                    affected_persons=(person.id,),
                    suggested_action="Add birth date for better relationship validation",
                )
            )

        if person.is_deceased and not person.death_date:
            errors.append(
                ValidationError(
                    id=f"missing_death_{person.id}",
                    type=ValidationErrorType.MISSING_DATA,
                    severity=Severity.INFO,
                    message=f"{person.name} is marked as deceased but missing death date",
                    affected_persons=(person.id,),
                    suggested_action="Add death date or unmark as deceased",
                )
            )
    return errors


def check_spouse_age_gaps(
    people_by_id: dict[str, Person], relationships: Sequence[Relationship]
) -> list[ValidationError]:
    errors: list[ValidationError] = []

    for rel in relationships:
        if rel.relationship_type != RelationshipType.SPOUSE:
            continue

        spouse1 = people_by_id.get(rel.person_id)
        spouse2 = people_by_id.get(rel.related_person_id)
        if spouse1 is None or spouse2 is None:
            continue

        birth1 = parse_date(spouse1.birth_date)
        birth2 = parse_date(spouse2.birth_date)
        if birth1 is None or birth2 is None:
            continue

        years = abs(_years_between(birth1, birth2))
        if years > MAX_SPOUSE_AGE_GAP_YEARS:
            errors.append(
                ValidationError(
                    id=f"age_gap_{rel.id}",
                    type=ValidationErrorType.LOGICAL_ERROR,
                    severity=Severity.WARNING,
                    message=(
                        f"{spouse1.name} and {spouse2.name} have a large age gap "
                        f"({round(years)} years)"
                    ),
                    affected_persons=(spouse1.id, spouse2.id),
                    suggested_action="Verify spouse relationship and birth dates",
                )
            )

    return errors


def validate(people: Sequence[Person], relationships: Sequence[Relationship]) -> list[ValidationError]:
    """
    Validate the family data for:
    - Circular ancestry
    - Impossible or implausible parent ages
    - Duplicate same-type relationships
    - Missing birth/death data
    - Large spousal age gaps

    Dates that are missing or cannot be parsed skip the checks that need them.
    Returns the findings grouped by check.
    """
    people_by_id = {p.id: p for p in people}

    errors: list[ValidationError] = []
    errors.extend(check_circular_references(people, relationships))
    errors.extend(check_parent_ages(people_by_id, relationships))
    errors.extend(check_duplicate_relationships(people_by_id, relationships))
    errors.extend(check_missing_data(people))
    errors.extend(check_spouse_age_gaps(people_by_id, relationships))

    logger.debug("Validation produced %d findings", len(errors))
    return errors
