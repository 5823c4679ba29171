"""Date handling and GEDCOM import utilities."""

import logging
import re
from datetime import date
from pathlib import Path

from ged4py import GedcomReader

from .inference import declare_relationship
from .models import Gender, Person, Relationship, RelationshipType

logger = logging.getLogger(__name__)


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

_QUALIFIER_RE = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
    re.IGNORECASE,
)

# Each pattern names its groups; "month" is either digits or a month name.
_DATE_PATTERNS = [
    # "1839-08-29", "1746-00-00", "1950-05-01T10:00:00"
    re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})(?:[T ].*)?$"),
    # "25 NOV 1954", "11 Aug. 1968", "02 May1838"
    re.compile(r"^(?P<day>\d{1,2})\s+(?P<month>[A-Za-z]+)\.?\s*(?P<year>\d{4})$"),
    # "NOV 1954", "May, 1837"
    re.compile(r"^(?P<month>[A-Za-z]+)\.?,?\s*(?P<year>\d{4})$"),
    # "1698"
    re.compile(r"^(?P<year>\d{4})$"),
    # "01-27-1920", "1/15/1957"
    re.compile(r"^(?P<month>\d{1,2})[-/](?P<day>\d{1,2})[-/](?P<year>\d{4})$"),
    # "04 05 1911"
    re.compile(r"^(?P<month>\d{1,2})\s+(?P<day>\d{1,2})\s+(?P<year>\d{4})$"),
    # "April 17, 1850", "SEPT. 17,1910", "Oct.12,1929"
    re.compile(r"^(?P<month>[A-Za-z]+)\.?\s*(?P<day>\d{1,2}),?\s*(?P<year>\d{4})$"),
]


def _month_number(token: str) -> int | None:
    if token.isdigit():
        return int(token)
    return MONTH_MAP.get(token.upper().rstrip("."))


def parse_date_string(date_str: str | None) -> str | None:
    """
    Normalize a free-form genealogical date into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "1950-05-01"
    - "25 NOV 1954"
    - "ABOUT 1905", "(Abt.  1798)", "(1789?)"
    - "JAN 1905", "(May, 1837)"
    - "(01-27-1920)", "(1/15/1957)", "(04 05 1911)"
    - "(SEPT. 17,1910)", "(April 17, 1850)"

    Missing months or days default to 1; zero months or days ("1746-00-00") do too.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = _QUALIFIER_RE.sub("", s).strip()
    if not s:
        return None

    for pattern in _DATE_PATTERNS:
        match = pattern.match(s)
        if match is None:
            continue

        parts = match.groupdict()
        month = _month_number(parts["month"]) if parts.get("month") else 1
        day = int(parts["day"]) if parts.get("day") else 1
        if month == 0:
            month = 1
        if day == 0:
            day = 1

        if month is not None and 1 <= month <= 12 and 1 <= day <= 31:
            return f"{int(parts['year']):04d}-{month:02d}-{day:02d}"

    return None


def parse_date(date_str: str | None) -> date | None:
    """Parse a date string into a `date`, or None when it is absent or invalid."""
    iso = parse_date_string(date_str)
    if iso is None:
        return None
    try:
        return date.fromisoformat(iso)
    except ValueError:
        # e.g. "31 FEB 1900" survives the pattern match but is not a real day
        return None


# ============================================================================
# GEDCOM import
# ============================================================================

SEX_TO_GENDER = {"M": Gender.MALE, "F": Gender.FEMALE}


def normalize_xref(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I_347421849@' into a person id 'I_347421849'."""
    person_id = xref_id.strip().strip("@")
    if not person_id:
        raise ValueError(f"Empty GEDCOM xref: {xref_id!r}")
    return person_id


def extract_name_parts(indi) -> tuple[str, str | None, str | None]:
    """Extract full name, given name, and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", None, None)

    name_value = name_rec.value

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        given, surname, suffix = name_value
        parts = [p for p in [given, surname, suffix] if p]
        return (" ".join(parts) if parts else "Unknown", given or None, surname or None)

    # Fallback: string format "Given /Surname/"
    full_name = str(name_value).replace("/", "").strip() or "Unknown"
    givn = name_rec.sub_tag("GIVN")
    surn = name_rec.sub_tag("SURN")
    return (full_name, givn.value if givn else None, surn.value if surn else None)


def extract_event_details(indi, tag: str) -> tuple[bool, str | None, str | None]:
    """Return (present, date, place) for an event tag such as BIRT or DEAT."""
    event = indi.sub_tag(tag)
    if event is None:
        return (False, None, None)

    date_rec = event.sub_tag("DATE")
    place_rec = event.sub_tag("PLAC")

    # ged4py may return DateValue objects; keep the GEDCOM text
    date_val = str(date_rec.value) if date_rec and date_rec.value else None
    place_val = str(place_rec.value) if place_rec and place_rec.value else None
    return (True, date_val, place_val)


def extract_gender(indi) -> Gender:
    sex_rec = indi.sub_tag("SEX")
    sex = str(sex_rec.value).upper() if sex_rec and sex_rec.value else ""
    return SEX_TO_GENDER.get(sex, Gender.OTHER)


def person_from_record(indi) -> Person:
    full_name, given_name, surname = extract_name_parts(indi)
    _, birth_date, birth_place = extract_event_details(indi, "BIRT")
    died, death_date, _ = extract_event_details(indi, "DEAT")

    return Person(
        id=normalize_xref(indi.xref_id),
        name=full_name,
        gender=extract_gender(indi),
        first_name=given_name,
        last_name=surname,
        # Keep the normalized form when the GEDCOM text is understood, otherwise the raw text
        birth_date=parse_date_string(birth_date) or birth_date,
        death_date=parse_date_string(death_date) or death_date,
        is_deceased=died,
        birth_place=birth_place,
    )


def _member_id(fam, tag: str) -> str | None:
    member = fam.sub_tag(tag)
    if member is None or not member.xref_id:
        return None
    return normalize_xref(member.xref_id)


def normalize_data(reader: GedcomReader) -> tuple[list[Person], list[Relationship]]:
    """
    Extract people and relationships from parsed GEDCOM data.

    Each family yields a spouse record for the couple and a parent record from each
    parent to each child, every one paired with its reciprocal. Members referenced by a
    family but missing from the individual records become placeholder people.
    """
    people: dict[str, Person] = {}
    relationships: list[Relationship] = []

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue
        person = person_from_record(rec)
        people[person.id] = person

    def ensure_person(person_id: str, role: str) -> None:
        if person_id not in people:
            logger.info("Creating placeholder for %s referenced as %s", person_id, role)
            people[person_id] = Person(
                id=person_id, name=person_id, notes=f"Placeholder created for {role}"
            )

    for fam in reader.records0("FAM"):
        if fam.xref_id is None:
            continue

        husb_id = _member_id(fam, "HUSB")
        wife_id = _member_id(fam, "WIFE")
        child_ids = [normalize_xref(c.xref_id) for c in fam.sub_tags("CHIL") if c.xref_id]

        parents = [pid for pid in (husb_id, wife_id) if pid]
        for pid, role in ((husb_id, "Father"), (wife_id, "Mother")):
            if pid:
                ensure_person(pid, role)
        for child_id in child_ids:
            ensure_person(child_id, "Child")

        if husb_id and wife_id:
            relationships.extend(declare_relationship(husb_id, wife_id, RelationshipType.SPOUSE))

        for child_id in child_ids:
            for parent_id in parents:
                relationships.extend(declare_relationship(parent_id, child_id, RelationshipType.PARENT))

    return list(people.values()), relationships


def load_gedcom(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Read a GEDCOM file into people and relationship records."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"GEDCOM file not found: {filepath}")

    reader = GedcomReader(str(filepath))
    people, relationships = normalize_data(reader)
    logger.info(
        "Loaded %d people and %d relationship records from %s",
        len(people),
        len(relationships),
        filepath,
    )
    return people, relationships
