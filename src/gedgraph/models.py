"""Data classes for parsed GEDCOM records and the canonical person graph."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


# ============================================================================
# Tokens and field values
# ============================================================================


@dataclass(frozen=True)
class GedcomLine:
    line_number: int  # 1-based, blank lines counted
    level: int
    xref: str | None
    tag: str
    value: str
    after_unrecognized: bool = False  # an unrecognized line was skipped just before this one


@dataclass
class StructuredName:
    full: str = ""
    given: str = ""
    family: str = ""
    prefix: str | None = None
    suffix: str | None = None


@dataclass
class StructuredDate:
    raw: str
    year: int | None = None
    month: int | None = None
    day: int | None = None
    is_estimated: bool = False


@dataclass
class StructuredPlace:
    raw: str
    parts: list[str] = field(default_factory=list)
    city: str | None = None
    region: str | None = None
    country: str | None = None


@dataclass
class RawEvent:
    type: str  # BIRT, DEAT, MARR, BURI, ...
    date: StructuredDate | None = None
    place: StructuredPlace | None = None


# ============================================================================
# Raw records (Record Assembler output)
# ============================================================================


@dataclass
class RawIndividual:
    id: str
    name: StructuredName = field(default_factory=StructuredName)
    sex: str | None = None
    birth_date: StructuredDate | None = None
    birth_place: StructuredPlace | None = None
    death_date: StructuredDate | None = None
    death_place: StructuredPlace | None = None
    occupation: str | None = None
    note: str | None = None
    photo_url: str | None = None
    famc: list[str] = field(default_factory=list)  # families as child
    fams: list[str] = field(default_factory=list)  # families as spouse
    events: list[RawEvent] = field(default_factory=list)


@dataclass
class RawFamily:
    id: str
    husband: str | None = None
    wife: str | None = None
    children: list[str] = field(default_factory=list)
    marriage_date: StructuredDate | None = None
    marriage_place: StructuredPlace | None = None
    divorce_date: StructuredDate | None = None


@dataclass
class ParseResult:
    individuals: dict[str, RawIndividual]
    families: dict[str, RawFamily]
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_lines: int = 0
    parsed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ============================================================================
# Canonical person graph
# ============================================================================


@dataclass(frozen=True)
class Person:
    id: str
    given_name: str
    family_name: str
    display_name: str
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    death_date: str | None = None  # ISO format YYYY-MM-DD or None
    birth_place: str | None = None
    death_place: str | None = None
    bio: str | None = None
    gender: str = "other"  # male, female, other
    parents: list[str] = field(default_factory=list)
    spouses: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    siblings: list[str] = field(default_factory=list)
    photo_url: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class Relationship:
    person1_id: str
    person2_id: str
    relationship_type: str  # PARENT_OF, SPOUSE_OF


@dataclass
class PersonWithRelations:
    person: Person
    parents: list[Person]
    spouses: list[Person]
    children: list[Person]
    siblings: list[Person]


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str]
    warnings: list[str] = field(default_factory=list)
