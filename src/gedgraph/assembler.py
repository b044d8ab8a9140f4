"""Record assembler: folds tokenized GEDCOM lines into individual and family records."""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from gedgraph.models import GedcomLine, ParseResult, RawFamily, RawIndividual
from gedgraph.parsing import (
    clean_pointer,
    read_event,
    read_media,
    read_name,
    read_note,
    tokenize,
)

logger = logging.getLogger("gedgraph.assembler")

# Events kept on the individual besides birth and death
OTHER_EVENT_TAGS = frozenset(
    {"CHR", "BAPM", "BURI", "CREM", "RESI", "EMIG", "IMMI", "NATU", "GRAD", "RETI"}
)

POINTER_RE = re.compile(r"^@[^@]+@$")


class Mode(Enum):
    NONE = "none"
    BUILDING_INDIVIDUAL = "building_individual"
    BUILDING_FAMILY = "building_family"


@dataclass
class AssemblerState:
    """The record currently being built, and the line that started it."""

    mode: Mode = Mode.NONE
    record: RawIndividual | RawFamily | None = None
    start_line: int = 0


# ============================================================================
# Record lifecycle
# ============================================================================


def finalize(state: AssemblerState, result: ParseResult) -> None:
    """Store the in-progress record (if any) into the matching collection."""
    record = state.record
    if record is None:
        return

    if not record.id:
        result.warnings.append(f"Line {state.start_line}: record without identifier skipped")
        return

    collection = result.individuals if state.mode is Mode.BUILDING_INDIVIDUAL else result.families
    if record.id in collection:
        result.warnings.append(
            f"Line {state.start_line}: duplicate identifier {record.id} replaces earlier record"
        )
    collection[record.id] = record


def start_record(line: GedcomLine) -> AssemblerState:
    """Begin a new record for a level-0 line; unknown record types leave no record open."""
    record_id = clean_pointer(line.xref) or clean_pointer(line.value)

    if line.tag == "INDI":
        return AssemblerState(Mode.BUILDING_INDIVIDUAL, RawIndividual(id=record_id), line.line_number)
    if line.tag == "FAM":
        return AssemblerState(Mode.BUILDING_FAMILY, RawFamily(id=record_id), line.line_number)
    return AssemblerState()


# ============================================================================
# Tag handlers
# ============================================================================


def apply_individual_tag(individual: RawIndividual, lines: list[GedcomLine], index: int) -> None:
    line = lines[index]
    tag, value = line.tag, line.value

    if tag == "NAME":
        # First NAME is the primary one; later ones are aliases
        if not individual.name.full:
            individual.name = read_name(lines, index)
    elif tag == "SEX":
        individual.sex = value or None
    elif tag in ("BIRT", "DEAT"):
        event = read_event(lines, index)
        if tag == "BIRT":
            individual.birth_date = event.date or individual.birth_date
            individual.birth_place = event.place or individual.birth_place
        else:
            individual.death_date = event.date or individual.death_date
            individual.death_place = event.place or individual.death_place
    elif tag == "OCCU":
        individual.occupation = value or None
    elif tag == "NOTE":
        if not POINTER_RE.match(value):
            individual.note = read_note(lines, index) or None
    elif tag == "OBJE":
        if individual.photo_url is None:
            individual.photo_url = read_media(lines, index)
    elif tag == "FAMC":
        family_id = clean_pointer(value)
        if family_id:
            individual.famc.append(family_id)
    elif tag == "FAMS":
        family_id = clean_pointer(value)
        if family_id:
            individual.fams.append(family_id)
    elif tag in OTHER_EVENT_TAGS:
        individual.events.append(read_event(lines, index))


def apply_family_tag(family: RawFamily, lines: list[GedcomLine], index: int) -> None:
    line = lines[index]
    tag, value = line.tag, line.value

    if tag == "HUSB":
        family.husband = clean_pointer(value) or None
    elif tag == "WIFE":
        family.wife = clean_pointer(value) or None
    elif tag == "CHIL":
        child_id = clean_pointer(value)
        if child_id:
            family.children.append(child_id)
    elif tag == "MARR":
        event = read_event(lines, index)
        family.marriage_date = event.date or family.marriage_date
        family.marriage_place = event.place or family.marriage_place
    elif tag == "DIV":
        event = read_event(lines, index)
        family.divorce_date = event.date or family.divorce_date


def step(
    state: AssemblerState, lines: list[GedcomLine], index: int, result: ParseResult
) -> AssemblerState:
    """Advance the assembler by one line and return the resulting state."""
    line = lines[index]

    if line.level == 0:
        finalize(state, result)
        return start_record(line)

    if line.level != 1:
        return state

    if state.mode is Mode.BUILDING_INDIVIDUAL:
        apply_individual_tag(state.record, lines, index)
    elif state.mode is Mode.BUILDING_FAMILY:
        apply_family_tag(state.record, lines, index)

    return state


# ============================================================================
# Entry point
# ============================================================================


def parse_gedcom_content(content: str) -> ParseResult:
    """
    Parse GEDCOM text into id-keyed individual and family records.

    Never raises for bad input: a line that cannot be handled is reported in
    ``errors`` as ``"Line <n>: <message>"`` and parsing moves on.
    """
    errors: list[str] = []
    lines = tokenize(content, errors)
    result = ParseResult(
        individuals={},
        families={},
        errors=errors,
        total_lines=len(lines) + len(errors),
    )

    state = AssemblerState()
    for index, line in enumerate(lines):
        try:
            state = step(state, lines, index, result)
        except Exception as e:
            logger.warning("Failed to handle line %d (%s): %s", line.line_number, line.tag, e)
            result.errors.append(f"Line {line.line_number}: {e}")

    finalize(state, result)

    logger.info(
        "Parsed %d individuals and %d families (%d errors, %d warnings)",
        len(result.individuals),
        len(result.families),
        len(result.errors),
        len(result.warnings),
    )
    return result
