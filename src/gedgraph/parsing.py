"""GEDCOM line tokenizing and field interpreters (names, dates, places, events)."""

import logging
import re

from gedgraph.models import (
    GedcomLine,
    RawEvent,
    StructuredDate,
    StructuredName,
    StructuredPlace,
)

logger = logging.getLogger("gedgraph.parsing")


# Every GEDCOM line: LEVEL [@XREF@] TAG [VALUE]
LINE_RE = re.compile(
    r"^(?P<level>\d+)\s+(?:(?P<xref>@[^@]+@)\s+)?(?P<tag>\w+)(?:\s+(?P<value>.*))?$"
)

# "Given Names /Surname/"
NAME_RE = re.compile(r"^([^/]*)\s*/([^/]+)/?$")

YEAR_RE = re.compile(r"^\d{4}$")
DAY_RE = re.compile(r"^\d{1,2}$")

# Month abbreviations, matched as a prefix of the upper-cased token
MONTH_MAP = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

APPROXIMATION_MARKERS = ("ABT", "EST")

# Number of lines (event line included) inspected for DATE/PLAC sub-records
EVENT_LOOKAHEAD_WINDOW = 10


# ============================================================================
# Line Tokenizer
# ============================================================================


def tokenize(content: str, errors: list[str] | None = None) -> list[GedcomLine]:
    """
    Split GEDCOM text into decomposed lines.

    Blank lines are dropped. Lines that do not look like ``LEVEL [@ID@] TAG [VALUE]``
    are skipped; when ``errors`` is given, a ``"Line <n>: ..."`` entry is appended
    for each of them, and the next decomposed line is marked
    ``after_unrecognized``. Line numbers refer to the original text.
    """
    if content.startswith("\ufeff"):
        content = content[1:]

    lines: list[GedcomLine] = []
    skipped = False
    for line_number, raw in enumerate(content.split("\n"), start=1):
        line = raw.strip()
        if not line:
            continue

        match = LINE_RE.match(line)
        if not match:
            logger.debug("Skipping unrecognized line %d: %r", line_number, line)
            if errors is not None:
                errors.append(f"Line {line_number}: Unrecognized line format: {line!r}")
            skipped = True
            continue

        lines.append(
            GedcomLine(
                line_number=line_number,
                level=int(match.group("level")),
                xref=match.group("xref"),
                tag=match.group("tag"),
                value=(match.group("value") or "").strip(),
                after_unrecognized=skipped,
            )
        )
        skipped = False

    return lines


def clean_pointer(value: str | None) -> str:
    """Strip '@' delimiters and spaces from a cross-reference like '@I1@'."""
    if not value:
        return ""
    return re.sub(r"[@ ]", "", value)


# ============================================================================
# Field Interpreters
# ============================================================================


def parse_name(value: str) -> StructuredName:
    """Parse a NAME value of the form "Given Names /Surname/"."""
    full = value.replace("/", "").strip()

    match = NAME_RE.match(value.strip())
    if match:
        return StructuredName(full=full, given=match.group(1).strip(), family=match.group(2).strip())

    # No slashes: last word is the surname
    parts = full.split()
    if len(parts) > 1:
        return StructuredName(full=full, given=" ".join(parts[:-1]), family=parts[-1])
    return StructuredName(full=full, given="", family=full)


def _month_from_token(token: str) -> int | None:
    upper = token.upper()
    for abbreviation, month in MONTH_MAP.items():
        if upper.startswith(abbreviation):
            return month
    return None


def parse_date(value: str) -> StructuredDate:
    """
    Parse a GEDCOM date such as "10 MAY 1760", "MAY 1760", "1760" or "ABT 1760".

    Any of year, month and day may be missing. A day-like token is only
    accepted once a month has been seen; one that precedes its month is kept
    as a candidate until the month turns up, so "10 1760" yields no day.
    """
    result = StructuredDate(raw=value)
    text = value.strip()

    if text[:3].upper() in APPROXIMATION_MARKERS:
        result.is_estimated = True
        text = text[3:].strip()

    pending_day: int | None = None
    for token in text.split():
        month = _month_from_token(token)
        if month:
            result.month = month
            if pending_day is not None and result.day is None:
                result.day = pending_day
            continue

        if YEAR_RE.match(token):
            result.year = int(token)
        elif DAY_RE.match(token):
            day = int(token)
            if not 1 <= day <= 31:
                continue
            if result.month:
                result.day = day
            elif pending_day is None:
                pending_day = day

    return result


def parse_place(value: str) -> StructuredPlace:
    """Parse a comma-separated PLAC value ("City, Region, Country")."""
    parts = [part.strip() for part in value.split(",")]
    return StructuredPlace(
        raw=value,
        parts=parts,
        city=parts[0] if len(parts) > 0 else None,
        region=parts[1] if len(parts) > 1 else None,
        country=parts[2] if len(parts) > 2 else None,
    )


def date_to_iso(date: StructuredDate | None) -> str | None:
    """Convert a parsed date to ISO format (YYYY-MM-DD); missing month/day become 01."""
    if date is None or not date.year:
        return None
    return f"{date.year:04d}-{(date.month or 1):02d}-{(date.day or 1):02d}"


def format_place(place: StructuredPlace | None) -> str | None:
    """Format a place for display."""
    if place is None:
        return None
    return ", ".join(place.parts)


# ============================================================================
# Sub-record lookahead
# ============================================================================


def iter_sub_records(lines: list[GedcomLine], index: int, window: int | None = None):
    """
    Yield the direct children (level + 1) of ``lines[index]``.

    Scanning stops at the first line whose level is not deeper than the parent,
    at an unrecognized line (reported by the tokenizer and dropped), or after
    ``window`` lines (the parent line counts) when a window is given.
    """
    base_level = lines[index].level
    end = len(lines) if window is None else min(len(lines), index + window)

    for i in range(index + 1, end):
        line = lines[i]
        if line.level <= base_level or line.after_unrecognized:
            break
        if line.level == base_level + 1:
            yield line


def read_event(lines: list[GedcomLine], index: int) -> RawEvent:
    """Read an event (BIRT, DEAT, MARR, ...) and its first DATE and PLAC sub-records."""
    event = RawEvent(type=lines[index].tag)

    for sub in iter_sub_records(lines, index, EVENT_LOOKAHEAD_WINDOW):
        if sub.tag == "DATE" and event.date is None and sub.value:
            event.date = parse_date(sub.value)
        elif sub.tag == "PLAC" and event.place is None and sub.value:
            event.place = parse_place(sub.value)

    return event


def read_name(lines: list[GedcomLine], index: int) -> StructuredName:
    """Read a NAME line, letting GIVN/SURN/NPFX/NSFX sub-records refine it."""
    name = parse_name(lines[index].value)

    for sub in iter_sub_records(lines, index, EVENT_LOOKAHEAD_WINDOW):
        if not sub.value:
            continue
        if sub.tag == "GIVN":
            name.given = sub.value
        elif sub.tag == "SURN":
            name.family = sub.value
        elif sub.tag == "NPFX":
            name.prefix = sub.value
        elif sub.tag == "NSFX":
            name.suffix = sub.value

    return name


def read_note(lines: list[GedcomLine], index: int) -> str:
    """Read a NOTE value including its CONT (new line) and CONC (joined) continuations."""
    text = lines[index].value

    for sub in iter_sub_records(lines, index):
        if sub.tag == "CONT":
            text += "\n" + sub.value
        elif sub.tag == "CONC":
            text += sub.value

    return text


def read_media(lines: list[GedcomLine], index: int) -> str | None:
    """Return the URL of an OBJE reference, given inline or in a FILE sub-record."""
    value = lines[index].value
    if value.startswith("http"):
        return value

    for sub in iter_sub_records(lines, index, EVENT_LOOKAHEAD_WINDOW):
        if sub.tag == "FILE" and sub.value.startswith("http"):
            return sub.value

    return None
