"""In-memory cache of the most recently converted person list."""

import logging
from typing import Any

from gedgraph.artifact import compute_statistics
from gedgraph.assembler import parse_gedcom_content
from gedgraph.converter import convert_to_people
from gedgraph.models import Person
from gedgraph.validation import validate_people

logger = logging.getLogger("gedgraph.cache")


class PeopleCache:
    """
    Holds one converted person list so repeated queries skip re-parsing.

    Nothing invalidates the cache on its own: call ``clear()`` when the
    underlying GEDCOM source changes.
    """

    def __init__(self):
        self._people: list[Person] | None = None

    def store(self, people: list[Person]) -> None:
        self._people = list(people)

    def get(self) -> list[Person]:
        """Cached people, or an empty list when nothing has been stored."""
        if self._people is None:
            logger.warning("People data not loaded yet; call store() or parse_and_cache() first")
            return []
        return self._people

    def is_loaded(self) -> bool:
        return bool(self._people)

    def clear(self) -> None:
        self._people = None

    def statistics(self) -> dict[str, int]:
        return compute_statistics(self._people or [])


def parse_and_cache(content: str, cache: PeopleCache) -> dict[str, Any]:
    """Run parse, convert and validate over GEDCOM text and store the people in ``cache``."""
    parse_result = parse_gedcom_content(content)
    people = convert_to_people(parse_result)
    validation = validate_people(people)

    cache.store(people)

    return {
        "success": validation.valid,
        "people": people,
        "errors": parse_result.errors + validation.errors,
        "warnings": parse_result.warnings + validation.warnings,
    }
