"""JSON artifact for the converted person graph."""

import json
import logging
from dataclasses import asdict, fields
from datetime import timezone
from pathlib import Path
from typing import Any

from gedgraph.models import ParseResult, Person

logger = logging.getLogger("gedgraph.artifact")

PERSON_FIELDS = {f.name for f in fields(Person)}


class ArtifactError(ValueError):
    """Raised when a JSON artifact cannot be read back into Person objects."""


def compute_statistics(people: list[Person], total_families: int | None = None) -> dict[str, int]:
    """Counts by gender and by known birth/death dates."""
    stats = {
        "total_people": len(people),
        "male_count": sum(1 for p in people if p.gender == "male"),
        "female_count": sum(1 for p in people if p.gender == "female"),
        "other_count": sum(1 for p in people if p.gender == "other"),
        "with_birth_date": sum(1 for p in people if p.birth_date),
        "with_death_date": sum(1 for p in people if p.death_date),
        "total_spouse_relations": sum(len(p.spouses) for p in people),
        "total_child_relations": sum(len(p.children) for p in people),
        "total_parent_relations": sum(len(p.parents) for p in people),
    }
    if total_families is not None:
        stats["total_families"] = total_families
    return stats


def person_to_dict(person: Person) -> dict[str, Any]:
    return asdict(person)


def person_from_dict(data: dict[str, Any]) -> Person:
    """Rebuild a Person, ignoring unknown keys. Raises ArtifactError if required keys are missing."""
    if not isinstance(data, dict):
        raise ArtifactError(f"Person entry must be an object, got {type(data).__name__}")
    try:
        return Person(**{k: v for k, v in data.items() if k in PERSON_FIELDS})
    except TypeError as e:
        raise ArtifactError(f"Invalid person entry {data.get('id')!r}: {e}") from e


def build_artifact(people: list[Person], parse_result: ParseResult) -> dict[str, Any]:
    """Assemble the JSON-ready document for a converted person list."""
    return {
        "people": [person_to_dict(p) for p in people],
        "statistics": compute_statistics(people, total_families=len(parse_result.families)),
        "parsed_at": parse_result.parsed_at.astimezone(timezone.utc).isoformat(),
        "parse_errors": list(parse_result.errors),
        "parse_warnings": list(parse_result.warnings),
    }


def people_from_artifact(document: dict[str, Any]) -> list[Person]:
    people = document.get("people") if isinstance(document, dict) else None
    if not isinstance(people, list):
        raise ArtifactError("Artifact has no 'people' list")
    return [person_from_dict(entry) for entry in people]


def write_artifact(document: dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
    logger.info("Wrote %d people to %s", len(document.get("people", [])), output_path)


def read_artifact(path: Path) -> list[Person]:
    """Load the people of a previously written artifact."""
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ArtifactError(f"{path} is not valid JSON: {e}") from e
    return people_from_artifact(document)
