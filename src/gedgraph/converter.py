"""Conversion of raw GEDCOM records into the canonical Person list."""

import logging
from dataclasses import replace

from gedgraph.models import ParseResult, Person, RawFamily, RawIndividual, Relationship
from gedgraph.parsing import date_to_iso, format_place

logger = logging.getLogger("gedgraph.converter")


GENDER_MAP = {
    "M": "male",
    "F": "female",
}


# ============================================================================
# Per-individual fields
# ============================================================================


def build_display_name(individual: RawIndividual) -> str:
    """Given and family name, else the full parsed name, else the identifier."""
    parts = [p for p in [individual.name.given, individual.name.family] if p]
    if parts:
        return " ".join(parts)
    return individual.name.full or individual.id


def build_bio(individual: RawIndividual) -> str | None:
    """Note text, with the occupation appended when the note does not mention it."""
    bio = individual.note or ""
    occupation = individual.occupation
    if occupation and occupation not in bio:
        bio = f"{bio}. Occupation: {occupation}" if bio else f"Occupation: {occupation}"
    return bio or None


def find_spouses(individual: RawIndividual, families: dict[str, RawFamily]) -> list[str]:
    spouses: list[str] = []
    for family_id in individual.fams:
        family = families.get(family_id)
        if family is None:
            continue
        if family.husband == individual.id and family.wife:
            spouses.append(family.wife)
        elif family.wife == individual.id and family.husband:
            spouses.append(family.husband)
    return spouses


def find_children(individual: RawIndividual, families: dict[str, RawFamily]) -> list[str]:
    children: list[str] = []
    for family_id in individual.fams:
        family = families.get(family_id)
        if family is not None:
            children.extend(family.children)
    return children


def find_parents(individual: RawIndividual, families: dict[str, RawFamily]) -> list[str]:
    parents: list[str] = []
    for family_id in individual.famc:
        family = families.get(family_id)
        if family is None:
            continue
        if family.husband:
            parents.append(family.husband)
        if family.wife:
            parents.append(family.wife)
    return parents


def find_siblings(individual: RawIndividual, families: dict[str, RawFamily]) -> list[str]:
    """Every other child of the families this individual is a child of."""
    siblings: dict[str, None] = {}
    for family_id in individual.famc:
        family = families.get(family_id)
        if family is None:
            continue
        for child_id in family.children:
            if child_id != individual.id:
                siblings[child_id] = None
    return list(siblings)


def convert_individual(individual: RawIndividual, families: dict[str, RawFamily]) -> Person:
    """Convert one raw individual; siblings are filled in by a later pass."""
    tags: list[str] = []
    if individual.occupation:
        tags.append(individual.occupation)
    tags.extend(event.type for event in individual.events)

    return Person(
        id=individual.id,
        given_name=individual.name.given or "",
        family_name=individual.name.family or "",
        display_name=build_display_name(individual),
        birth_date=date_to_iso(individual.birth_date),
        death_date=date_to_iso(individual.death_date),
        birth_place=format_place(individual.birth_place),
        death_place=format_place(individual.death_place),
        bio=build_bio(individual),
        gender=GENDER_MAP.get((individual.sex or "").strip().upper(), "other"),
        parents=find_parents(individual, families),
        spouses=find_spouses(individual, families),
        children=find_children(individual, families),
        siblings=[],
        photo_url=individual.photo_url,
        tags=tags,
    )


# ============================================================================
# Whole-graph passes
# ============================================================================


def attach_siblings(people: list[Person], parse_result: ParseResult) -> list[Person]:
    result: list[Person] = []
    for person in people:
        individual = parse_result.individuals[person.id]
        result.append(replace(person, siblings=find_siblings(individual, parse_result.families)))
    return result


def drop_dangling_references(people: list[Person]) -> list[Person]:
    """Keep only relationship ids that name a person in the list, without duplicates."""
    known_ids = {p.id for p in people}

    def keep(ids: list[str]) -> list[str]:
        return [i for i in dict.fromkeys(ids) if i in known_ids]

    cleaned: list[Person] = []
    dropped = 0
    for person in people:
        updated = replace(
            person,
            parents=keep(person.parents),
            spouses=keep(person.spouses),
            children=keep(person.children),
            siblings=keep(person.siblings),
        )
        dropped += sum(
            len(set(getattr(person, attr))) - len(getattr(updated, attr))
            for attr in ("parents", "spouses", "children", "siblings")
        )
        cleaned.append(updated)

    if dropped:
        logger.info("Dropped %d references to unknown persons", dropped)
    return cleaned


def convert_to_people(parse_result: ParseResult) -> list[Person]:
    """
    Convert parsed GEDCOM records into Person objects.

    Runs three passes: one Person per raw individual, sibling derivation from
    shared parent families, then removal of references to persons that do not
    exist. Unknown references are dropped rather than reported; use
    ``validation.validate_people`` for diagnostics.
    """
    families = parse_result.families

    people = [
        convert_individual(individual, families)
        for individual in parse_result.individuals.values()
    ]
    people = attach_siblings(people, parse_result)
    return drop_dangling_references(people)


def extract_relationships(people: list[Person]) -> list[Relationship]:
    """Flatten a Person list into PARENT_OF and SPOUSE_OF edges (one per pair)."""
    relationships: list[Relationship] = []
    seen_spouses: set[tuple[str, str]] = set()

    for person in people:
        for child_id in person.children:
            relationships.append(
                Relationship(
                    person1_id=person.id,
                    person2_id=child_id,
                    relationship_type="PARENT_OF",
                )
            )
        for spouse_id in person.spouses:
            pair = tuple(sorted([person.id, spouse_id]))
            if pair in seen_spouses:
                continue
            seen_spouses.add(pair)
            relationships.append(
                Relationship(
                    person1_id=person.id,
                    person2_id=spouse_id,
                    relationship_type="SPOUSE_OF",
                )
            )

    return relationships
