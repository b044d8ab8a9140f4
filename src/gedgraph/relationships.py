"""Relationship queries over the canonical Person list."""

import logging
from collections import deque

from gedgraph.models import Person, PersonWithRelations

logger = logging.getLogger("gedgraph.relationships")


# Depth bound for generation-distance searches. Trees deeper than this many
# generations between two people report no connection.
MAX_TRAVERSAL_DEPTH = 10


def index_people(people: list[Person]) -> dict[str, Person]:
    return {p.id: p for p in people}


# ============================================================================
# Lookup
# ============================================================================


def get_person(people: list[Person], person_id: str) -> Person | None:
    return index_people(people).get(person_id)


def get_person_with_relations(people: list[Person], person_id: str) -> PersonWithRelations | None:
    """Return the person together with resolved parent/spouse/child/sibling objects."""
    people_by_id = index_people(people)
    person = people_by_id.get(person_id)
    if person is None:
        return None

    def resolve(ids: list[str]) -> list[Person]:
        return [people_by_id[i] for i in ids if i in people_by_id]

    return PersonWithRelations(
        person=person,
        parents=resolve(person.parents),
        spouses=resolve(person.spouses),
        children=resolve(person.children),
        siblings=resolve(person.siblings),
    )


# ============================================================================
# Closures
# ============================================================================


def _closure(
    people_by_id: dict[str, Person], person_id: str, attribute: str, max_depth: int | None
) -> list[Person]:
    """Breadth-first walk along one relationship attribute, each person reported once."""
    start = people_by_id.get(person_id)
    if start is None:
        return []

    visited = {person_id}
    reached: list[Person] = []
    queue = deque([(start, 0)])

    while queue:
        person, depth = queue.popleft()
        if max_depth is not None and depth >= max_depth:
            continue
        for related_id in getattr(person, attribute):
            if related_id in visited or related_id not in people_by_id:
                continue
            visited.add(related_id)
            related = people_by_id[related_id]
            reached.append(related)
            queue.append((related, depth + 1))

    return reached


def get_ancestors(people: list[Person], person_id: str, max_depth: int | None = None) -> list[Person]:
    """All persons reachable through parent links, nearest generation first."""
    return _closure(index_people(people), person_id, "parents", max_depth)


def get_descendants(people: list[Person], person_id: str, max_depth: int | None = None) -> list[Person]:
    """All persons reachable through child links, nearest generation first."""
    return _closure(index_people(people), person_id, "children", max_depth)


# ============================================================================
# Generation distance
# ============================================================================


def _distance(
    people_by_id: dict[str, Person],
    current_id: str,
    target_id: str,
    visited: set[str],
    depth: int,
    max_depth: int,
) -> int | None:
    if current_id == target_id:
        return 0
    if current_id in visited or depth >= max_depth:
        return None

    person = people_by_id.get(current_id)
    if person is None:
        return None
    visited = visited | {current_id}

    # Each branch searches with its own copy of the path so far
    for child_id in person.children:
        distance = _distance(people_by_id, child_id, target_id, set(visited), depth + 1, max_depth)
        if distance is not None:
            return distance + 1

    for parent_id in person.parents:
        distance = _distance(people_by_id, parent_id, target_id, set(visited), depth + 1, max_depth)
        if distance is not None:
            return distance - 1

    return None


def generation_distance(
    people: list[Person], start_id: str, target_id: str, max_depth: int = MAX_TRAVERSAL_DEPTH
) -> int | None:
    """
    Signed number of parent/child steps from ``start_id`` to ``target_id``.

    Positive when the target is a descendant of the start (parent -> child is +1),
    negative when it is an ancestor, 0 for the same person. Returns None when no
    parent/child path of at most ``max_depth`` steps connects them.
    """
    distance = _distance(index_people(people), start_id, target_id, set(), 0, max_depth)
    if distance is None:
        logger.debug("No path from %s to %s within %d generations", start_id, target_id, max_depth)
    return distance


def generation_level(
    people: list[Person], person_id: str, other_id: str, max_depth: int = MAX_TRAVERSAL_DEPTH
) -> int | None:
    """
    Generation of ``other_id`` as seen from ``person_id``, ancestors counting up.

    This is the convention of the page builder: a parent is at level +1 and a
    child at level -1, so a grandchild is -2. It is the inverse of
    :func:`generation_distance`.
    """
    distance = generation_distance(people, person_id, other_id, max_depth)
    if distance is None:
        return None
    return -distance


def get_people_by_generation(
    people: list[Person], person_id: str, generation_offset: int, max_depth: int = MAX_TRAVERSAL_DEPTH
) -> list[Person]:
    """Everyone whose :func:`generation_level` relative to ``person_id`` equals the offset."""
    if get_person(people, person_id) is None:
        return []
    return [
        p
        for p in people
        if generation_level(people, person_id, p.id, max_depth) == generation_offset
    ]


# ============================================================================
# Filters
# ============================================================================


def search_people_by_name(people: list[Person], query: str) -> list[Person]:
    """Case-insensitive substring search over display, given and family names."""
    query = query.lower()
    return [
        p
        for p in people
        if query in f"{p.display_name} {p.given_name} {p.family_name}".lower()
    ]


def filter_people_by_tag(people: list[Person], tag: str) -> list[Person]:
    """People with a tag containing ``tag`` (case-insensitive)."""
    tag = tag.lower()
    return [p for p in people if any(tag in t.lower() for t in p.tags)]


def filter_people_by_profession(people: list[Person], keyword: str) -> list[Person]:
    """People whose bio, names or tags mention ``keyword`` (case-insensitive)."""
    keyword = keyword.lower()
    results = []
    for p in people:
        haystack = " ".join([p.given_name, p.family_name, p.bio or "", *p.tags]).lower()
        if keyword in haystack:
            results.append(p)
    return results
