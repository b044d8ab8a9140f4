"""Data-quality checks for converted person lists."""

import logging

import networkx as nx

from gedgraph.graph import build_graph
from gedgraph.models import Person, ValidationResult

logger = logging.getLogger("gedgraph.validation")


def find_dangling_references(people: list[Person]) -> list[str]:
    """Report every parent, child or spouse id that names no person in the list."""
    errors: list[str] = []
    ids = {p.id for p in people}

    for person in people:
        for kind, related_ids in (
            ("parent", person.parents),
            ("child", person.children),
            ("spouse", person.spouses),
        ):
            for related_id in related_ids:
                if related_id not in ids:
                    errors.append(f"Person {person.id} references non-existent {kind} {related_id}")

    return errors


def _parent_cycle(parent_links: list[tuple[str, str]]) -> list[str] | None:
    try:
        cycle = nx.find_cycle(nx.DiGraph(parent_links))
    except nx.NetworkXNoCycle:
        return None
    return [u for u, _ in cycle]


def check_graph(G: nx.DiGraph) -> list[str]:
    """
    Warnings for implausible data: a person who is their own ancestor, a child
    born before (or less than 12 years after) a parent, and death before birth.
    """
    issues: list[str] = []
    parent_links = [
        (u, v) for u, v, kind in G.edges(data="relationship_type") if kind == "PARENT_OF"
    ]

    cycle = _parent_cycle(parent_links)
    if cycle:
        issues.append(f"Cycle detected in parent-child relationships: {cycle}")

    # Dates are ISO strings, so they compare in calendar order
    for parent_id, child_id in parent_links:
        parent, child = G.nodes[parent_id], G.nodes[child_id]
        born, child_born = parent.get("birth_date"), child.get("birth_date")
        if not born or not child_born:
            continue

        if child_born < born:
            issues.append(
                f"Impossible: {child.get('person_name')} born before parent {parent.get('person_name')}"
            )
        else:
            try:
                gap = int(child_born[:4]) - int(born[:4])
            except (ValueError, IndexError):
                continue
            if gap < 12:
                issues.append(
                    f"Suspicious: {parent.get('person_name')} was less than 12 years "
                    f"old when {child.get('person_name')} was born"
                )

    for node_id, attrs in G.nodes(data=True):
        born, died = attrs.get("birth_date"), attrs.get("death_date")
        if born and died and died < born:
            issues.append(f"Impossible: {attrs.get('person_name', node_id)} died before being born")

    return issues


def validate_people(people: list[Person]) -> ValidationResult:
    """
    Validate a converted person list without modifying it.

    Errors (which make the result invalid) cover an empty list and dangling
    relationship references. Implausible dates and cycles are only warnings.
    """
    errors: list[str] = []
    if not people:
        errors.append("No people found in parsed data")

    errors.extend(find_dangling_references(people))
    warnings = check_graph(build_graph(people)) if people else []

    if errors:
        logger.warning("Validation found %d errors", len(errors))

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
