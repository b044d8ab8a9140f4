"""NetworkX view of the canonical person list."""

import networkx as nx

from gedgraph.converter import extract_relationships
from gedgraph.models import Person


def build_graph(people: list[Person]) -> nx.DiGraph:
    """
    Build a directed graph with one node per person.

    PARENT_OF edges point from parent to child; SPOUSE_OF edges are added once
    per couple, in the direction they were first seen.
    """
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to keep node attributes unambiguous
    for p in people:
        G.add_node(
            p.id,
            person_name=p.display_name,
            gender=p.gender,
            birth_date=p.birth_date,
            death_date=p.death_date,
            given_name=p.given_name,
            family_name=p.family_name,
        )

    for r in extract_relationships(people):
        G.add_edge(r.person1_id, r.person2_id, relationship_type=r.relationship_type)

    return G


def get_ego_subgraph(G: nx.DiGraph, center_id: str, radius: int = 2) -> nx.DiGraph:
    """
    Extract the people within ``radius`` relationship steps of ``center_id``.

    Parent, child and spouse edges all count as one step, in either direction.
    """
    if center_id not in G:
        raise ValueError(f"Person ID {center_id} not found in graph")

    undirected = G.to_undirected()
    ego = nx.ego_graph(undirected, center_id, radius=radius)

    return G.subgraph(ego.nodes()).copy()
