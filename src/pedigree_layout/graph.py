"""NetworkX graph views of a pedigree."""

from collections.abc import Iterable

import networkx as nx

from pedigree_layout.models import Individual, Partnership


def _parent_edges(ind: Individual) -> list[tuple[str, str]]:
    edges = []
    if ind.mother is not None:
        edges.append((ind.mother, "mother"))
    if ind.father is not None:
        edges.append((ind.father, "father"))
    return edges


def build_parent_graph(individuals: Iterable[Individual], biological: bool = False) -> nx.DiGraph:
    """
    Build a directed graph with one node per individual and PARENT_OF edges
    pointing from parent to child.

    Args:
        individuals: The dataset, in order. Edge insertion follows dataset order,
            so ``G.successors(parent)`` yields children in dataset order.
        biological: If True, skip the parent edges of individuals marked
            ``noparents`` (adopted), so ancestry walks stop at them.

    Returns:
        A DiGraph. Parent references to individuals missing from the dataset are
        dropped rather than creating placeholder nodes.
    """
    individuals = list(individuals)
    G = nx.DiGraph()

    # Note: use 'person_name' for the display label to avoid conflict with pydot
    for ind in individuals:
        G.add_node(
            ind.name,
            person_name=ind.display_name or ind.name,
            sex=ind.sex,
            node_type="person",
        )

    for ind in individuals:
        if biological and ind.noparents:
            continue
        for parent, role in _parent_edges(ind):
            if parent not in G:
                continue
            G.add_edge(parent, ind.name, relationship_type="PARENT_OF", role=role)

    return G


def build_biological_graph(individuals: Iterable[Individual]) -> nx.DiGraph:
    """Parent graph truncated at adopted individuals, used for ancestry queries."""
    return build_parent_graph(individuals, biological=True)


def build_union_graph(
    individuals: Iterable[Individual], partnerships: list[Partnership]
) -> nx.DiGraph:
    """
    Build a graph using the union-node model.

    Each partnership becomes a "family node" that both partners point to and
    that points to each child. Children with a single recorded parent hang
    from a single-parent family node.

    Args:
        individuals: The dataset
        partnerships: Partnerships built from the same dataset

    Returns:
        A new graph with person and family nodes
    """
    individuals = list(individuals)
    H = nx.DiGraph()

    for ind in individuals:
        H.add_node(
            ind.name,
            node_type="person",
            person_name=ind.display_name or ind.name,
            sex=ind.sex,
        )

    for p in partnerships:
        a, b = p.key
        fam_id = f"FAM_{a}_{b}"
        H.add_node(fam_id, node_type="family", spouses=p.partners)
        for partner in p.partners:
            if partner in H:
                H.add_edge(partner, fam_id, edge_type="spouse_to_family")
        for child in p.children:
            H.add_edge(fam_id, child, edge_type="family_to_child")

    # Single-parent families
    for ind in individuals:
        parents = [parent for parent, _ in _parent_edges(ind)]
        if len(parents) != 1 or parents[0] not in H:
            continue
        fam_id = f"FAM_{parents[0]}"
        if fam_id not in H:
            H.add_node(fam_id, node_type="family", spouses=(parents[0],))
            H.add_edge(parents[0], fam_id, edge_type="spouse_to_family")
        H.add_edge(fam_id, ind.name, edge_type="family_to_child")

    return H
