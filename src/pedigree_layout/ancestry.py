"""
Ancestry queries used when drawing relationship lines: consanguinity between
partners and co-twin groups among siblings.
"""

import networkx as nx

from pedigree_layout.models import Individual, TwinKind


def get_ancestors(name: str, graph: nx.DiGraph) -> set[str]:
    """
    Ancestors of an individual, including the individual itself.

    ``graph`` should come from ``build_biological_graph`` so the walk stops at
    adopted individuals. The walk is iterative with a visited set, so cyclic
    (invalid) data terminates. Unknown names have only themselves.
    """
    if name not in graph:
        return {name}
    return nx.ancestors(graph, name) | {name}


def common_ancestors(name1: str, name2: str, graph: nx.DiGraph) -> set[str]:
    return get_ancestors(name1, graph) & get_ancestors(name2, graph)


def is_consanguineous(partner1: str, partner2: str, graph: nx.DiGraph) -> bool:
    """
    Check if two partners share ancestry.

    Also true when one partner descends from the other, or for siblings
    modelled as partners: the test is literal shared ancestry, not "cousins".
    """
    return bool(common_ancestors(partner1, partner2, graph))


def co_twins(individual: Individual, individuals: list[Individual], kind: TwinKind) -> list[Individual]:
    """
    Other individuals sharing this one's twin marker of the given kind and both
    parents, in dataset order. The marker alone is not enough: unrelated
    sibships may reuse the same string.
    """
    marker = individual.twin_marker(kind)
    if not marker:
        return []

    return [
        ind
        for ind in individuals
        if ind.name != individual.name
        and ind.twin_marker(kind) == marker
        and ind.mother == individual.mother
        and ind.father == individual.father
    ]


def twin_groups(individuals: list[Individual], kind: TwinKind) -> list[list[Individual]]:
    """Every co-twin group of the given kind, once each, groups and members in dataset order."""
    groups: list[list[Individual]] = []
    seen: set[str] = set()

    for ind in individuals:
        if ind.name in seen:
            continue
        twins = co_twins(ind, individuals, kind)
        if not twins:
            continue
        group = [ind] + twins
        seen.update(member.name for member in group)
        groups.append(group)

    return groups
