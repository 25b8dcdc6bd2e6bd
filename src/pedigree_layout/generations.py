"""Generation (depth) assignment from mother/father links."""

import logging
from collections import deque

import networkx as nx

from pedigree_layout.graph import build_parent_graph
from pedigree_layout.models import ChildOf, Founder, Individual

logger = logging.getLogger(__name__)


def assign_generations(individuals: list[Individual], max_passes: int | None = None) -> dict[str, int]:
    """
    Compute a generation index for every individual, 0 being the topmost row.

    The first pass is a breadth-first walk from the founders. A child is queued
    once every parent it references has a generation, at one below the deeper
    parent; a missing parent reference counts as the known parent's depth.
    Anyone the walk never reaches is put in generation 0.

    The walk is order-sensitive when someone is both a partner (reachable early)
    and a child of a deeper lineage (reachable late), so a correction pass then
    raises parents to sit directly above their children and pushes children
    below their parents, repeating until nothing moves.

    Some valid pedigrees have no such arrangement: a union between a parent and
    their own child, or between an uncle and his niece, asks for partners on
    one row and for one partner above the other. Those get a single correction
    pass instead, which puts each child's parents directly above it without
    propagating further. Finally, empty generation numbers are closed up.

    Args:
        individuals: The dataset. Assumed validated; invalid or cyclic input
            still gets a total map, just not a meaningful one.
        max_passes: Cap on correction rounds (default: number of individuals + 1)

    Returns:
        Mapping of individual name to generation
    """
    by_name = {ind.name: ind for ind in individuals}
    G = build_parent_graph(individuals)
    generations: dict[str, int] = {}

    queue: deque[tuple[str, int]] = deque(
        (ind.name, 0) for ind in individuals if isinstance(ind.lineage, Founder)
    )
    while queue:
        name, gen = queue.popleft()
        if name in generations:
            continue
        generations[name] = gen

        for child_name in G.successors(name):
            if child_name in generations:
                continue
            child = by_name[child_name]
            mother_gen = generations.get(child.mother) if child.mother is not None else gen
            father_gen = generations.get(child.father) if child.father is not None else gen
            if mother_gen is not None and father_gen is not None:
                queue.append((child_name, max(mother_gen, father_gen) + 1))

    unreached = [ind.name for ind in individuals if ind.name not in generations]
    for name in unreached:
        generations[name] = 0
    if unreached:
        logger.debug("%d individuals not reached from founders, placed in generation 0", len(unreached))

    if _generations_consistent(individuals, generations):
        _correct_generations(individuals, generations, max_passes or len(individuals) + 1)
    else:
        logger.info("Parent and partner rows conflict (consanguineous union); using a single correction pass")
        _align_parents_once(individuals, generations)
    return _close_gaps(generations)


def _generations_consistent(individuals: list[Individual], generations: dict[str, int]) -> bool:
    """
    Whether every child can sit one row below both of its parents.

    Each rule is a difference constraint between two rows: ``child >= parent + 1``
    for every known parent, and ``parent >= child - 1`` when both parents are
    known. They can all hold unless the constraint graph has a positive cycle,
    found here as a negative cycle with the weights negated.
    """
    C = nx.DiGraph()
    for ind in individuals:
        lineage = ind.lineage
        if not isinstance(lineage, ChildOf):
            continue
        known = [p for p in lineage.parents if p in generations]
        for parent in known:
            C.add_edge(parent, ind.name, weight=-1)
        if len(known) == 2:
            for parent in known:
                C.add_edge(ind.name, parent, weight=1)

    if C.number_of_nodes() == 0:
        return True
    return not nx.negative_edge_cycle(C, weight="weight")


def _align_parents_once(individuals: list[Individual], generations: dict[str, int]) -> None:
    for ind in individuals:
        if ind.mother is None or ind.father is None:
            continue
        if ind.mother not in generations or ind.father not in generations:
            continue
        parent_gen = generations[ind.name] - 1
        for parent in (ind.mother, ind.father):
            if generations[parent] < parent_gen:
                generations[parent] = parent_gen


def _close_gaps(generations: dict[str, int]) -> dict[str, int]:
    """Renumber generations 0..n-1, keeping their order."""
    index = {gen: i for i, gen in enumerate(sorted(set(generations.values())))}
    return {name: index[gen] for name, gen in generations.items()}


def _correct_generations(individuals: list[Individual], generations: dict[str, int], max_passes: int) -> None:
    for round_no in range(max_passes):
        changed = False
        for ind in individuals:
            lineage = ind.lineage
            if not isinstance(lineage, ChildOf):
                continue
            known = [p for p in lineage.parents if p in generations]
            if not known:
                continue

            child_gen = generations[ind.name]
            floor = max(generations[p] for p in known) + 1
            if child_gen < floor:
                generations[ind.name] = child_gen = floor
                changed = True

            # Partners must share a row: both sit directly above the child
            if lineage.has_both_parents and len(known) == 2:
                parent_gen = child_gen - 1
                for parent in known:
                    if generations[parent] < parent_gen:
                        generations[parent] = parent_gen
                        changed = True
        if not changed:
            logger.debug("Generation correction settled after %d rounds", round_no + 1)
            return

    logger.warning(
        "Generation correction did not settle after %d rounds; the parent graph is cyclic "
        "or mixes generations irreconcilably",
        max_passes,
    )


def group_by_generation(
    individuals: list[Individual], generations: dict[str, int]
) -> dict[int, list[Individual]]:
    """Rows of individuals keyed by generation (ascending), each in dataset order."""
    rows: dict[int, list[Individual]] = {}
    for ind in individuals:
        rows.setdefault(generations.get(ind.name, 0), []).append(ind)
    return dict(sorted(rows.items()))
