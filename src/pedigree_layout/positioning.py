"""
Coordinate assignment.

Positions are built by a pipeline of passes. Each pass takes a position map and
returns a new one; no pass mutates its input, so every stage can be inspected
and tested on its own:

    initial_positions -> center_children -> enforce_min_spacing
        -> align_single_parents -> enforce_min_spacing

The final spacing pass guarantees that, within every generation row, sorted
neighbours are at least ``options.min_node_spacing`` apart.
"""

import logging
import math
from dataclasses import replace

from pedigree_layout.generations import group_by_generation
from pedigree_layout.models import Individual, LayoutOptions, NodePosition, Partnership, Sex
from pedigree_layout.partnerships import partnerships_of

logger = logging.getLogger(__name__)

Positions = dict[str, NodePosition]


# ============================================================================
# Canvas and row ordering
# ============================================================================


def layout_canvas(rows: dict[int, list[Individual]], options: LayoutOptions) -> tuple[float, float, float]:
    """
    Size the canvas for a set of generation rows.

    Returns:
        (effective_width, effective_height, vertical_spacing). The canvas only
        ever grows past the configured size: the widest row needs
        ``2 * padding + row_size * min_node_spacing``, and generations are never
        packed closer than ``options.generation_spacing_floor``.
    """
    padding = options.padding
    if not rows:
        return float(options.width), float(options.height), 0.0

    num_generations = max(rows) + 1
    vertical_spacing = (options.height - padding * 2) / max(num_generations - 1, 1)
    vertical_spacing = max(vertical_spacing, options.generation_spacing_floor)
    required_height = padding * 2 + (num_generations - 1) * vertical_spacing

    max_row_size = max(len(row) for row in rows.values())
    required_width = padding * 2 + max_row_size * options.min_node_spacing

    return (
        max(float(options.width), required_width),
        max(float(options.height), required_height),
        vertical_spacing,
    )


def order_row(row: list[Individual], partnerships: list[Partnership]) -> list[Individual]:
    """
    Order a generation row for placement.

    Dataset order is kept, except that an individual's first partner still
    waiting in the same row is pulled in next to them, male first.
    """
    by_name = {ind.name: ind for ind in row}
    ordered: list[Individual] = []
    used: set[str] = set()

    for ind in row:
        if ind.name in used:
            continue

        pair = next(
            (
                p
                for p in partnerships_of(ind.name, partnerships)
                if p.partner_of(ind.name) in by_name
                and p.partner_of(ind.name) not in used
                and p.partner_of(ind.name) != ind.name
            ),
            None,
        )
        if pair is None:
            ordered.append(ind)
            used.add(ind.name)
            continue

        first, second = by_name[pair.partner_a], by_name[pair.partner_b]
        if first.sex != Sex.MALE.value:
            first, second = second, first
        for member in (first, second):
            ordered.append(member)
            used.add(member.name)

    return ordered


# ============================================================================
# Passes
# ============================================================================


def initial_positions(
    rows: dict[int, list[Individual]],
    partnerships: list[Partnership],
    options: LayoutOptions,
) -> Positions:
    """Spread each row evenly across the canvas, centred, never tighter than the minimum spacing."""
    width, _, vertical_spacing = layout_canvas(rows, options)
    padding = options.padding
    positions: Positions = {}

    for gen, row in rows.items():
        y = padding + gen * vertical_spacing
        ordered = order_row(row, partnerships)

        even_spacing = (width - padding * 2) / max(len(ordered), 1)
        spacing = max(options.min_node_spacing, even_spacing)
        start_x = (width - (len(ordered) - 1) * spacing) / 2

        for idx, ind in enumerate(ordered):
            positions[ind.name] = NodePosition(individual=ind, x=start_x + idx * spacing, y=y, generation=gen)

    return positions


def center_children(positions: Positions, partnerships: list[Partnership], pull: float = 0.3) -> Positions:
    """
    Pull each partnership's children towards the midpoint of the parents.

    Only a fraction (``pull``) of the offset is applied: a child of one parent
    with several partners is pulled by more than one partnership.
    """
    result = dict(positions)

    for partnership in partnerships:
        p1 = result.get(partnership.partner_a)
        p2 = result.get(partnership.partner_b)
        if p1 is None or p2 is None:
            continue

        children = [result[c] for c in partnership.children if c in result]
        if not children:
            continue

        parent_center = (p1.x + p2.x) / 2
        children_center = sum(c.x for c in children) / len(children)
        shift = (parent_center - children_center) * pull
        for child in children:
            result[child.name] = replace(child, x=child.x + shift)

    return result


def _pushed_right(left: float, min_spacing: float) -> float:
    """Smallest x whose measured gap from ``left`` is at least ``min_spacing``."""
    x = left + min_spacing
    # left + min_spacing can round down by an ulp
    while x - left < min_spacing:
        x = math.nextafter(x, math.inf)
    return x


def enforce_min_spacing(positions: Positions, min_spacing: float, max_passes: int | None = None) -> Positions:
    """
    Push nodes right until every row keeps ``min_spacing`` between sorted neighbours.

    Each round sorts the row by x and moves any node that is too close to its
    left neighbour to ``neighbour.x + min_spacing`` (rounded up if needed). Nodes only ever
    move right and each round leaves the row ordered with valid gaps, so the
    default cap of one round per node in the row is never reached in practice.

    Args:
        positions: Current positions
        min_spacing: Minimum horizontal distance between neighbours in a row
        max_passes: Cap on rounds per row (default: row size)

    Returns:
        New positions; individuals that did not move keep their NodePosition.
    """
    rows: dict[int, list[str]] = {}
    for name, pos in positions.items():
        rows.setdefault(pos.generation, []).append(name)

    result = dict(positions)
    for gen, names in rows.items():
        if len(names) < 2:
            continue

        xs = {name: positions[name].x for name in names}
        limit = max_passes if max_passes is not None else len(names)
        for _ in range(limit):
            names.sort(key=lambda n: xs[n])
            moved = False
            for prev, curr in zip(names, names[1:]):
                if xs[curr] - xs[prev] < min_spacing:
                    xs[curr] = _pushed_right(xs[prev], min_spacing)
                    moved = True
            if not moved:
                break

        for name in names:
            if xs[name] != positions[name].x:
                result[name] = replace(positions[name], x=xs[name])

    return result


def align_single_parents(
    positions: Positions, individuals: list[Individual], partnerships: list[Partnership]
) -> Positions:
    """
    Place lone parents directly above their children.

    A lone parent is someone in no partnership who is the only recorded parent
    of at least one child. Deeper generations go first so chains of single
    links line up all the way to the top.
    """
    partnered = {name for p in partnerships for name in p.partners}
    children_of: dict[str, list[str]] = {}
    for ind in individuals:
        parents = [p for p in (ind.mother, ind.father) if p is not None]
        if len(parents) != 1 or ind.name not in positions:
            continue
        parent = parents[0]
        if parent in partnered or parent not in positions or parent == ind.name:
            continue
        children_of.setdefault(parent, []).append(ind.name)

    result = dict(positions)
    for parent in sorted(children_of, key=lambda n: positions[n].generation, reverse=True):
        child_xs = [result[c].x for c in children_of[parent]]
        result[parent] = replace(result[parent], x=sum(child_xs) / len(child_xs))

    return result


# ============================================================================
# Pipeline
# ============================================================================


def position_individuals(
    individuals: list[Individual],
    generations: dict[str, int],
    partnerships: list[Partnership],
    options: LayoutOptions | None = None,
) -> Positions:
    """
    Assign (x, y) to every individual.

    Args:
        individuals: The dataset, in order
        generations: Output of ``assign_generations``
        partnerships: Output of ``build_partnerships``
        options: Canvas and spacing options (defaults if omitted)

    Returns:
        Mapping of individual name to NodePosition. Never raises: an empty
        dataset gives an empty map and a single individual sits centred.
    """
    options = options or LayoutOptions()
    if not individuals:
        return {}

    rows = group_by_generation(individuals, generations)
    min_spacing = options.min_node_spacing

    positions = initial_positions(rows, partnerships, options)
    positions = center_children(positions, partnerships, options.centering_pull)
    positions = enforce_min_spacing(positions, min_spacing, options.spacing_passes)
    positions = align_single_parents(positions, individuals, partnerships)
    positions = enforce_min_spacing(positions, min_spacing, options.spacing_passes)

    logger.debug("Positioned %d individuals in %d rows", len(positions), len(rows))
    return positions
