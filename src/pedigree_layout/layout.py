"""Render entry point: validate a dataset, then run the layout pipeline."""

import logging
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from pedigree_layout import ancestry
from pedigree_layout.errors import ValidationError
from pedigree_layout.generations import assign_generations, group_by_generation
from pedigree_layout.graph import build_biological_graph
from pedigree_layout.models import Individual, LayoutOptions, NodePosition, Partnership, TwinKind
from pedigree_layout.partnerships import build_partnerships
from pedigree_layout.positioning import layout_canvas, position_individuals
from pedigree_layout.validation import ensure_valid

logger = logging.getLogger(__name__)


@dataclass
class PedigreeLayout:
    """Everything a drawing layer needs from one layout run."""

    individuals: list[Individual]
    generations: dict[str, int]
    partnerships: list[Partnership]
    positions: dict[str, NodePosition]
    width: float
    height: float
    options: LayoutOptions
    biological_graph: nx.DiGraph = field(repr=False)

    @property
    def min_node_spacing(self) -> float:
        return self.options.min_node_spacing

    @property
    def generation_count(self) -> int:
        return len(set(self.generations.values()))

    def individual(self, name: str) -> Individual:
        return self.positions[name].individual

    def rows(self) -> dict[int, list[NodePosition]]:
        """Positions per generation, each row sorted left to right."""
        rows: dict[int, list[NodePosition]] = {}
        for pos in self.positions.values():
            rows.setdefault(pos.generation, []).append(pos)
        return {gen: sorted(row, key=lambda p: p.x) for gen, row in sorted(rows.items())}

    def is_consanguineous(self, partnership: Partnership) -> bool:
        return ancestry.is_consanguineous(partnership.partner_a, partnership.partner_b, self.biological_graph)

    def co_twins(self, name: str, kind: TwinKind = TwinKind.MONOZYGOTIC) -> list[Individual]:
        return ancestry.co_twins(self.individual(name), self.individuals, kind)

    def twin_groups(self, kind: TwinKind = TwinKind.MONOZYGOTIC) -> list[list[Individual]]:
        return ancestry.twin_groups(self.individuals, kind)

    def metadata(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "individual_count": len(self.individuals),
            "generation_count": self.generation_count,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata(),
            "min_node_spacing": self.min_node_spacing,
            "positions": [
                {"name": pos.name, "x": pos.x, "y": pos.y, "generation": pos.generation}
                for pos in self.positions.values()
            ],
            "partnerships": [
                {
                    "partners": list(p.partners),
                    "children": list(p.children),
                    "consanguineous": self.is_consanguineous(p),
                }
                for p in self.partnerships
            ],
            "twins": {
                kind.value: [[ind.name for ind in group] for group in self.twin_groups(kind)]
                for kind in TwinKind
            },
        }


def compute_layout(individuals: list[Individual], options: LayoutOptions | None = None) -> PedigreeLayout:
    """
    Lay out a pedigree.

    Raises:
        ValidationError: if the dataset is empty or fails integrity checks. All
            problems are reported together and no layout work is done.
    """
    options = options or LayoutOptions()
    individuals = list(individuals)
    if not individuals:
        raise ValidationError(["Dataset is required and must be a non-empty list of individuals"])
    ensure_valid(individuals)

    generations = assign_generations(individuals, options.generation_passes)
    partnerships = build_partnerships(individuals)
    positions = position_individuals(individuals, generations, partnerships, options)
    width, height, _ = layout_canvas(group_by_generation(individuals, generations), options)
    # Spacing pushes only go right; keep the rightmost node inside the canvas
    width = max(width, max(pos.x for pos in positions.values()) + options.padding)

    logger.info(
        "Laid out %d individuals, %d generations, %d partnerships",
        len(individuals),
        len(set(generations.values())),
        len(partnerships),
    )
    return PedigreeLayout(
        individuals=individuals,
        generations=generations,
        partnerships=partnerships,
        positions=positions,
        width=width,
        height=height,
        options=options,
        biological_graph=build_biological_graph(individuals),
    )
