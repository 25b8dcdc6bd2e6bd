"""Data classes for pedigree entities and layout results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pedigree_layout.errors import ConfigurationError


class Sex(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"


class TwinKind(str, Enum):
    """Which twin marker field a co-twin query looks at."""

    MONOZYGOTIC = "mztwin"
    DIZYGOTIC = "dztwin"


@dataclass(frozen=True)
class Founder:
    """Lineage of an individual with no recorded parents."""


@dataclass(frozen=True)
class ChildOf:
    """Lineage of an individual with at least one recorded parent."""

    mother: str | None
    father: str | None

    @property
    def has_both_parents(self) -> bool:
        return self.mother is not None and self.father is not None

    @property
    def parents(self) -> tuple[str, ...]:
        return tuple(p for p in (self.mother, self.father) if p is not None)


Lineage = Founder | ChildOf


@dataclass
class Individual:
    name: str
    sex: str  # "M" | "F" | "U"
    mother: str | None = None
    father: str | None = None
    mztwin: str | None = None
    dztwin: str | None = None
    noparents: bool = False  # adopted: ancestry walks stop here
    top_level: bool = False  # explicit founder marker
    display_name: str | None = None
    proband: bool = False
    # Anything else the drawing layer needs (conditions, gene tests, ages, ...)
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def lineage(self) -> Lineage:
        """
        Founder status is inferred from absent parent links; ``top_level`` is
        informational only.
        """
        if self.mother is None and self.father is None:
            return Founder()
        return ChildOf(mother=self.mother, father=self.father)

    @property
    def is_founder(self) -> bool:
        return isinstance(self.lineage, Founder)

    def twin_marker(self, kind: TwinKind) -> str | None:
        return self.mztwin if kind is TwinKind.MONOZYGOTIC else self.dztwin


@dataclass
class Partnership:
    """
    A co-parenting pair inferred from shared children.

    ``partner_a`` is the father and ``partner_b`` the mother of the first child
    that introduced the pair; ``children`` keeps dataset order.
    """

    partner_a: str
    partner_b: str
    children: list[str] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str]:
        a, b = sorted((self.partner_a, self.partner_b))
        return (a, b)

    @property
    def partners(self) -> tuple[str, str]:
        return (self.partner_a, self.partner_b)

    def includes(self, name: str) -> bool:
        return name == self.partner_a or name == self.partner_b

    def partner_of(self, name: str) -> str | None:
        if name == self.partner_a:
            return self.partner_b
        if name == self.partner_b:
            return self.partner_a
        return None


@dataclass(frozen=True)
class NodePosition:
    individual: Individual
    x: float
    y: float
    generation: int

    @property
    def name(self) -> str:
        return self.individual.name


@dataclass
class LayoutOptions:
    width: float = 800
    height: float = 600
    symbol_size: float = 35
    spacing_factor: float = 4.0
    padding_factor: float = 2.0
    min_generation_spacing: float | None = None
    # Heuristics: fraction of the parent/children offset applied per partnership,
    # and the cap on re-sort/push rounds per row (None = row size).
    centering_pull: float = 0.3
    spacing_passes: int | None = None
    generation_passes: int | None = None

    def __post_init__(self):
        for attr in ("width", "height", "symbol_size", "spacing_factor"):
            if getattr(self, attr) <= 0:
                raise ConfigurationError(f"Layout option '{attr}' must be positive")
        if self.padding_factor < 0:
            raise ConfigurationError("Layout option 'padding_factor' must not be negative")
        if not 0 <= self.centering_pull <= 1:
            raise ConfigurationError("Layout option 'centering_pull' must be between 0 and 1")
        if self.min_generation_spacing is not None and self.min_generation_spacing <= 0:
            raise ConfigurationError("Layout option 'min_generation_spacing' must be positive")
        for attr in ("spacing_passes", "generation_passes"):
            value = getattr(self, attr)
            if value is not None and value < 1:
                raise ConfigurationError(f"Layout option '{attr}' must be at least 1")

    @property
    def min_node_spacing(self) -> float:
        """Horizontal room for a symbol plus its stacked labels."""
        return self.symbol_size * self.spacing_factor

    @property
    def padding(self) -> float:
        return self.symbol_size * self.padding_factor

    @property
    def generation_spacing_floor(self) -> float:
        if self.min_generation_spacing is not None:
            return self.min_generation_spacing
        return self.symbol_size * 3
