"""Layout engine for medical pedigree diagrams."""

from pedigree_layout.ancestry import co_twins, get_ancestors, is_consanguineous, twin_groups
from pedigree_layout.errors import ConfigurationError, DatasetFormatError, PedigreeError, ValidationError
from pedigree_layout.generations import assign_generations
from pedigree_layout.layout import PedigreeLayout, compute_layout
from pedigree_layout.models import (
    ChildOf,
    Founder,
    Individual,
    LayoutOptions,
    NodePosition,
    Partnership,
    Sex,
    TwinKind,
)
from pedigree_layout.partnerships import build_partnerships
from pedigree_layout.positioning import position_individuals
from pedigree_layout.validation import ensure_valid, validate_individuals

__all__ = [
    "ChildOf",
    "ConfigurationError",
    "DatasetFormatError",
    "Founder",
    "Individual",
    "LayoutOptions",
    "NodePosition",
    "Partnership",
    "PedigreeError",
    "PedigreeLayout",
    "Sex",
    "TwinKind",
    "ValidationError",
    "assign_generations",
    "build_partnerships",
    "co_twins",
    "compute_layout",
    "ensure_valid",
    "get_ancestors",
    "is_consanguineous",
    "position_individuals",
    "twin_groups",
    "validate_individuals",
]
