"""Integrity checks for pedigree datasets."""

import logging
from collections import Counter

import networkx as nx

from pedigree_layout.errors import ValidationError
from pedigree_layout.graph import build_parent_graph
from pedigree_layout.models import Individual, Sex

logger = logging.getLogger(__name__)


def validate_individuals(individuals: list[Individual]) -> list[str]:
    """
    Validate a dataset for:
    - Parent references that point at nobody
    - Parents of the wrong sex for their role
    - Duplicate identifiers
    - Individuals listed as their own parent
    - Founder markers on individuals that have parents
    - Cycles in parent-child relationships

    Returns a list of error messages, empty when the dataset is valid.
    """
    errors: list[str] = []
    by_name = {ind.name: ind for ind in individuals}

    counts = Counter(ind.name for ind in individuals)
    for name, count in counts.items():
        if count > 1:
            errors.append(f"Duplicate individual '{name}' ({count} records)")

    for ind in individuals:
        if ind.mother is not None and ind.mother not in by_name:
            errors.append(f"Mother '{ind.mother}' not found for '{ind.name}'")
        if ind.father is not None and ind.father not in by_name:
            errors.append(f"Father '{ind.father}' not found for '{ind.name}'")
        if ind.mother is not None:
            mother = by_name.get(ind.mother)
            if mother is not None and mother.sex != Sex.FEMALE.value:
                errors.append(f"Mother '{ind.mother}' must be female")
        if ind.father is not None:
            father = by_name.get(ind.father)
            if father is not None and father.sex != Sex.MALE.value:
                errors.append(f"Father '{ind.father}' must be male")
        if ind.name in (ind.mother, ind.father):
            errors.append(f"'{ind.name}' cannot be their own parent")
        if ind.top_level and not ind.is_founder:
            errors.append(f"'{ind.name}' is marked as a founder but has parents")

    # Self-parenting is already reported; look for longer loops only
    parent_graph = build_parent_graph(individuals)
    parent_graph.remove_edges_from(list(nx.selfloop_edges(parent_graph)))
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        errors.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass  # No cycle found, which is good

    if errors:
        logger.debug("Dataset of %d individuals has %d validation errors", len(individuals), len(errors))
    return errors


def ensure_valid(individuals: list[Individual]) -> None:
    """Raise a single ValidationError listing every problem in the dataset."""
    errors = validate_individuals(individuals)
    if errors:
        raise ValidationError(errors)
