"""Partnership (co-parenting pair) construction."""

from pedigree_layout.models import Individual, Partnership


def partnership_key(mother: str, father: str) -> tuple[str, str]:
    """Order-independent identity of a pair, regardless of who is mother or father."""
    a, b = sorted((mother, father))
    return (a, b)


def build_partnerships(individuals: list[Individual]) -> list[Partnership]:
    """
    Group co-parents into partnerships.

    The first child of a pair creates the partnership with the father as
    ``partner_a``; later children of the same pair are appended in dataset
    order. Individuals with fewer than two recorded parents contribute nothing.
    """
    by_key: dict[tuple[str, str], Partnership] = {}

    for ind in individuals:
        if ind.mother is None or ind.father is None:
            continue
        key = partnership_key(ind.mother, ind.father)
        if key not in by_key:
            by_key[key] = Partnership(partner_a=ind.father, partner_b=ind.mother)
        by_key[key].children.append(ind.name)

    return list(by_key.values())


def partnerships_of(name: str, partnerships: list[Partnership]) -> list[Partnership]:
    return [p for p in partnerships if p.includes(name)]
