import pytest

from pedigree_layout.models import Individual, LayoutOptions


@pytest.fixture
def options():
    return LayoutOptions()


@pytest.fixture
def nuclear_family():
    """Two founders and their daughter."""
    return [
        Individual("gf", "M", top_level=True),
        Individual("gm", "F", top_level=True),
        Individual("child", "F", mother="gm", father="gf"),
    ]


@pytest.fixture
def fifteen_siblings():
    return [
        Individual("dad", "M", top_level=True),
        Individual("mum", "F", top_level=True),
    ] + [Individual(f"sib{i}", "M" if i % 2 else "F", mother="mum", father="dad") for i in range(15)]


@pytest.fixture
def single_parent_chain():
    """Grandpa -> dad (single link), dad + mom -> child."""
    return [
        Individual("grandpa", "M", top_level=True),
        Individual("dad", "M", father="grandpa"),
        Individual("mom", "F", top_level=True),
        Individual("child", "F", mother="mom", father="dad"),
    ]


@pytest.fixture
def cross_generation_marriage():
    """
    P (two generations below founders) marries Q (three below), so the
    correction pass has to push P, P's parents, and Q's father down.
    """
    return [
        Individual("gp1", "M"),
        Individual("gm1", "F"),
        Individual("P", "M", mother="gm1", father="gp1"),
        Individual("ggp2", "M"),
        Individual("ggm2", "F"),
        Individual("q_mother", "F", mother="ggm2", father="ggp2"),
        Individual("qf", "M"),
        Individual("Q", "F", mother="q_mother", father="qf"),
        Individual("C", "M", mother="Q", father="P"),
    ]


@pytest.fixture
def father_daughter_union():
    """A has child C with his own daughter B, alongside 50 unrelated founders."""
    return [
        Individual("A", "M"),
        Individual("W", "F"),
        Individual("B", "F", mother="W", father="A"),
        Individual("C", "M", mother="B", father="A"),
    ] + [Individual(f"founder{i}", "U") for i in range(50)]


@pytest.fixture
def uncle_niece_union():
    """uncle has kid with niece, his sister's daughter, alongside 20 unrelated founders."""
    return [
        Individual("gf", "M"),
        Individual("gm", "F"),
        Individual("uncle", "M", mother="gm", father="gf"),
        Individual("sis", "F", mother="gm", father="gf"),
        Individual("bil", "M"),
        Individual("niece", "F", mother="sis", father="bil"),
        Individual("kid", "F", mother="niece", father="uncle"),
    ] + [Individual(f"founder{i}", "U") for i in range(20)]
