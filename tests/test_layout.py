import pytest

from pedigree_layout import compute_layout
from pedigree_layout.errors import ValidationError
from pedigree_layout.models import Individual, LayoutOptions, TwinKind


def test_nuclear_family_metadata(nuclear_family):
    layout = compute_layout(nuclear_family)

    assert layout.metadata() == {
        "width": 800,
        "height": 600,
        "individual_count": 3,
        "generation_count": 2,
    }
    assert layout.min_node_spacing == 140
    assert set(layout.positions) == {"gf", "gm", "child"}


def test_wide_sibship_widens_canvas(fifteen_siblings):
    layout = compute_layout(fifteen_siblings)
    assert layout.width == pytest.approx(2240)
    assert all(pos.x + layout.options.padding <= layout.width + 1e-6 for pos in layout.positions.values())


def test_partners_share_a_row(cross_generation_marriage):
    layout = compute_layout(cross_generation_marriage)
    for partnership in layout.partnerships:
        a, b = (layout.positions[name] for name in partnership.partners)
        assert a.y == b.y
        for child in partnership.children:
            assert layout.positions[child].y > a.y


def test_rows_are_sorted_left_to_right(fifteen_siblings):
    rows = compute_layout(fifteen_siblings).rows()
    assert list(rows) == [0, 1]
    for row in rows.values():
        xs = [pos.x for pos in row]
        assert xs == sorted(xs)


def test_validation_errors_are_aggregated():
    dataset = [
        Individual("a", "M"),
        Individual("b", "F", mother="a", father="ghost"),
    ]
    with pytest.raises(ValidationError) as exc_info:
        compute_layout(dataset)
    assert exc_info.value.errors == [
        "Father 'ghost' not found for 'b'",
        "Mother 'a' must be female",
    ]


def test_empty_dataset_is_rejected():
    with pytest.raises(ValidationError, match="Dataset is required"):
        compute_layout([])


def test_options_are_used(nuclear_family):
    layout = compute_layout(nuclear_family, LayoutOptions(width=1000, height=400))
    assert layout.width == 1000
    assert layout.height == 400
    assert layout.positions["child"].x == pytest.approx(500)


def test_consanguineous_partnership_flag():
    dataset = [
        Individual("gf", "M"),
        Individual("gm", "F"),
        Individual("bro", "M", mother="gm", father="gf"),
        Individual("sis", "F", mother="gm", father="gf"),
        Individual("bro_w", "F"),
        Individual("sis_h", "M"),
        Individual("c1", "M", mother="bro_w", father="bro"),
        Individual("c2", "F", mother="sis", father="sis_h"),
        Individual("kid", "F", mother="c2", father="c1"),
    ]
    layout = compute_layout(dataset)

    flags = {tuple(p["partners"]): p["consanguineous"] for p in layout.to_dict()["partnerships"]}
    assert flags[("c1", "c2")] is True
    assert flags[("gf", "gm")] is False
    assert flags[("bro", "bro_w")] is False


def test_to_dict(nuclear_family):
    data = compute_layout(nuclear_family).to_dict()

    assert data["metadata"]["individual_count"] == 3
    assert data["min_node_spacing"] == 140
    assert [p["name"] for p in data["positions"]] == ["gf", "gm", "child"]
    assert data["positions"][2] == {"name": "child", "x": 400, "y": 530, "generation": 1}
    assert data["partnerships"] == [{"partners": ["gf", "gm"], "children": ["child"], "consanguineous": False}]
    assert data["twins"] == {"mztwin": [], "dztwin": []}


def test_co_twins_lookup():
    dataset = [
        Individual("dad", "M"),
        Individual("mum", "F"),
        Individual("t1", "M", mother="mum", father="dad", mztwin="x"),
        Individual("t2", "M", mother="mum", father="dad", mztwin="x"),
    ]
    layout = compute_layout(dataset)

    assert [ind.name for ind in layout.co_twins("t1")] == ["t2"]
    assert layout.co_twins("t1", TwinKind.DIZYGOTIC) == []
    assert layout.to_dict()["twins"]["mztwin"] == [["t1", "t2"]]


def test_father_daughter_union_keeps_canvas_height(father_daughter_union):
    layout = compute_layout(father_daughter_union)

    assert layout.generation_count == 3
    assert layout.height == 600
    (union,) = [p for p in layout.partnerships if p.key == ("A", "B")]
    assert layout.is_consanguineous(union)
    assert layout.positions["A"].y == layout.positions["B"].y


def test_uncle_niece_union_keeps_canvas_height(uncle_niece_union):
    layout = compute_layout(uncle_niece_union)

    assert layout.generation_count == 4
    assert layout.height == 600
    assert layout.positions["uncle"].y == layout.positions["niece"].y
