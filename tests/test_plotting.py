import pytest

from pedigree_layout import compute_layout
from pedigree_layout.models import Individual
from pedigree_layout.plotting import build_dot, union_graph_positions, write_dot


@pytest.fixture
def layout(nuclear_family):
    return compute_layout(nuclear_family)


def test_family_node_between_parents_and_children(layout):
    H, pos = union_graph_positions(layout)

    assert H.nodes["FAM_gf_gm"]["node_type"] == "family"
    assert pos["FAM_gf_gm"] == pytest.approx((400, 300))
    assert pos["gf"] == (layout.positions["gf"].x, layout.positions["gf"].y)
    assert list(H.successors("FAM_gf_gm")) == ["child"]


def test_single_parent_family_node(single_parent_chain):
    H, pos = union_graph_positions(compute_layout(single_parent_chain))

    assert H.nodes["FAM_grandpa"]["spouses"] == ("grandpa",)
    assert list(H.successors("FAM_grandpa")) == ["dad"]
    assert pos["FAM_grandpa"][0] == pytest.approx(pos["grandpa"][0])


def test_build_dot_pins_positions(layout):
    dot = build_dot(layout).to_string()

    assert "235.00,530.00!" in dot
    assert "400.00,70.00!" in dot
    assert "lightblue" in dot
    assert "lightpink" in dot


def test_consanguineous_partnership_gets_double_line():
    dataset = [
        Individual("dad", "M"),
        Individual("mum", "F"),
        Individual("bro", "M", mother="mum", father="dad"),
        Individual("sis", "F", mother="mum", father="dad"),
        Individual("kid", "U", mother="sis", father="bro"),
    ]
    dot = build_dot(compute_layout(dataset)).to_string()
    assert dot.count("darkgray:invis:darkgray") == 2


def test_write_dot_source(layout, tmp_path):
    out = write_dot(layout, tmp_path / "pedigree.dot")
    text = out.read_text()
    assert "digraph" in text
    assert "FAM_gf_gm" in text


def test_write_dot_rejects_unknown_format(layout, tmp_path):
    with pytest.raises(ValueError, match="Unsupported export format"):
        write_dot(layout, tmp_path / "pedigree.txt")
