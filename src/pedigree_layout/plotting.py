"""Export and preview of computed layouts."""

import logging
from pathlib import Path

import networkx as nx
import pydot

from pedigree_layout.graph import build_union_graph
from pedigree_layout.layout import PedigreeLayout

logger = logging.getLogger(__name__)

SEX_STYLE = {
    "M": {"shape": "box", "fillcolor": "lightblue", "color": "lightblue"},
    "F": {"shape": "ellipse", "fillcolor": "lightpink", "color": "lightpink"},
    "U": {"shape": "diamond", "fillcolor": "lightgray", "color": "lightgray"},
}


def union_graph_positions(layout: PedigreeLayout) -> tuple[nx.DiGraph, dict[str, tuple[float, float]]]:
    """
    Build the union-node graph of a layout and place its family nodes.

    Person nodes keep their computed coordinates. A family node sits at the
    midpoint of its parents, halfway down to its children's row.

    Returns:
        (graph, positions) with positions in layout coordinates (y grows down)
    """
    H = build_union_graph(layout.individuals, layout.partnerships)
    pos = {name: (p.x, p.y) for name, p in layout.positions.items()}

    for node, data in H.nodes(data=True):
        if data.get("node_type") != "family":
            continue
        parents = [pos[s] for s in data.get("spouses", ()) if s in pos]
        children = [pos[c] for c in H.successors(node) if c in pos]
        if not parents:
            continue
        x = sum(p[0] for p in parents) / len(parents)
        parent_y = parents[0][1]
        y = (parent_y + children[0][1]) / 2 if children else parent_y
        pos[node] = (x, y)

    return H, pos


def build_dot(layout: PedigreeLayout) -> pydot.Dot:
    """
    Build a pydot graph with every node pinned at its computed position.

    Coordinates are written in points with the y axis flipped (Graphviz grows
    y upwards); render with ``neato -n2`` to keep them.
    """
    H, pos = union_graph_positions(layout)
    P = pydot.Dot("pedigree", graph_type="digraph")
    P.set("splines", "line")
    P.set("bb", f"0,0,{layout.width:.2f},{layout.height:.2f}")

    def pin(node: str) -> str:
        x, y = pos[node]
        return f"{x:.2f},{layout.height - y:.2f}!"

    for node, data in H.nodes(data=True):
        if node not in pos:
            continue
        if data.get("node_type") == "family":
            # Family nodes are small invisible points
            P.add_node(pydot.Node(str(node), shape="point", width="0.05", label="", pos=pin(node)))
            continue
        style = SEX_STYLE.get(data.get("sex"), SEX_STYLE["U"])
        P.add_node(
            pydot.Node(
                str(node),
                label=data.get("person_name", str(node)),
                style="filled",
                fontsize="10",
                pos=pin(node),
                **style,
            )
        )

    consanguineous = {
        f"FAM_{p.key[0]}_{p.key[1]}" for p in layout.partnerships if layout.is_consanguineous(p)
    }
    for u, v, data in H.edges(data=True):
        if data.get("edge_type") == "spouse_to_family":
            # Double line for consanguineous partnerships
            color = "darkgray:invis:darkgray" if v in consanguineous else "darkgray"
            P.add_edge(pydot.Edge(str(u), str(v), dir="none", color=color))
        else:
            P.add_edge(pydot.Edge(str(u), str(v), color="darkgray"))

    return P


def write_dot(layout: PedigreeLayout, output_path: Path) -> Path:
    """
    Write the pinned layout graph. ``.dot``/``.gv`` writes DOT source; ``.png``,
    ``.svg`` and ``.pdf`` are rendered by Graphviz.
    """
    P = build_dot(layout)
    ext = output_path.suffix.lower().lstrip(".")
    if ext in ("dot", "gv"):
        P.write(str(output_path), format="raw")
    elif ext in ("png", "svg", "pdf"):
        P.write(str(output_path), prog=["neato", "-n2"], format=ext)
    else:
        raise ValueError(f"Unsupported export format: {output_path.suffix}")
    logger.info("Layout graph saved to %s", output_path)
    return output_path


def plot_layout(layout: PedigreeLayout, output_path: Path | None = None):
    """Plot a quick preview of the layout with matplotlib."""
    import matplotlib.pyplot as plt

    H, pos = union_graph_positions(layout)
    # matplotlib grows y upwards
    draw_pos = {node: (x, -y) for node, (x, y) in pos.items()}
    H = H.subgraph(draw_pos).copy()

    person_nodes = [n for n, d in H.nodes(data=True) if d.get("node_type") == "person"]
    family_nodes = [n for n, d in H.nodes(data=True) if d.get("node_type") == "family"]
    node_colors = [SEX_STYLE.get(H.nodes[n].get("sex"), SEX_STYLE["U"])["fillcolor"] for n in person_nodes]

    plt.figure(figsize=(max(layout.width / 100, 4), max(layout.height / 100, 3)))
    nx.draw_networkx_edges(H, draw_pos, arrows=False, edge_color="gray", width=0.8)
    nx.draw_networkx_nodes(H, draw_pos, nodelist=person_nodes, node_color=node_colors, node_size=300)
    nx.draw_networkx_nodes(H, draw_pos, nodelist=family_nodes, node_color="gray", node_size=10)
    nx.draw_networkx_labels(
        H,
        draw_pos,
        labels={n: H.nodes[n].get("person_name", n) for n in person_nodes},
        font_size=7,
    )

    plt.title(
        f"Pedigree layout ({len(layout.individuals)} individuals, {layout.generation_count} generations)"
    )
    plt.axis("off")
    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close()
        logger.info("Preview saved to %s", output_path)
    else:
        plt.show()
