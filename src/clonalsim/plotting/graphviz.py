"""
Graphviz (DOT) renderings of a LineageTree.

SNV populations are drawn as circles whose width scales with the population
size, CNV populations as stars, and dead populations are greyed out. The
sampled rendering additionally colors each population by the samples it was
drawn into and adds a legend of sample colors.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from matplotlib.colors import to_hex

from clonalsim.data import LineageTree, TumorSample

ALIVE_COLOR = "white"
DEAD_COLOR = "grey"
GERMLINE_NODE = (
    '{id} [label="GL" fontname="arial-bold" fontsize=56 width=5 height=5];'
)


def _rgb_to_hex(color: Tuple[int, int, int]) -> str:
    return to_hex([c / 255 for c in color])


def _format_width(size: int, max_population_size: int) -> str:
    return f"{round(5 * size / max_population_size, 2):g}"


def _node_line(
    tree: LineageTree,
    node: int,
    max_population_size: int,
    sample_colors: Optional[List[Tuple[int, int, int]]] = None,
) -> str:
    population = tree.get_population(node)
    if population.is_germline:
        return GERMLINE_NODE.format(id=node)

    color = DEAD_COLOR if population.is_dead else ALIVE_COLOR
    if sample_colors:
        color = '"' + ":".join(_rgb_to_hex(c) for c in sample_colors) + '"'

    if population.is_cnv:
        return (
            f"{node} [shape=star style=filled fillcolor={color} "
            f'fontname="helvetica-bold" fontsize=42 label="{population.name}"];'
        )
    width = _format_width(population.size, max_population_size)
    if sample_colors is not None and len(sample_colors) > 1:
        style = f"style=wedged color={color}"
    else:
        style = f"style=filled fillcolor={color}"
    return (
        f'{node} [shape=circle {style} fontname="helvetica-bold" fontsize=56 '
        f'label="{population.name}" width={width} height=2 ];'
    )


def to_dot(tree: LineageTree, max_population_size: int = 1000000) -> str:
    """Renders a tree in the DOT language.

    Args:
        tree: The LineageTree to render
        max_population_size: Population size rendered with the maximal width

    Returns:
        The DOT source of the tree.
    """
    lines = ["digraph G { "]
    lines += [f"{u} -> {v};" for u, v in tree.edges]
    lines += [_node_line(tree, node, max_population_size) for node in tree.nodes]
    return "\n".join(lines) + "\n}"


def to_sampled_dot(
    tree: LineageTree,
    samples: Sequence[TumorSample],
    max_population_size: int = 1000000,
) -> str:
    """Renders a tree in the DOT language with populations colored by sample.

    A population selected into several samples is drawn as a wedged circle
    with one wedge per selection. A legend maps sample numbers to colors.

    Args:
        tree: The LineageTree the samples were drawn from
        samples: The tumor samples
        max_population_size: Population size rendered with the maximal width

    Returns:
        The DOT source of the tree.
    """
    colors: Dict[int, List[Tuple[int, int, int]]] = tree.get_sample_colors(
        samples
    )
    lines = ["digraph G { ", "rankdir=TB;"]
    lines += [f"{u} -> {v};" for u, v in tree.edges]
    lines += [
        _node_line(tree, node, max_population_size, colors.get(node, []))
        for node in tree.nodes
    ]

    legend = [
        "{rank=sink;",
        "Legend[shape=none, margin=0, label=<<TABLE border=\"0\" "
        'cellborder="0" cellspacing="0"> ',
        "<TR>",
    ]
    for i, sample in enumerate(samples):
        legend.append(
            '<TD width="200" height="200" colspan="1"><FONT POINT-SIZE="36.0">'
            f"<B>Sample {i + 1}</B></FONT></TD>"
            '<TD width="200" height="200" colspan="1" '
            f'BGCOLOR="{_rgb_to_hex(sample.color)}"></TD>'
        )
    legend += ["</TR>", "</TABLE>>];", "} "]
    lines += legend
    return "\n".join(lines) + "\n}"
