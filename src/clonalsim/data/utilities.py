"""
General utilities for the data models in clonalsim: newick export and
parsing of LineageTree text dumps.
"""
import re
from typing import Dict, Optional, Union

import networkx as nx

from clonalsim.data.Mutation import CNV, SNV
from clonalsim.mixins import LineageTreeError

_SNV_PATTERN = re.compile(
    r"^(?P<name>\S+): chr=(?P<chr>\d+), pos=(?P<pos>\d+), "
    r"haplotype=(?P<haplotype>[01])$"
)
_CNV_PATTERN = re.compile(
    r"^(?P<name>\S+): chr=(?P<chr>\d+), arm=(?P<arm>[01]), "
    r"haplotype=(?P<haplotype>[01])$"
)


def to_newick(
    tree: nx.DiGraph,
    node_label: Optional[str] = None,
    record_node_names: bool = False,
) -> str:
    """Converts a networkx graph to a newick string.

    Args:
        tree: A networkx tree
        node_label: Node attribute used as the label of each node. If None,
            the node itself is used
        record_node_names: Whether to record internal node names on the tree in
            the newick string

    Returns:
        A newick string representing the topology of the tree
    """

    def _label(node):
        if node_label is None:
            return str(node)
        return str(tree.nodes[node][node_label])

    def _to_newick_str(g, node):
        if g.out_degree(node) == 0:
            return _label(node)
        name_string = _label(node) if record_node_names else ""
        return (
            "("
            + ",".join(_to_newick_str(g, child) for child in g.successors(node))
            + ")"
            + name_string
        )

    root = [node for node in tree if tree.in_degree(node) == 0][0]
    return _to_newick_str(tree, root) + ";"


def parse_mutation(description: str) -> Union[SNV, CNV]:
    """Parses a mutation description line back into a mutation.

    Args:
        description: A line as produced by `SNV.describe` or `CNV.describe`

    Returns:
        The described SNV or CNV.

    Raises:
        LineageTreeError if the line does not describe a mutation.
    """
    match = _SNV_PATTERN.match(description)
    if match:
        return SNV(
            name=match["name"],
            chromosome=int(match["chr"]) - 1,
            position=int(match["pos"]),
            haplotype=int(match["haplotype"]),
        )
    match = _CNV_PATTERN.match(description)
    if match:
        return CNV(
            name=match["name"],
            chromosome=int(match["chr"]) - 1,
            arm=int(match["arm"]),
            haplotype=int(match["haplotype"]),
        )
    raise LineageTreeError(f"Cannot parse mutation line: {description}")


def parse_lineage_text(text: str) -> nx.DiGraph:
    """Rebuilds the topology of a tree from its plain-text dump.

    Nodes of the returned graph are named by the mutation each population
    acquired ("GL" for the germline root); when the dump describes the
    mutation, it is stored in the "mutation" node attribute.

    Args:
        text: The output of `LineageTree.to_text`

    Returns:
        A networkx DiGraph with the parent-child structure of the dump.

    Raises:
        LineageTreeError if a line is malformed or a node has two parents.
    """
    tree = nx.DiGraph()
    mutations: Dict[str, Union[SNV, CNV]] = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        fields = line.split("\t")
        if len(fields) == 2:
            parent, child = fields
            if tree.has_node(child) and tree.in_degree(child) > 0:
                raise LineageTreeError(f"Node {child} has multiple parents.")
            tree.add_edge(parent, child)
        elif len(fields) == 1:
            mutation = parse_mutation(line)
            mutations[mutation.name] = mutation
        else:
            raise LineageTreeError(f"Malformed line in tree dump: {line}")

    for name, mutation in mutations.items():
        if not tree.has_node(name):
            tree.add_node(name)
        tree.nodes[name]["mutation"] = mutation
    return tree
