import pytest

from clonalsim.data import CNV, SNV, LineageTree, TumorSample
from clonalsim.plotting import to_dot, to_sampled_dot


@pytest.fixture
def tree():
    tree = LineageTree()
    tree.add_population(0, SNV("M0", 0, 1000, 0), 100000)
    tree.add_population(1, CNV("CNV_M1", 0, 0, 0), 50)
    tree.add_population(0, SNV("M2", 3, 5000, 1), 20)
    tree.mark_dead(3)
    return tree


def test_dot(tree):
    dot = to_dot(tree, max_population_size=1000000)
    lines = dot.splitlines()
    assert lines[0].startswith("digraph G {")
    assert lines[-1] == "}"
    assert "0 -> 1;" in lines
    assert "1 -> 2;" in lines
    assert "0 -> 3;" in lines
    assert '0 [label="GL"' in dot
    assert (
        '1 [shape=circle style=filled fillcolor=white fontname="helvetica-bold" '
        'fontsize=56 label="M0" width=0.5 height=2 ];'
    ) in lines
    assert "2 [shape=star style=filled fillcolor=white" in dot
    assert "3 [shape=circle style=filled fillcolor=grey" in dot


def test_sampled_dot(tree):
    samples = [
        TumorSample(subclones=[1, 2], color=(255, 0, 0)),
        TumorSample(subclones=[1], color=(0, 0, 255)),
    ]
    dot = to_sampled_dot(tree, samples, max_population_size=1000000)
    assert "rankdir=TB;" in dot
    assert 'style=wedged color="#ff0000:#0000ff"' in dot
    assert '2 [shape=star style=filled fillcolor="#ff0000"' in dot
    assert "3 [shape=circle style=filled fillcolor=grey" in dot
    assert "<B>Sample 1</B>" in dot
    assert 'BGCOLOR="#0000ff"' in dot
    assert dot.endswith("}")


if __name__ == "__main__":
    pytest.main([__file__])
