import os

import pandas as pd
import pytest

from clonalsim.data import CNV, SNV, LineageTree, TumorSample, parse_lineage_text
from clonalsim.mixins import SimulationPipelineError
from clonalsim.pipeline import simulate_lineage_trees, write_subclones

TREE_PARAMETERS = {"n_iterations": 8, "min_nodes": 4, "max_nodes": 60}
SAMPLING_PARAMETERS = {"n_samples": [3, 4], "coverage": [100, 1000]}


@pytest.fixture
def output_directory(tmp_path):
    simulate_lineage_trees(
        str(tmp_path),
        n_trees=2,
        tree_parameters=TREE_PARAMETERS,
        sampling_parameters=SAMPLING_PARAMETERS,
        random_seed=3,
        generate_dot=True,
        generate_sampled_dot=True,
        output_sample_profile=True,
    )
    return tmp_path


def test_output_files(output_directory):
    for t in range(2):
        tree_directory = os.path.join(
            output_directory, "simulation_results", f"tree_{t}"
        )
        expected = {"TREE_plain.txt", "TREE.dot"}
        for s in (3, 4):
            expected |= {
                f"TREE_s{s}.dot",
                f"VAF_s{s}_true.txt",
                f"VAF_s{s}_100X.txt",
                f"VAF_s{s}_1000X.txt",
                f"SUBCLONES_s{s}.txt",
            }
        assert set(os.listdir(tree_directory)) == expected


def test_frequency_files(output_directory):
    tree_directory = os.path.join(
        output_directory, "simulation_results", "tree_0"
    )
    with open(os.path.join(tree_directory, "VAF_s4_true.txt")) as f:
        header = f.readline().rstrip("\n")
    assert header == "#chrom\tpos\tdesc\tprofile\tnormal\tsample1\tsample2\tsample3"

    table = pd.read_csv(
        os.path.join(tree_directory, "VAF_s4_100X.txt"),
        sep="\t",
        dtype={"profile": str},
    )
    assert (table["normal"] == 0).all()
    for column in ("sample1", "sample2", "sample3"):
        assert ((table[column] >= 0) & (table[column] <= 1)).all()
    assert all(len(p) == 4 and p[0] == "0" for p in table["profile"])


def test_tree_dump_is_parseable(output_directory):
    with open(
        os.path.join(
            output_directory, "simulation_results", "tree_1", "TREE_plain.txt"
        )
    ) as f:
        tree = parse_lineage_text(f.read())
    assert "GL" in tree.nodes
    assert tree.in_degree("GL") == 0


def test_reproducible_with_seed(tmp_path):
    trees = []
    for run in ("first", "second"):
        trees.append(
            simulate_lineage_trees(
                str(tmp_path / run),
                n_trees=2,
                tree_parameters=TREE_PARAMETERS,
                sampling_parameters=SAMPLING_PARAMETERS,
                random_seed=10,
            )
        )
    assert [t.to_text() for t in trees[0]] == [t.to_text() for t in trees[1]]
    for name in ("VAF_s3_true.txt", "VAF_s4_1000X.txt", "SUBCLONES_s3.txt"):
        paths = [
            tmp_path / run / "simulation_results" / "tree_1" / name
            for run in ("first", "second")
        ]
        assert paths[0].read_text() == paths[1].read_text()


def test_requires_at_least_one_tree(tmp_path):
    with pytest.raises(SimulationPipelineError):
        simulate_lineage_trees(str(tmp_path), n_trees=0)
    assert not os.path.exists(tmp_path / "simulation_results")

def test_write_subclones(tmp_path):
    tree = LineageTree()
    tree.add_population(0, SNV("M0", 0, 1, 0), 10)
    tree.add_population(1, CNV("CNV_M1", 0, 0, 0), 10)
    tree.add_population(0, CNV("CNV_M2", 1, 0, 0), 10)
    samples = [
        TumorSample(population_counts={2: 5, 3: 5}),
        TumorSample(population_counts={1: 5, 2: 5}),
    ]
    file_path = str(tmp_path / "SUBCLONES.txt")
    write_subclones(file_path, tree, samples)
    with open(file_path) as f:
        assert f.read() == "\tM0\n\tM0\n"


if __name__ == "__main__":
    pytest.main([__file__])
