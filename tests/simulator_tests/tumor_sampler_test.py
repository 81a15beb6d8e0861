import numpy as np
import pytest

from clonalsim.data import CNV, SNV, LineageTree
from clonalsim.mixins import (
    ParameterWarning,
    TumorSamplerError,
    TumorSamplerWarning,
)
from clonalsim.simulator import (
    ClonalEvolutionSimulator,
    LocalizedTumorSampler,
    RandomTumorSampler,
)


@pytest.fixture
def tree():
    """GL -> {M0 -> {CNV_M1, M3}, M2} with subtree sizes 180 and 20."""
    tree = LineageTree()
    tree.add_population(0, SNV("M0", 0, 1000, 0), 100)
    tree.add_population(1, CNV("CNV_M1", 0, 0, 0), 50)
    tree.add_population(0, SNV("M2", 3, 5000, 1), 20)
    tree.add_population(1, SNV("M3", 5, 10, 0), 30)
    return tree


@pytest.fixture
def simulated_tree():
    return ClonalEvolutionSimulator(
        prob_death=0.1, random_seed=13
    ).simulate_tree()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_subclones": 0},
        {"n_cells_per_sample": 0},
        {"min_normal_contamination": -1.0},
        {"max_normal_contamination": 101.0},
    ],
)
def test_init_raises(kwargs):
    with pytest.raises(TumorSamplerError):
        RandomTumorSampler(n_samples=1, **kwargs)


def test_init_raises_without_samples():
    with pytest.raises(TumorSamplerError):
        RandomTumorSampler(n_samples=0)
    with pytest.raises(TumorSamplerError):
        LocalizedTumorSampler(n_samples=0)


def test_normal_contamination_clamped():
    with pytest.warns(ParameterWarning):
        sampler = RandomTumorSampler(
            n_samples=1,
            n_cells_per_sample=1000,
            min_normal_contamination=10.0,
            max_normal_contamination=5.0,
        )
    assert sampler.max_normal_contamination == 10.0
    assert sampler.sample_normal_contamination() == 100


def test_normal_contamination_in_range():
    sampler = RandomTumorSampler(
        n_samples=1,
        n_cells_per_sample=1000,
        min_normal_contamination=5.0,
        max_normal_contamination=20.0,
        random_seed=1,
    )
    for _ in range(100):
        assert 50 <= sampler.sample_normal_contamination() <= 200


def test_select_subclones_skips_dead_and_germline(simulated_tree):
    sampler = RandomTumorSampler(n_samples=1, max_subclones=6, random_seed=4)
    assert simulated_tree.n_dead_nodes > 0
    for _ in range(100):
        subclones = sampler.select_subclones(
            simulated_tree, simulated_tree.nodes, sampler.max_subclones
        )
        assert 1 <= len(subclones) <= 5
        for node in subclones:
            population = simulated_tree.get_population(node)
            assert not population.is_dead
            assert not population.is_germline


@pytest.mark.parametrize("max_subclones", [1, 2])
def test_select_single_subclone(tree, max_subclones):
    sampler = RandomTumorSampler(n_samples=1, random_seed=2)
    for _ in range(20):
        assert len(sampler.select_subclones(tree, tree.nodes, max_subclones)) == 1


def test_select_subclones_without_candidates(tree):
    tree.mark_dead(3)
    sampler = RandomTumorSampler(n_samples=1, random_seed=2)
    assert sampler.select_subclones(tree, [0, 3], 5) == []
    with pytest.raises(TumorSamplerError):
        sampler.create_sample(tree, [], 0)


def test_create_sample(tree):
    sampler = RandomTumorSampler(
        n_samples=1, n_cells_per_sample=1000, random_seed=3
    )
    sample = sampler.create_sample(tree, [1, 4], 100)
    assert sample.n_normal_cells == 100
    assert sample.n_tumor_cells == 900
    assert sample.n_cells == 1000
    assert set(sample.population_counts) <= {1, 4}
    assert sample.subclones == [1, 4]
    assert all(0 <= c < 256 for c in sample.color)


def test_create_sample_from_empty_populations():
    tree = LineageTree()
    tree.add_population(0, SNV("M0", 0, 1, 0), 0)
    tree.add_population(0, SNV("M1", 1, 1, 0), 0)
    sampler = RandomTumorSampler(
        n_samples=1, n_cells_per_sample=10000, random_seed=3
    )
    sample = sampler.create_sample(tree, [1, 2], 0)
    assert sample.n_tumor_cells == 10000
    assert set(sample.population_counts) == {1, 2}


def test_create_sample_proportional_to_size(tree):
    sampler = RandomTumorSampler(
        n_samples=1, n_cells_per_sample=100000, random_seed=3
    )
    # sizes 100 and 20
    sample = sampler.create_sample(tree, [1, 3], 0)
    assert sample.population_counts[1] / 100000 == pytest.approx(
        100 / 120, abs=0.01
    )


def test_random_samples(simulated_tree):
    sampler = RandomTumorSampler(
        n_samples=4, n_cells_per_sample=5000, random_seed=8
    )
    samples = sampler.sample(simulated_tree)
    assert len(samples) == 4
    for sample in samples:
        assert sample.n_cells == 5000
        assert 1 <= len(sample.subclones) <= 4
        for node in sample.population_counts:
            assert not simulated_tree.get_population(node).is_dead


def test_random_samples_from_root_only_tree():
    sampler = RandomTumorSampler(n_samples=2, random_seed=1)
    with pytest.raises(TumorSamplerError):
        sampler.sample(LineageTree())


def test_find_subtree_roots(tree):
    sampler = LocalizedTumorSampler(n_samples=3, random_seed=1)
    assert sampler.find_subtree_roots(tree) == [2, 4, 3]

    sampler = LocalizedTumorSampler(n_samples=2, random_seed=1)
    assert sampler.find_subtree_roots(tree) == [1, 3]


def test_find_subtree_roots_skips_empty_subtrees(tree):
    tree.mark_dead(2)
    sampler = LocalizedTumorSampler(n_samples=3, random_seed=1)
    assert sampler.find_subtree_roots(tree) == [4, 3]


def test_single_localized_sample(simulated_tree):
    sampler = LocalizedTumorSampler(n_samples=1, random_seed=6)
    samples = sampler.sample(simulated_tree)
    assert len(samples) == 1

    subtrees = [
        set(simulated_tree.get_subtree_nodes(child))
        for child in simulated_tree.children(simulated_tree.root)
    ]
    subclones = set(samples[0].subclones)
    assert any(subclones <= subtree for subtree in subtrees)


def test_localized_samples_are_disjoint(tree):
    sampler = LocalizedTumorSampler(
        n_samples=3, mix_neighbor_subtree_subclone=False, random_seed=6
    )
    samples = sampler.sample(tree)
    assert [s.subclones for s in samples] == [[2], [4], [3]]


def test_localized_samples_mix_neighbor_subtree(tree):
    sampler = LocalizedTumorSampler(
        n_samples=3, mix_neighbor_subtree_subclone=True, random_seed=6
    )
    samples = sampler.sample(tree)
    assert [s.subclones for s in samples] == [[2, 3], [4, 2], [3, 4]]


def test_localized_samples_overlap_when_tree_is_small(tree):
    sampler = LocalizedTumorSampler(
        n_samples=5, mix_neighbor_subtree_subclone=False, random_seed=6
    )
    with pytest.warns(TumorSamplerWarning):
        samples = sampler.sample(tree)
    assert [s.subclones for s in samples] == [[2], [4], [3], [2], [4]]


def test_localized_samples_from_root_only_tree():
    sampler = LocalizedTumorSampler(n_samples=2, random_seed=1)
    with pytest.raises(TumorSamplerError):
        sampler.sample(LineageTree())


def test_localized_samples_from_empty_subtrees():
    tree = LineageTree()
    tree.add_population(0, SNV("M0", 0, 1, 0), 0)
    sampler = LocalizedTumorSampler(n_samples=2, random_seed=1)
    with pytest.raises(TumorSamplerError):
        sampler.sample(tree)


def test_shared_generator_is_used(tree):
    rng = np.random.default_rng(0)
    sampler = RandomTumorSampler(n_samples=1, rng=rng)
    assert sampler.rng is rng


if __name__ == "__main__":
    pytest.main([__file__])
