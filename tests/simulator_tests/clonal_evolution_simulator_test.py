import pytest

from clonalsim.data import CHROMOSOME_LENGTHS, CNV, SNV, LineageTree, get_arm
from clonalsim.mixins import TreeSimulatorError
from clonalsim.simulator import ClonalEvolutionSimulator


@pytest.fixture
def tree():
    """A tree grown with the default parameters."""
    return ClonalEvolutionSimulator(random_seed=42).simulate_tree()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"prob_snv": 1.5},
        {"prob_death": -0.1},
        {"prob_snv": 0.5, "prob_cnv": 0.4, "prob_death": 0.2},
        {"prob_snv": 0.0, "prob_cnv": 0.0},
        {"min_nodes": 0},
        {"min_nodes": 10, "max_nodes": 5},
        {"max_population_size": 0},
        {"n_iterations": -1},
    ],
)
def test_init_raises(kwargs):
    with pytest.raises(TreeSimulatorError):
        ClonalEvolutionSimulator(**kwargs)


def test_mutation_path_invariant(tree):
    for node in tree.nodes:
        population = tree.get_population(node)
        if node == tree.root:
            assert population.mutations == ()
            assert not population.is_dead
            continue
        parent = tree.get_population(tree.parent(node))
        assert population.mutations == parent.mutations + (
            population.last_mutation,
        )


def test_unique_mutation_names(tree):
    names = [p.name for p in tree.populations]
    assert len(names) == len(set(names))


def test_population_sizes_bounded():
    simulator = ClonalEvolutionSimulator(max_population_size=10, random_seed=3)
    tree = simulator.simulate_tree()
    for population in tree.populations[1:]:
        assert 0 <= population.size < 10


def test_minimum_live_nodes():
    simulator = ClonalEvolutionSimulator(
        prob_death=0.05, n_iterations=1, min_nodes=20, random_seed=5
    )
    tree = simulator.simulate_tree()
    assert tree.n_live_nodes >= 20


def test_growth_is_simultaneous():
    simulator = ClonalEvolutionSimulator(
        prob_snv=1.0, prob_cnv=0.0, prob_death=0.0, random_seed=1
    )
    tree = LineageTree()
    for generation in range(1, 5):
        simulator.grow(tree)
        assert tree.n_nodes == 2**generation


def test_growth_stops_at_max_nodes():
    simulator = ClonalEvolutionSimulator(
        prob_snv=1.0,
        prob_cnv=0.0,
        prob_death=0.0,
        n_iterations=50,
        min_nodes=1,
        max_nodes=10,
        random_seed=1,
    )
    tree = simulator.simulate_tree()
    # live nodes after each round: 1, 3, 7, 15
    assert tree.n_live_nodes == 15


def test_dead_populations_stay_childless():
    simulator = ClonalEvolutionSimulator(
        prob_snv=0.4, prob_cnv=0.1, prob_death=0.4, random_seed=11
    )
    tree = LineageTree()
    dead_children = {}
    for _ in range(15):
        simulator.grow(tree)
        for node, children in dead_children.items():
            assert tree.get_population(node).is_dead
            assert tree.children(node) == children
        for node in tree.nodes:
            if tree.get_population(node).is_dead and node not in dead_children:
                dead_children[node] = tree.children(node)
        assert not tree.get_population(tree.root).is_dead
    assert len(dead_children) == tree.n_dead_nodes
    assert tree.n_dead_nodes > 0


def test_upstream_cnv_effect():
    simulator = ClonalEvolutionSimulator(
        prob_snv=0.45,
        prob_cnv=0.45,
        prob_death=0.0,
        upstream_cnv_effect=True,
        n_iterations=6,
        random_seed=2,
    )
    tree = simulator.simulate_tree()
    n_checked = 0
    for node in tree.nodes[1:]:
        parent_mutation = tree.get_population(tree.parent(node)).last_mutation
        mutation = tree.get_population(node).last_mutation
        if isinstance(mutation, CNV) and isinstance(parent_mutation, SNV):
            assert mutation.chromosome == parent_mutation.chromosome
            assert mutation.arm == parent_mutation.arm
            n_checked += 1
        if isinstance(mutation, SNV) and isinstance(parent_mutation, CNV):
            assert mutation.chromosome == parent_mutation.chromosome
            half_length = CHROMOSOME_LENGTHS[mutation.chromosome] // 2
            # the first position of the upper arm falls on the lower-arm boundary
            if parent_mutation.arm == 1 and mutation.position == half_length:
                assert get_arm(mutation.chromosome, mutation.position) == 0
            else:
                assert (
                    get_arm(mutation.chromosome, mutation.position)
                    == parent_mutation.arm
                )
            n_checked += 1
    assert n_checked > 0


def test_reproducible_with_seed():
    first = ClonalEvolutionSimulator(random_seed=9).simulate_tree()
    second = ClonalEvolutionSimulator(random_seed=9).simulate_tree()
    assert first.to_text() == second.to_text()


if __name__ == "__main__":
    pytest.main([__file__])
