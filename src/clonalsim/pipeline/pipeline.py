"""
This file contains the high-level functionality of the simulation pipeline:
growing lineage trees, collecting tumor samples from them, and writing the
true and noisy variant allele frequencies of every sample set to disk. This
file is mainly invoked by clonalsim_simulate.py.
"""
import os
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from tqdm.auto import tqdm

from clonalsim import plotting
from clonalsim.data import SNV, LineageTree, TumorSample
from clonalsim.mixins import SimulationPipelineError, logger
from clonalsim.pipeline import constants, setup_utilities, utilities
from clonalsim.simulator import ClonalEvolutionSimulator
from clonalsim.tools import (
    add_sequencing_noise_to_table,
    compute_frequency_table,
    get_binary_profiles,
    get_frequency_columns,
)

progress = tqdm


@utilities.log_kwargs
@utilities.log_runtime
def simulate_lineage_trees(
    output_directory: str,
    n_trees: int = 100,
    tree_parameters: Optional[Dict[str, Any]] = None,
    sampling_parameters: Optional[Dict[str, Any]] = None,
    random_seed: Optional[int] = None,
    generate_dot: bool = False,
    generate_sampled_dot: bool = False,
    output_sample_profile: bool = False,
) -> List[LineageTree]:
    """Simulates lineage trees and the sequencing of tumor samples from them.

    For every tree `t`, outputs are written to
    `<output_directory>/simulation_results/tree_<t>/`:
        * TREE_plain.txt: text dump of the tree
        * TREE.dot: the tree in DOT format, if `generate_dot`
    and, for every number of samples `s` (the normal sample included):
        * TREE_s<s>.dot: the tree colored by sample, if `generate_sampled_dot`
        * VAF_s<s>_true.txt: the true VAFs
        * VAF_s<s>_<c>X.txt: the VAFs observed at each coverage `c`
        * SUBCLONES_s<s>.txt: the SNVs of every sampled population

    Each tree draws from its own random stream spawned from `random_seed`, so
    a tree does not depend on how many trees were simulated before it.

    Args:
        output_directory: Directory in which the results directory is created
        n_trees: Number of trees to simulate
        tree_parameters: Keyword arguments of ClonalEvolutionSimulator
        sampling_parameters: The sampling parameters, with the keys of the
            "sampling" section of DEFAULT_SIMULATION_PARAMETERS
        random_seed: A seed for reproducibility
        generate_dot: Whether to write the trees in DOT format
        generate_sampled_dot: Whether to write the trees colored by sample in
            DOT format
        output_sample_profile: Whether VAF files include a binary profile of
            the samples each SNV is present in

    Returns:
        The simulated trees.

    Raises:
        SimulationPipelineError if `n_trees` is less than 1.
    """
    if n_trees < 1:
        raise SimulationPipelineError("Number of trees must be at least 1.")

    tree_parameters = {
        **constants.DEFAULT_SIMULATION_PARAMETERS["tree"],
        **(tree_parameters or {}),
    }
    sampling_parameters = {
        **constants.DEFAULT_SIMULATION_PARAMETERS["sampling"],
        **(sampling_parameters or {}),
    }
    cnv_aware = tree_parameters["prob_cnv"] > 0
    max_population_size = tree_parameters["max_population_size"]

    results_directory = os.path.join(
        output_directory, constants.SIMULATION_RESULTS_DIRECTORY
    )
    seed_sequences = np.random.SeedSequence(random_seed).spawn(n_trees)

    trees = []
    total_n_nodes = 0
    for t in progress(range(n_trees), desc="Simulating trees"):
        tree_directory = os.path.join(results_directory, f"tree_{t}")
        os.makedirs(tree_directory, exist_ok=True)
        rng = np.random.default_rng(seed_sequences[t])

        simulator = ClonalEvolutionSimulator(**tree_parameters, rng=rng)
        tree = simulator.simulate_tree()
        write_output_file(
            os.path.join(tree_directory, "TREE_plain.txt"), tree.to_text()
        )
        if generate_dot:
            write_output_file(
                os.path.join(tree_directory, "TREE.dot"),
                plotting.to_dot(tree, max_population_size),
            )
        logger.debug(f"Generated tree {t} with {tree.n_nodes} nodes.")
        total_n_nodes += tree.n_nodes

        for n_samples in sampling_parameters["n_samples"]:
            sample_tree(
                tree,
                tree_directory,
                n_samples,
                sampling_parameters,
                rng,
                cnv_aware=cnv_aware,
                generate_sampled_dot=generate_sampled_dot,
                output_sample_profile=output_sample_profile,
                max_population_size=max_population_size,
            )

        trees.append(tree)
        logger.info(f"[PROGRESS] Simulated {t + 1} trees.")

    logger.info(
        f"[SUMMARY] Simulated {n_trees} trees. Average number of nodes / "
        f"tree = {total_n_nodes / n_trees}"
    )
    return trees


def sample_tree(
    tree: LineageTree,
    tree_directory: str,
    n_samples: int,
    sampling_parameters: Dict[str, Any],
    rng: np.random.Generator,
    cnv_aware: bool = True,
    generate_sampled_dot: bool = False,
    output_sample_profile: bool = False,
    max_population_size: int = 1000000,
) -> pd.DataFrame:
    """Collects one set of samples from a tree and writes its VAF files.

    Args:
        tree: The LineageTree to sample from
        tree_directory: Directory holding the outputs of the tree
        n_samples: Number of samples, the normal sample included
        sampling_parameters: See `simulate_lineage_trees`
        rng: Random number generator of the tree
        cnv_aware: Whether to compute CNV-aware VAFs
        generate_sampled_dot: Whether to write the tree colored by sample
        output_sample_profile: Whether to add binary sample profiles
        max_population_size: Population size rendered with the maximal width
            in DOT files

    Returns:
        The true frequency table of the samples.
    """
    sampler = setup_utilities.get_tumor_sampler(
        sampling_parameters, n_samples - 1, rng=rng
    )
    samples = sampler.sample(tree)
    if generate_sampled_dot:
        write_output_file(
            os.path.join(tree_directory, f"TREE_s{n_samples}.dot"),
            plotting.to_sampled_dot(tree, samples, max_population_size),
        )

    table = compute_frequency_table(tree, samples, cnv_aware=cnv_aware)
    if output_sample_profile:
        table.insert(3, "profile", get_binary_profiles(table))
    write_frequency_table(
        os.path.join(tree_directory, f"VAF_s{n_samples}_true.txt"), table
    )

    for coverage in sampling_parameters["coverage"]:
        noisy_table = add_sequencing_noise_to_table(
            table,
            coverage,
            sampling_parameters["sequencing_error"],
            rng=rng,
        )
        write_frequency_table(
            os.path.join(
                tree_directory, f"VAF_s{n_samples}_{coverage}X.txt"
            ),
            noisy_table,
        )

    write_subclones(
        os.path.join(tree_directory, f"SUBCLONES_s{n_samples}.txt"),
        tree,
        samples,
    )
    return table


def _format_frequency(frequency: float) -> str:
    return f"{round(frequency, 4):g}"


def write_frequency_table(file_path: str, table: pd.DataFrame) -> None:
    """Writes a frequency table as a tab-separated file.

    The header line starts with "#" and frequencies are rounded to four
    decimals.

    Args:
        file_path: Path of the file to write
        table: A frequency table from `compute_frequency_table`
    """
    formatted = table.copy()
    for column in get_frequency_columns(table):
        formatted[column] = table[column].map(_format_frequency)
    formatted = formatted.rename(columns={"chrom": "#chrom"})
    formatted.to_csv(file_path, sep="\t", index=False)


def write_subclones(
    file_path: str, tree: LineageTree, samples: Iterable[TumorSample]
) -> None:
    """Writes the SNVs of every population that received cells in a sample.

    Each line lists the SNV names of one population, every name preceded by
    a tab. Populations without SNVs are skipped.

    Args:
        file_path: Path of the file to write
        tree: The LineageTree the samples were drawn from
        samples: The tumor samples
    """
    subclones = set()
    for sample in samples:
        subclones.update(sample.population_counts)

    lines = []
    for node in sorted(subclones):
        snvs = [
            m.name
            for m in tree.get_population(node).mutations
            if isinstance(m, SNV)
        ]
        if len(snvs) > 0:
            lines.append("".join("\t" + name for name in snvs))
    write_output_file(file_path, "".join(line + "\n" for line in lines))


def write_output_file(file_path: str, data: str) -> None:
    with open(file_path, "w") as f:
        f.write(data)
