"""
Main logic behind clonalsim-simulate.

This file stores the main entry point for clonalsim-simulate, and makes heavy
use of the high level functionality in clonalsim.pipeline.pipeline.
Parameters are read from an optional config file (see
clonalsim.pipeline.constants for the sections and defaults) and can be
overridden from the command line.
"""
import argparse
from typing import Any, Dict, List, Optional

from clonalsim.pipeline import pipeline, setup_utilities

# command line option -> (config section, parameter name)
OPTION_PARAMETERS = {
    "output_directory": ("general", "output_directory"),
    "n_trees": ("general", "n_trees"),
    "seed": ("general", "random_seed"),
    "verbose": ("general", "verbose"),
    "dot": ("general", "generate_dot"),
    "sampled_dot": ("general", "generate_sampled_dot"),
    "sample_profile": ("general", "output_sample_profile"),
    "n_iterations": ("tree", "n_iterations"),
    "prob_snv": ("tree", "prob_snv"),
    "prob_cnv": ("tree", "prob_cnv"),
    "prob_death": ("tree", "prob_death"),
    "max_population_size": ("tree", "max_population_size"),
    "min_nodes": ("tree", "min_nodes"),
    "max_nodes": ("tree", "max_nodes"),
    "upstream_cnv_effect": ("tree", "upstream_cnv_effect"),
    "n_samples": ("sampling", "n_samples"),
    "coverage": ("sampling", "coverage"),
    "max_subclones": ("sampling", "max_subclones"),
    "sample_size": ("sampling", "n_cells_per_sample"),
    "sequencing_error": ("sampling", "sequencing_error"),
    "min_nc": ("sampling", "min_normal_contamination"),
    "max_nc": ("sampling", "max_normal_contamination"),
    "localized": ("sampling", "localized"),
    "mix_subclone": ("sampling", "mix_neighbor_subtree_subclone"),
}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clonalsim-simulate",
        description="Simulate tumor lineage trees and multi-sample variant "
        "allele frequencies.",
    )
    parser.add_argument(
        "config",
        type=str,
        nargs="?",
        help="Specify a config file for the simulation.",
    )
    parser.add_argument(
        "--output-directory",
        "--dir",
        dest="output_directory",
        type=str,
        help="Directory where the output files should be created.",
    )
    parser.add_argument(
        "--n-trees", "-t", type=int, help="Number of trees to simulate."
    )
    parser.add_argument(
        "--n-iterations", "-i", type=int, help="Number of growth iterations."
    )
    parser.add_argument(
        "--prob-snv",
        type=float,
        help="Per node probability of a descendant population with a new "
        "SNV in each growth iteration.",
    )
    parser.add_argument(
        "--prob-cnv",
        type=float,
        help="Per node probability of a descendant population with a new "
        "CNV in each growth iteration.",
    )
    parser.add_argument(
        "--prob-death",
        type=float,
        help="Probability of population death in each growth iteration.",
    )
    parser.add_argument(
        "--max-population-size", type=int, help="Max size of a population."
    )
    parser.add_argument(
        "--min-nodes",
        type=int,
        help="Minimum number of live populations in a tree. Growth continues "
        "beyond the number of iterations until it is reached.",
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        help="Number of live populations at which tree growth stops.",
    )
    parser.add_argument(
        "--upstream-cnv-effect",
        action="store_true",
        default=None,
        help="Constrain new mutations by the parent's most recent mutation.",
    )
    parser.add_argument(
        "--n-samples",
        "-s",
        type=int,
        nargs="+",
        help="Numbers of samples to collect, the normal sample included. "
        "Accepts multiple values, e.g. 5 10 15.",
    )
    parser.add_argument(
        "--coverage",
        "-c",
        type=int,
        nargs="+",
        help="Simulated coverages. Accepts multiple values, e.g. 500 1000.",
    )
    parser.add_argument(
        "--max-subclones", type=int, help="Max number of subclones per sample."
    )
    parser.add_argument(
        "--sample-size", type=int, help="Number of cells per sample."
    )
    parser.add_argument(
        "--sequencing-error", "-e", type=float, help="Sequencing error rate."
    )
    parser.add_argument(
        "--min-nc",
        type=float,
        help="Minimum percentage of normal contamination per sample.",
    )
    parser.add_argument(
        "--max-nc",
        type=float,
        help="Maximum percentage of normal contamination per sample. Set to "
        "the minimum if lower.",
    )
    parser.add_argument(
        "--localized",
        action="store_true",
        default=None,
        help="Draw samples from disjoint subtrees instead of at random.",
    )
    parser.add_argument(
        "--mix-subclone",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="With localized sampling, add a subclone from a neighboring "
        "subtree to each sample.",
    )
    parser.add_argument(
        "--dot",
        action="store_true",
        default=None,
        help="Write DOT files of the simulated trees.",
    )
    parser.add_argument(
        "--sampled-dot",
        "--sdot",
        dest="sampled_dot",
        action="store_true",
        default=None,
        help="Write DOT files of the simulated trees colored by sample.",
    )
    parser.add_argument(
        "--sample-profile",
        action="store_true",
        default=None,
        help="Add a binary sample profile column to the VAF files.",
    )
    parser.add_argument("--seed", type=int, help="Random seed.")
    parser.add_argument(
        "--verbose", "-v", action="store_true", default=None, help="Verbose."
    )
    return parser


def get_parameters(
    args: argparse.Namespace,
) -> Dict[str, Dict[str, Any]]:
    """Reads the config file and applies the command line overrides."""
    config_string = ""
    if args.config is not None:
        with open(args.config, "r") as f:
            config_string = f.read()

    overrides = {}
    for option, (section, name) in OPTION_PARAMETERS.items():
        value = getattr(args, option)
        if value is not None:
            overrides.setdefault(section, {})[name] = value
    return setup_utilities.parse_config(config_string, overrides)


def main(argv: Optional[List[str]] = None):

    # --------------- Create Argument Parser & Read in Arguments -------------- #
    parser = create_parser()
    args = parser.parse_args(argv)

    parameters = get_parameters(args)
    setup_utilities.validate_parameters(parameters)

    general = parameters["general"]
    output_directory = general["output_directory"]

    # set up output directory
    setup_utilities.setup(output_directory, general["verbose"])

    # ---------------------- Run Pipeline ---------------------- #
    pipeline.simulate_lineage_trees(
        output_directory,
        n_trees=general["n_trees"],
        tree_parameters=parameters["tree"],
        sampling_parameters=parameters["sampling"],
        random_seed=general["random_seed"],
        generate_dot=general["generate_dot"],
        generate_sampled_dot=general["generate_sampled_dot"],
        output_sample_profile=general["output_sample_profile"],
    )


if __name__ == "__main__":
    main()
