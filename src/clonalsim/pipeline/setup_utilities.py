"""A file that stores setup utilities for the simulation pipeline.

This module supports the command line interface entry point in
``clonalsim_simulate.py``.
"""

import ast
import configparser
import logging
import os
from typing import Any, Dict, Optional

from clonalsim.mixins import (
    SimulationPipelineError,
    UnspecifiedConfigParameterError,
    logger,
)
from clonalsim.pipeline import constants
from clonalsim.simulator import (
    ClonalEvolutionSimulator,
    LocalizedTumorSampler,
    RandomTumorSampler,
)


def setup(output_directory_location: str, verbose: bool) -> None:
    """
    Setup the environment for the simulation pipeline.

    Parameters
    ----------
    output_directory_location
        Directory to create or reuse for simulation outputs.
    verbose
        Whether to enable verbose logging output.

    Returns
    -------
    None - Configures logging handlers and directory structure.
    """
    os.makedirs(output_directory_location, exist_ok=True)

    # handlers from an earlier setup would duplicate every line
    for handler in logger.handlers[:]:
        if isinstance(handler, logging.NullHandler):
            continue
        logger.removeHandler(handler)
        handler.close()

    level = logging.DEBUG if verbose else logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    )
    logger.addHandler(console_handler)

    # In addition to logging to the console, output logs to files.
    output_handler = logging.FileHandler(
        os.path.join(output_directory_location, "simulate.log")
    )
    output_handler.setLevel(level)
    logger.addHandler(output_handler)

    error_handler = logging.FileHandler(
        os.path.join(output_directory_location, "simulate.err")
    )
    error_handler.setLevel(logging.ERROR)
    logger.addHandler(error_handler)


def parse_config(
    config_string: str,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Parse simulation settings from a string.

    Parameters
    ----------
    config_string
        Contents of the configuration file to interpret.
    overrides
        Parameter values taking precedence over the configuration file,
        keyed by section.

    Returns
    -------
    Dict[str, Dict[str, Any]] - Mapping of sections (general, tree,
    sampling) to their parameter dictionaries.

    Raises
    ------
    UnspecifiedConfigParameterError
        Raised when the output directory is not specified.
    """
    config = configparser.ConfigParser()

    # load in defaults
    config.read_dict(constants.DEFAULT_SIMULATION_PARAMETERS)

    config.read_string(config_string)

    parameters = {}
    for key in config:
        if key == configparser.DEFAULTSECT:
            continue
        parameters[key] = {
            k: ast.literal_eval(v) for k, v in config[key].items()
        }

    for section, values in (overrides or {}).items():
        parameters[section].update(values)

    if parameters["general"].get("output_directory") is None:
        raise UnspecifiedConfigParameterError(
            "Please specify the output_directory for the simulation."
        )

    # single values are accepted where lists are expected
    for key in ("n_samples", "coverage"):
        if isinstance(parameters["sampling"][key], int):
            parameters["sampling"][key] = [parameters["sampling"][key]]

    return parameters


def validate_parameters(parameters: Dict[str, Dict[str, Any]]) -> None:
    """Checks all parameters before any simulation work starts.

    The tree simulator and tumor samplers are built once with the given
    parameters so that their own checks run up front.

    Args:
        parameters: Parameters as returned by `parse_config`

    Raises:
        SimulationPipelineError if the number of trees, the numbers of samples
            or the coverages are out of range.
        TreeSimulatorError, TumorSamplerError if the tree or sampling
            parameters are invalid.
    """
    general = parameters["general"]
    sampling = parameters["sampling"]

    if general["n_trees"] < 1:
        raise SimulationPipelineError("Number of trees must be at least 1.")
    if len(sampling["n_samples"]) == 0 or len(sampling["coverage"]) == 0:
        raise SimulationPipelineError(
            "At least one number of samples and one coverage are required."
        )
    for n_samples in sampling["n_samples"]:
        if n_samples < 2:
            raise SimulationPipelineError(
                "Number of samples must be at least 2, the normal sample "
                "included."
            )
    for coverage in sampling["coverage"]:
        if coverage < 1:
            raise SimulationPipelineError("Coverage must be at least 1.")
    if not 0 <= sampling["sequencing_error"] <= 1:
        raise SimulationPipelineError("Sequencing error must be in [0, 1].")

    ClonalEvolutionSimulator(**parameters["tree"])
    get_tumor_sampler(sampling, sampling["n_samples"][0] - 1)


def get_tumor_sampler(
    sampling_parameters: Dict[str, Any], n_samples: int, rng=None
):
    """Builds the tumor sampler selected by the sampling parameters.

    Args:
        sampling_parameters: The "sampling" section of the parameters
        n_samples: Number of tumor samples to draw
        rng: A random number generator shared with the sampler

    Returns:
        A LocalizedTumorSampler if localized sampling is enabled, a
        RandomTumorSampler otherwise.
    """
    kwargs = dict(
        max_subclones=sampling_parameters["max_subclones"],
        n_cells_per_sample=sampling_parameters["n_cells_per_sample"],
        min_normal_contamination=sampling_parameters[
            "min_normal_contamination"
        ],
        max_normal_contamination=sampling_parameters[
            "max_normal_contamination"
        ],
        rng=rng,
    )
    if sampling_parameters["localized"]:
        return LocalizedTumorSampler(
            n_samples,
            mix_neighbor_subtree_subclone=sampling_parameters[
                "mix_neighbor_subtree_subclone"
            ],
            **kwargs,
        )
    return RandomTumorSampler(n_samples, **kwargs)
