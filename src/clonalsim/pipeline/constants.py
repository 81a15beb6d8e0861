"""Stores constants for the simulation pipeline."""

SIMULATION_RESULTS_DIRECTORY = "simulation_results"

# configparser stores values as strings, read back with ast.literal_eval.
DEFAULT_SIMULATION_PARAMETERS = {
    "general": {
        "n_trees": 100,
        "random_seed": "None",
        "verbose": False,
        "generate_dot": False,
        "generate_sampled_dot": False,
        "output_sample_profile": False,
    },
    "tree": {
        "n_iterations": 50,
        "prob_snv": 0.15,
        "prob_cnv": 0.02,
        "prob_death": 0.06,
        "max_population_size": 1000000,
        "min_nodes": 10,
        "max_nodes": 1000,
        "upstream_cnv_effect": False,
    },
    "sampling": {
        "n_samples": [5],
        "coverage": [1000],
        "localized": False,
        "mix_neighbor_subtree_subclone": True,
        "max_subclones": 5,
        "n_cells_per_sample": 100000,
        "min_normal_contamination": 0.0,
        "max_normal_contamination": 20.0,
        "sequencing_error": 0.001,
    },
}
