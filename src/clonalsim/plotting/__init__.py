"""Top level for plotting."""

from .graphviz import to_dot, to_sampled_dot

__all__ = [
    "to_dot",
    "to_sampled_dot",
]
