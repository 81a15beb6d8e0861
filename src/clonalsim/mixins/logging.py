"""Package-wide logger.

Handlers are attached by :func:`clonalsim.pipeline.setup_utilities.setup`.
"""
import logging

logger = logging.getLogger("clonalsim")
logger.setLevel(logging.DEBUG)
logger.addHandler(logging.NullHandler())
