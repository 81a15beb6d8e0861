"""Top-level for clonalsim development."""

import importlib.metadata as importlib_metadata
import sys

from . import data, mixins, pipeline
from . import plotting as pl
from . import simulator as sim
from . import tools as tl

package_name = "clonalsim"
__version__ = importlib_metadata.version(package_name)

sys.modules.update({f"{__name__}.{m}": globals()[m] for m in ["tl", "pl", "sim"]})
del sys

__all__ = ["data", "mixins", "pipeline", "pl", "sim", "tl"]
