"""
tuneup - Turn a general-purpose Mac into a dedicated server.

Apply a fixed set of host tunables, or preview them with --dry-run.
"""

from tuneup.modes import ExecutionMode
from tuneup.optimizer import VERSION, Optimizer

__version__ = VERSION
__all__ = ["ExecutionMode", "Optimizer", "__version__"]
