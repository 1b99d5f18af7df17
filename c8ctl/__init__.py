"""
c8ctl - command-line client for Camunda 8 orchestration clusters.
"""

from c8ctl.logging import (
    configure_logging,
    get_logger,
    is_debug_mode,
    set_debug_mode,
)
from c8ctl.version import __version__

__all__ = [
    "__version__",
    "configure_logging",
    "get_logger",
    "is_debug_mode",
    "set_debug_mode",
]
