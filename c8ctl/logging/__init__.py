"""
Logging system for c8ctl.

Diagnostic logging only. User-facing messages go through c8ctl.cli.output.
"""

from c8ctl.logging.config import (
    ColorFormatter,
    configure_logging,
    get_logger,
    is_debug_mode,
    set_debug_mode,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "set_debug_mode",
    "is_debug_mode",
    "ColorFormatter",
]
