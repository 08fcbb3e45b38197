"""Mini README: Core package initializer for the expense tracker.

Exposes the logger factory so entry points can configure logging before
importing heavier modules such as the web interface.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
