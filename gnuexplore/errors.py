from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when series data cannot be turned into a consistent plot."""
