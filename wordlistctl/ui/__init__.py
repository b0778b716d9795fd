"""UI."""

from wordlistctl.ui.reporter import Reporter

__all__ = ["Reporter"]
