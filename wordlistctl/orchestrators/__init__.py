"""Orchestration layer.

This module contains high-level workflow orchestrators that coordinate
the execution of acquisition operations.
"""

from wordlistctl.orchestrators.acquisition import Acquisition
from wordlistctl.orchestrators.wordlist_fetch import WordlistFetch, destination_for

__all__ = [
    "Acquisition",
    "WordlistFetch",
    "destination_for",
]
