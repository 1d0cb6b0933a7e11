"""
Parent selection strategies.
"""

from .rank import select_rank, DEFAULT_RANK_SELECTION_BIAS

__all__ = [
    "select_rank",
    "DEFAULT_RANK_SELECTION_BIAS",
]
