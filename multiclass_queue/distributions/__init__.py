"""Random variable distributions for queueing systems."""

from .random_variables import (
    VariateSource,
    time_seed,
)

__all__ = [
    'VariateSource',
    'time_seed'
]
