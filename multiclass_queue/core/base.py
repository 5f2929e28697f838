"""Base types for the multi-class queueing system."""

from dataclasses import dataclass
from enum import Enum


class CustomerClass(Enum):
    """Customer classes. Declaration order is the arrival tie-break order."""
    A = 'A'
    B = 'B'
    C = 'C'


class ConfigurationError(ValueError):
    """Raised when simulation parameters are rejected at construction."""


class NoDataError(LookupError):
    """Raised when a statistic is requested for a bucket with no samples."""


class GeneratorInvariantError(RuntimeError):
    """Raised when the variate source produces a non-positive or non-finite value."""


class EmptyLineError(IndexError):
    """Raised when a departure is requested while the server is idle."""


@dataclass
class Customer:
    """Represents a customer present in the system."""
    customer_id: int
    customer_class: CustomerClass
    arrival_time: float
    wait: float = 0.0   # Total time in system so far
    delay: float = 0.0  # Part of wait spent before entering service
    in_service: bool = False

    def accrue(self, dt: float) -> None:
        """Add an elapsed interval to this customer's accumulated times."""
        if dt < 0:
            raise ValueError(f"Elapsed time must be non-negative, got {dt}")
        self.wait += dt
        if not self.in_service:
            self.delay += dt
