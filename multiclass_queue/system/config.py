"""Simulation parameters and their validation."""

import math
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Mapping, Optional

from multiclass_queue.core.base import ConfigurationError, CustomerClass

# -log of the smallest nonzero uniform, 2**-53, bounds every exponential draw
MAX_VARIATE_FACTOR = 53 * math.log(2)


def _check_positive(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigurationError(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be positive and finite, got {value!r}")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Validated parameters for one simulation run.

    Rates are reciprocals of means: a class with arrival rate 0.5 has a mean
    inter-arrival time of 2. The horizon is in the same time unit.

    With hard_horizon False the event that crosses the horizon is still
    applied, so the clock may finish past the horizon. With hard_horizon
    True no event later than the horizon is applied and the clock stops
    exactly at the horizon.
    """
    arrival_rates: Mapping[CustomerClass, float] = field(hash=False)
    service_rate: float
    horizon: float
    hard_horizon: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        missing = [c.value for c in CustomerClass if c not in self.arrival_rates]
        if missing:
            raise ConfigurationError(f"Missing arrival rate for classes: {', '.join(missing)}")
        for customer_class in CustomerClass:
            _check_positive(f"arrival rate of class {customer_class.value}",
                            self.arrival_rates[customer_class])
        _check_positive("service rate", self.service_rate)
        _check_positive("horizon", self.horizon)

        for customer_class in CustomerClass:
            self._check_draw_range(f"arrival rate of class {customer_class.value}",
                                   self.arrival_rates[customer_class])
        self._check_draw_range("service rate", self.service_rate)

        rates = {c: float(self.arrival_rates[c]) for c in CustomerClass}
        object.__setattr__(self, 'arrival_rates', MappingProxyType(rates))

    def _check_draw_range(self, name: str, rate: float) -> None:
        """Reject rates so small that a draw or the clock could overflow mid-run."""
        largest_draw = (1 / rate) * MAX_VARIATE_FACTOR
        # The clock can pass the horizon by one draw, and the next candidate adds another
        if not math.isfinite(largest_draw) or not math.isfinite(self.horizon + 2 * largest_draw):
            raise ConfigurationError(f"{name} is too small: {rate!r}")

    @classmethod
    def from_rates(cls,
                   lambda_a: float,
                   lambda_b: float,
                   lambda_c: float,
                   mu: float,
                   horizon: float,
                   hard_horizon: bool = False,
                   seed: Optional[int] = None) -> 'SimulationConfig':
        """Build a configuration from the three arrival rates, service rate and horizon."""
        return cls(
            arrival_rates={
                CustomerClass.A: lambda_a,
                CustomerClass.B: lambda_b,
                CustomerClass.C: lambda_c,
            },
            service_rate=mu,
            horizon=horizon,
            hard_horizon=hard_horizon,
            seed=seed
        )

    def mean_interarrival(self, customer_class: CustomerClass) -> float:
        return 1 / self.arrival_rates[customer_class]

    @property
    def mean_service(self) -> float:
        return 1 / self.service_rate
