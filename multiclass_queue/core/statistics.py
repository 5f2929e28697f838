"""Statistics accumulated over a simulation run."""

from typing import Dict, List, Tuple
import numpy as np

from multiclass_queue.core.base import CustomerClass, NoDataError


class StatisticsCollector:
    """
    Append-only accumulator of per-class wait samples and queue length samples.

    Queue length is sampled once after every arrival and every departure.
    mean_queue_length() is the plain mean of those samples, which only
    approximates the time average; the time-weighted value is kept
    separately in time_average_queue_length().
    """

    def __init__(self):
        self._wait_samples: Dict[CustomerClass, List[float]] = {c: [] for c in CustomerClass}
        self._delay_samples: Dict[CustomerClass, List[float]] = {c: [] for c in CustomerClass}
        self._queue_length_samples: List[int] = []

        # Integral of number in system over time
        self._size_time_product = 0.0
        self._last_update_time = 0.0

    def record_wait(self, customer_class: CustomerClass, value: float) -> None:
        self._wait_samples[customer_class].append(value)

    def record_delay(self, customer_class: CustomerClass, value: float) -> None:
        self._delay_samples[customer_class].append(value)

    def record_queue_length(self, n: int) -> None:
        self._queue_length_samples.append(n)

    def update_size_metrics(self, new_time: float, current_size: int) -> None:
        """Accumulate the size-time integral before the system state changes."""
        time_delta = new_time - self._last_update_time
        self._size_time_product += current_size * time_delta
        self._last_update_time = new_time

    def wait_samples(self, customer_class: CustomerClass) -> Tuple[float, ...]:
        return tuple(self._wait_samples[customer_class])

    def delay_samples(self, customer_class: CustomerClass) -> Tuple[float, ...]:
        return tuple(self._delay_samples[customer_class])

    @property
    def queue_length_samples(self) -> Tuple[int, ...]:
        return tuple(self._queue_length_samples)

    def wait_count(self, customer_class: CustomerClass) -> int:
        return len(self._wait_samples[customer_class])

    def has_wait_data(self, customer_class: CustomerClass) -> bool:
        return self.wait_count(customer_class) > 0

    def mean_wait(self, customer_class: CustomerClass) -> float:
        """
        Mean time in system for one class.

        Raises NoDataError if no customer of that class has departed.
        """
        samples = self._wait_samples[customer_class]
        if not samples:
            raise NoDataError(f"No wait samples recorded for class {customer_class.value}")
        return float(np.mean(samples))

    def mean_delay(self, customer_class: CustomerClass) -> float:
        """Mean time spent waiting before service for one class."""
        samples = self._delay_samples[customer_class]
        if not samples:
            raise NoDataError(f"No delay samples recorded for class {customer_class.value}")
        return float(np.mean(samples))

    def mean_queue_length(self) -> float:
        """Unweighted mean of the queue lengths sampled at events."""
        if not self._queue_length_samples:
            return 0.0
        return float(np.mean(self._queue_length_samples))

    def time_average_queue_length(self) -> float:
        """Time-weighted average number of customers in the system."""
        if self._last_update_time > 0:
            return self._size_time_product / self._last_update_time
        return 0.0

    def total_departures(self) -> int:
        return sum(len(samples) for samples in self._wait_samples.values())

    def summary(self) -> Dict:
        """Get a summary of the collected statistics. Means without data are NaN."""
        summary = {
            'mean_queue_length': self.mean_queue_length(),
            'time_average_queue_length': self.time_average_queue_length(),
            'queue_length_samples': len(self._queue_length_samples),
            'classes': {}
        }

        for customer_class in CustomerClass:
            has_data = self.has_wait_data(customer_class)
            summary['classes'][customer_class.value] = {
                'departures': self.wait_count(customer_class),
                'mean_wait': self.mean_wait(customer_class) if has_data else np.nan,
                'mean_delay': self.mean_delay(customer_class) if has_data else np.nan,
            }

        return summary
