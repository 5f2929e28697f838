"""Single-server, three-class queueing system and its next-event simulation loop."""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from multiclass_queue.core import (
    CustomerClass,
    Customer,
    GeneratorInvariantError,
    WaitingLine,
    StatisticsCollector,
)
from multiclass_queue.distributions import VariateSource
from multiclass_queue.system.config import SimulationConfig

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Event types. Lower values win ties between events at the same time."""
    DEPARTURE = 0
    ARRIVAL_A = 1
    ARRIVAL_B = 2
    ARRIVAL_C = 3


ARRIVAL_KINDS: Dict[CustomerClass, EventKind] = {
    CustomerClass.A: EventKind.ARRIVAL_A,
    CustomerClass.B: EventKind.ARRIVAL_B,
    CustomerClass.C: EventKind.ARRIVAL_C,
}
ARRIVAL_CLASSES: Dict[EventKind, CustomerClass] = {kind: c for c, kind in ARRIVAL_KINDS.items()}


@dataclass(frozen=True)
class EventRecord:
    """Outcome of one processed event."""
    time: float
    kind: EventKind
    customer_class: CustomerClass
    customer_id: int
    queue_length: int  # Number in system after the event


class SimulationEngine:
    """
    Next-event time-advance simulator.

    Holds the clock and four candidate event times: one arrival per class
    and one departure, which is infinite while the server is idle. Each step
    jumps the clock to the earliest candidate (departure first, then A, B, C
    on ties), accrues the elapsed time on every customer present, applies the
    event to the waiting line, samples the queue length and redraws the
    candidate that fired.

    The horizon is checked after each event, so by default the event that
    crosses it is still applied. See SimulationConfig.hard_horizon.
    """

    def __init__(self, config: SimulationConfig, variate_source: Optional[VariateSource] = None):
        self.config = config
        if variate_source is None:
            variate_source = VariateSource(config.seed)
        self.variate_source = variate_source
        self.reset()

    def reset(self) -> None:
        """Reset the system to initial state and draw the first arrivals."""
        self.current_time = 0.0
        self.waiting_line = WaitingLine()
        self.statistics = StatisticsCollector()
        self.next_customer_id = 0
        self.arrivals: Dict[CustomerClass, int] = {c: 0 for c in CustomerClass}
        self.departures: Dict[CustomerClass, int] = {c: 0 for c in CustomerClass}
        self.server_busy_time = 0.0
        self.total_steps = 0
        self.finished = False

        self.next_arrival: Dict[CustomerClass, float] = {
            c: self._draw(self.config.mean_interarrival(c)) for c in CustomerClass
        }
        self.next_departure = math.inf

    def _draw(self, mean: float) -> float:
        """Draw an exponential variate and enforce the generator contract."""
        value = self.variate_source.next_exponential(mean)
        if not math.isfinite(value) or value <= 0:
            raise GeneratorInvariantError(
                f"Variate source returned {value!r} for mean {mean!r}")
        return value

    def candidates(self) -> List[Tuple[float, EventKind]]:
        """Pending event times, in tie-break order."""
        events = [(self.next_departure, EventKind.DEPARTURE)]
        for customer_class in CustomerClass:
            events.append((self.next_arrival[customer_class], ARRIVAL_KINDS[customer_class]))
        return events

    def next_event(self) -> Tuple[float, EventKind]:
        """Earliest candidate event; ties go to the lower EventKind value."""
        return min(self.candidates(), key=lambda event: (event[0], event[1].value))

    def step(self) -> Optional[EventRecord]:
        """
        Process the next event.

        Returns the event record, or None if a hard horizon stopped the run
        before the next event.
        """
        if self.finished:
            raise RuntimeError("Simulation has already reached its horizon; call reset()")

        event_time, kind = self.next_event()

        if self.config.hard_horizon and event_time > self.config.horizon:
            self._advance_clock(self.config.horizon)
            self.finished = True
            return None

        self._advance_clock(event_time)

        if kind is EventKind.DEPARTURE:
            record = self._process_departure()
        else:
            record = self._process_arrival(ARRIVAL_CLASSES[kind])

        self.total_steps += 1
        if self.current_time >= self.config.horizon:
            self.finished = True
        return record

    def run(self) -> StatisticsCollector:
        """Run the simulation until the horizon and return the statistics."""
        logger.info(
            "Starting simulation: arrival rates A=%g B=%g C=%g, service rate %g, horizon %g",
            self.config.arrival_rates[CustomerClass.A],
            self.config.arrival_rates[CustomerClass.B],
            self.config.arrival_rates[CustomerClass.C],
            self.config.service_rate,
            self.config.horizon,
        )

        while not self.finished:
            self.step()

        logger.info(
            "Simulation finished at t=%.4f after %d events: %d arrivals, %d departures, %d in system",
            self.current_time, self.total_steps, self.total_arrivals(),
            self.total_departures(), self.in_system(),
        )
        return self.statistics

    def _advance_clock(self, new_time: float) -> None:
        """Move the clock forward and accrue the elapsed time on everyone present."""
        dt = new_time - self.current_time
        if dt < 0:
            raise RuntimeError(
                f"Clock cannot move backwards: {self.current_time!r} -> {new_time!r}")

        self.statistics.update_size_metrics(new_time, self.waiting_line.size())
        if self.waiting_line.is_server_busy():
            self.server_busy_time += dt

        self.current_time = new_time
        self.waiting_line.accrue_wait(dt)

    def _process_arrival(self, customer_class: CustomerClass) -> EventRecord:
        customer = Customer(
            customer_id=self.next_customer_id,
            customer_class=customer_class,
            arrival_time=self.current_time
        )
        self.next_customer_id += 1
        self.arrivals[customer_class] += 1

        if self.waiting_line.enqueue_or_serve(customer):
            self.next_departure = self.current_time + self._draw(self.config.mean_service)

        self.next_arrival[customer_class] = (
            self.current_time + self._draw(self.config.mean_interarrival(customer_class))
        )

        return self._record(ARRIVAL_KINDS[customer_class], customer)

    def _process_departure(self) -> EventRecord:
        customer = self.waiting_line.depart_head()
        self.departures[customer.customer_class] += 1
        self.statistics.record_wait(customer.customer_class, customer.wait)
        self.statistics.record_delay(customer.customer_class, customer.delay)

        if self.waiting_line.is_empty():
            self.next_departure = math.inf
        else:
            # New head is already in service
            self.next_departure = self.current_time + self._draw(self.config.mean_service)

        return self._record(EventKind.DEPARTURE, customer)

    def _record(self, kind: EventKind, customer: Customer) -> EventRecord:
        queue_length = self.waiting_line.size()
        self.statistics.record_queue_length(queue_length)
        logger.debug("t=%.6f %s customer=%d class=%s in_system=%d",
                     self.current_time, kind.name, customer.customer_id,
                     customer.customer_class.value, queue_length)
        return EventRecord(
            time=self.current_time,
            kind=kind,
            customer_class=customer.customer_class,
            customer_id=customer.customer_id,
            queue_length=queue_length
        )

    def total_arrivals(self) -> int:
        return sum(self.arrivals.values())

    def total_departures(self) -> int:
        return sum(self.departures.values())

    def in_system(self) -> int:
        return self.waiting_line.size()

    def utilization(self) -> float:
        """Fraction of elapsed time the server was busy."""
        if self.current_time > 0:
            return self.server_busy_time / self.current_time
        return 0.0

    def throughput(self) -> float:
        """Departures per unit of simulated time."""
        if self.current_time > 0:
            return self.total_departures() / self.current_time
        return 0.0

    def get_metrics_summary(self) -> Dict:
        """Get a summary of all system metrics."""
        metrics = self.statistics.summary()
        metrics['system'] = {
            'current_time': self.current_time,
            'total_arrivals': self.total_arrivals(),
            'total_departures': self.total_departures(),
            'customers_in_system': self.in_system(),
            'utilization': self.utilization(),
            'throughput': self.throughput(),
        }
        for customer_class in CustomerClass:
            metrics['classes'][customer_class.value]['arrivals'] = self.arrivals[customer_class]
        return metrics


def run(lambda_a: float,
        lambda_b: float,
        lambda_c: float,
        mu: float,
        horizon: float,
        seed: Optional[int] = None,
        variate_source: Optional[VariateSource] = None) -> StatisticsCollector:
    """Validate the parameters, run one simulation and return its statistics."""
    config = SimulationConfig.from_rates(lambda_a, lambda_b, lambda_c, mu, horizon, seed=seed)
    return SimulationEngine(config, variate_source).run()
