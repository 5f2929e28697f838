"""Shared fixtures: scripted variate sources for hand-traced runs."""

from typing import Callable, Dict

import pytest


def deterministic_distribution(value: float) -> Callable[[], float]:
    """Always return the same value."""
    return lambda: value


def sequence(*values: float) -> Callable[[], float]:
    """Return the given values in order, then keep repeating the last one."""
    remaining = list(values)

    def sample():
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return sample


class ScriptedVariateSource:
    """Stand-in variate source that picks a stream by the requested mean."""

    def __init__(self, streams: Dict[float, Callable[[], float]]):
        self.streams = {round(mean, 9): stream for mean, stream in streams.items()}
        self.requests = []

    def seed(self, value: int) -> None:
        pass

    def next_exponential(self, mean: float) -> float:
        self.requests.append(mean)
        return self.streams[round(mean, 9)]()


@pytest.fixture
def three_arrival_source():
    """
    Class A arrives at t=1, 3, 5 and then not before t=105.
    Classes B and C (rate 0.001) first arrive at t=1000. Service (rate 0.5) takes 2.
    """
    return ScriptedVariateSource({
        1.0: sequence(1.0, 2.0, 2.0, 100.0),
        1000.0: deterministic_distribution(1000.0),
        2.0: deterministic_distribution(2.0),
    })
