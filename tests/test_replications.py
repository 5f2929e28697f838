"""Tests for independent replications."""

import math

import pytest

from multiclass_queue import ConfigurationError, SimulationConfig, run_replications
from multiclass_queue.system import confidence_interval


def test_replications_summarize_every_metric():
    config = SimulationConfig.from_rates(0.2, 0.2, 0.2, 1.0, 400.0)

    summary = run_replications(config, num_replications=5, base_seed=10)

    assert summary['replications'] == 5
    assert summary['horizon'] == 400.0
    metrics = summary['metrics']
    for key in ['mean_queue_length', 'time_average_queue_length', 'utilization',
                'throughput', 'mean_wait_A', 'mean_wait_B', 'mean_wait_C',
                'mean_delay_A', 'mean_delay_B', 'mean_delay_C']:
        assert metrics[key]['count'] == 5
        assert metrics[key]['min'] <= metrics[key]['mean'] <= metrics[key]['max']
        assert metrics[key]['half_width'] >= 0
    assert 0 < metrics['utilization']['mean'] < 1


def test_replications_are_reproducible():
    config = SimulationConfig.from_rates(0.3, 0.1, 0.2, 1.5, 200.0)

    first = run_replications(config, 3, base_seed=1)
    second = run_replications(config, 3, base_seed=1)

    assert first['metrics']['mean_wait_A'] == second['metrics']['mean_wait_A']


def test_confidence_interval_skips_missing_values():
    interval = confidence_interval([1.0, float('nan'), 3.0])

    assert interval['count'] == 2
    assert interval['mean'] == 2.0
    assert interval['half_width'] > 0


def test_confidence_interval_single_value():
    interval = confidence_interval([4.0])

    assert interval['mean'] == 4.0
    assert math.isnan(interval['half_width'])


def test_confidence_interval_without_values():
    interval = confidence_interval([float('nan')])

    assert interval['count'] == 0
    assert math.isnan(interval['mean'])


@pytest.mark.parametrize('kwargs', [{'num_replications': 0},
                                    {'num_replications': 2, 'confidence_level': 1.5}])
def test_invalid_replication_settings(kwargs):
    config = SimulationConfig.from_rates(1.0, 1.0, 1.0, 4.0, 10.0)

    with pytest.raises(ConfigurationError):
        run_replications(config, **kwargs)
