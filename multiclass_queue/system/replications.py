"""Independent replications of a simulation and their summary statistics."""

import dataclasses
import logging
from typing import Dict, List

import numpy as np
from scipy import stats

from multiclass_queue.core import ConfigurationError, CustomerClass
from multiclass_queue.system.config import SimulationConfig
from multiclass_queue.system.queueing_system import SimulationEngine

logger = logging.getLogger(__name__)


def _flatten_metrics(metrics: Dict) -> Dict[str, float]:
    """Flatten one run's metrics into {metric_name: value}."""
    flat = {
        'mean_queue_length': metrics['mean_queue_length'],
        'time_average_queue_length': metrics['time_average_queue_length'],
        'utilization': metrics['system']['utilization'],
        'throughput': metrics['system']['throughput'],
    }
    for customer_class in CustomerClass:
        class_metrics = metrics['classes'][customer_class.value]
        flat[f'mean_wait_{customer_class.value}'] = class_metrics['mean_wait']
        flat[f'mean_delay_{customer_class.value}'] = class_metrics['mean_delay']
    return flat


def confidence_interval(values: List[float], confidence_level: float = 0.95) -> Dict:
    """
    Summarize replication outputs with a Student-t confidence interval.

    NaN values (runs without data for the metric) are left out; 'count'
    reports how many runs contributed.
    """
    data = np.asarray(values, dtype=float)
    data = data[~np.isnan(data)]
    count = len(data)

    if count == 0:
        return {'count': 0, 'mean': np.nan, 'std': np.nan, 'min': np.nan,
                'max': np.nan, 'half_width': np.nan}

    mean = float(np.mean(data))
    std = float(np.std(data, ddof=1)) if count > 1 else np.nan
    if count > 1:
        t_score = stats.t.ppf(1 - (1 - confidence_level) / 2, count - 1)
        half_width = float(t_score * std / np.sqrt(count))
    else:
        half_width = np.nan

    return {
        'count': count,
        'mean': mean,
        'std': std,
        'min': float(np.min(data)),
        'max': float(np.max(data)),
        'half_width': half_width
    }


def run_replications(config: SimulationConfig,
                     num_replications: int,
                     base_seed: int = 42,
                     confidence_level: float = 0.95) -> Dict:
    """Run multiple replications with seeds base_seed, base_seed + 1, ... and compute statistics."""
    if num_replications < 1:
        raise ConfigurationError(f"num_replications must be at least 1, got {num_replications}")
    if not 0 < confidence_level < 1:
        raise ConfigurationError(f"confidence_level must be in (0, 1), got {confidence_level}")

    results = []
    for i in range(num_replications):
        replication_config = dataclasses.replace(config, seed=base_seed + i)
        engine = SimulationEngine(replication_config)
        engine.run()
        results.append(_flatten_metrics(engine.get_metrics_summary()))
        logger.debug("Replication %d/%d done", i + 1, num_replications)

    summary = {
        'replications': num_replications,
        'horizon': config.horizon,
        'confidence_level': confidence_level,
        'metrics': {}
    }
    for key in results[0]:
        values = [r[key] for r in results]
        summary['metrics'][key] = confidence_interval(values, confidence_level)

    return summary
