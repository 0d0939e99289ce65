"""Metrics collection utilities"""
from typing import Dict
from datetime import datetime
from collections import defaultdict


class MetricsCollector:
    """Collects counters and timings for team mutations"""

    def __init__(self):
        self.metrics = defaultdict(list)
        self.counters = defaultdict(int)

    def increment(self, metric: str, value: int = 1):
        """Increment a counter metric"""
        self.counters[metric] += value

    def record(self, metric: str, value: float):
        """Record a value for aggregation"""
        self.metrics[metric].append({
            'value': value,
            'timestamp': datetime.now()
        })

    def record_outcome(self, operation: str, outcome) -> None:
        """Count an outcome as ``<operation>_<status>[_<step>]``"""
        self.increment(f"{operation}_total")
        name = f"{operation}_{outcome.status.value}"
        if outcome.step is not None:
            name = f"{name}_{outcome.step.value}"
        self.increment(name)

    def get_summary(self) -> Dict:
        """Get metrics summary"""
        summary = {
            'counters': dict(self.counters),
            'aggregates': {}
        }

        for metric, values in self.metrics.items():
            if values:
                nums = [v['value'] for v in values]
                summary['aggregates'][metric] = {
                    'count': len(nums),
                    'avg': sum(nums) / len(nums),
                    'max': max(nums)
                }

        return summary


# Global metrics instance
metrics = MetricsCollector()
