"""Prose metrics domain."""

from forge_ai.domain.metrics.analyzer import analyze
from forge_ai.domain.metrics.models import TemperatureMetrics

__all__ = [
    "TemperatureMetrics",
    "analyze",
]
