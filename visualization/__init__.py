"""Visualization utilities for SubTally dashboards."""

from .charts import build_breakdown_chart, build_share_chart
from .theme import theme_tokens

__all__ = [
    "build_breakdown_chart",
    "build_share_chart",
    "theme_tokens",
]
