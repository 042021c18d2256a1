"""Pipelines orchestrating store, navigation and aggregation."""

from .chart_pipeline import ChartPipeline, ChartView

__all__ = ["ChartPipeline", "ChartView"]
