"""
Dependencies - Skin Wellness Visualization API
skin_wellness/core/dependencies.py

FastAPI dependency injection for the registry, aggregator and geometry engine.
"""

from functools import lru_cache

from skin_wellness.chart.geometry import ChartDimensions, PolarGeometry
from skin_wellness.config import get_settings
from skin_wellness.scoring.aggregator import ScoreAggregator
from skin_wellness.scoring.category_registry import CATEGORY_REGISTRY, CategoryRegistry


@lru_cache()
def get_category_registry() -> CategoryRegistry:
    """Get the compiled-in category registry."""
    return CATEGORY_REGISTRY


@lru_cache()
def get_score_aggregator() -> ScoreAggregator:
    """Get cached ScoreAggregator using the configured strategy."""
    return ScoreAggregator(get_settings().AGGREGATION_STRATEGY)


@lru_cache()
def get_polar_geometry() -> PolarGeometry:
    """Get cached PolarGeometry sized from settings."""
    return PolarGeometry(ChartDimensions.from_settings(get_settings()))
