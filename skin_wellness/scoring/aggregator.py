# skin_wellness/scoring/aggregator.py
"""
Score Aggregator
----------------
Reduces a category's parameter scores to one 0-10 visibility level.

Each parameter is first normalised to [0, 1]:
    n = (score_value − 1) / (max_scale − 1)      (0 when max_scale == 1)

MEAN strategy (default):
    level = round_half_up( mean(n) × 10 )        clamped to [0, 10]

WORST strategy (weighted worst parameter wins):
    conditional parameters, freckles and moles    excluded
    redness_present, couperose_present            × 1.3
    predictive_factors_*                          × 0.5
    each weighted value capped at 10
    level = round_half_up( max(weighted) )

An empty list always yields NEUTRAL_LEVEL (5), the same fallback the chart
uses for a category with no data. Values are sorted before they are summed,
so the result only depends on the multiset of parameters.
"""
import structlog
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from skin_wellness.models.category import ParameterScore
from skin_wellness.models.enumerations import AggregationStrategy, ParameterScoreType
from skin_wellness.scoring.parameter_catalog import get_parameter_config
from skin_wellness.scoring.utils import clamp, mean, round_half_up

logger = structlog.get_logger(__name__)

NEUTRAL_LEVEL = 5

_TEN = Decimal("10")

# Weights for the WORST strategy, keyed by parameter key
_EXCLUDED_PARAMETERS = frozenset({"freckles", "moles"})
_WEIGHT_OVERRIDES: Dict[str, Decimal] = {
    "redness_present":                      Decimal("1.3"),
    "couperose_present":                    Decimal("1.3"),
    "predictive_factors_hyperpigmentation": Decimal("0.5"),
    "predictive_factors_dryness":           Decimal("0.5"),
    "predictive_factors_dehydration":       Decimal("0.5"),
}


def normalize(param: ParameterScore) -> Decimal:
    """Map score_value in 1..max_scale onto [0, 1]."""
    if param.max_scale <= 1:
        return Decimal("0")
    value = Decimal(param.score_value - 1) / Decimal(param.max_scale - 1)
    return clamp(value, Decimal("0"), Decimal("1"))


def _is_conditional(key: str) -> bool:
    config = get_parameter_config(key)
    return config is not None and config.type == ParameterScoreType.CONDITIONAL


class ScoreAggregator:
    """
    Usage:
        agg = ScoreAggregator()
        agg.aggregate(params)                         # mean strategy
        ScoreAggregator(AggregationStrategy.WORST).aggregate(params)
    """

    def __init__(self, strategy: AggregationStrategy = AggregationStrategy.MEAN):
        self.strategy = AggregationStrategy(strategy)

    def aggregate(self, parameters: Iterable[ParameterScore]) -> int:
        params = list(parameters)
        if not params:
            return NEUTRAL_LEVEL

        if self.strategy == AggregationStrategy.WORST:
            level = self._worst(params)
        else:
            level = self._mean(params)

        logger.debug(
            "category_level_aggregated",
            strategy=self.strategy.value,
            parameter_count=len(params),
            level=level,
        )
        return level

    def _mean(self, params: List[ParameterScore]) -> int:
        avg = mean([normalize(p) for p in params])
        return round_half_up(clamp(avg * _TEN))

    def weighted_value(self, param: ParameterScore) -> Optional[Decimal]:
        """Weighted 0-10 value under the WORST strategy, or None when excluded."""
        if param.key in _EXCLUDED_PARAMETERS or _is_conditional(param.key):
            return None
        value = normalize(param) * _TEN
        value *= _WEIGHT_OVERRIDES.get(param.key, Decimal("1"))
        return min(_TEN, value)

    def _worst(self, params: List[ParameterScore]) -> int:
        values = [v for v in (self.weighted_value(p) for p in params) if v is not None]
        if not values:
            return 0
        return round_half_up(max(values))


_default_aggregator = ScoreAggregator()


def aggregate(parameters: Iterable[ParameterScore]) -> int:
    """Aggregate with the default (mean) strategy."""
    return _default_aggregator.aggregate(parameters)
