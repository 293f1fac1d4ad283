# tests/test_aggregator.py

"""
Score Aggregator Tests - normalisation, mean and worst strategies
"""

from decimal import Decimal

import pytest

from skin_wellness.models.category import ParameterScore
from skin_wellness.models.enumerations import AggregationStrategy
from skin_wellness.scoring.aggregator import (
    NEUTRAL_LEVEL,
    ScoreAggregator,
    aggregate,
    normalize,
)


def _param(key, score, max_scale=4):
    return ParameterScore(key=key, label=key, score_value=score, max_scale=max_scale)


class TestNormalize:
    """Tests for mapping 1..max onto [0, 1]."""

    def test_best_option_is_zero(self):
        assert normalize(_param("pores", 1)) == Decimal("0")

    def test_worst_option_is_one(self):
        assert normalize(_param("pores", 4)) == Decimal("1")

    def test_single_option_scale(self):
        assert normalize(_param("x", 1, max_scale=1)) == Decimal("0")

    def test_midpoint(self):
        assert normalize(_param("redness_present", 3, max_scale=5)) == Decimal("0.5")


class TestMeanStrategy:
    """Tests for the default mean aggregation."""

    def test_empty_yields_neutral(self):
        assert aggregate([]) == NEUTRAL_LEVEL == 5

    def test_all_best(self):
        params = [_param(k, 1) for k in ("oiliness", "pores")]
        assert aggregate(params) == 0

    def test_all_worst(self):
        params = [_param(k, 4) for k in ("oiliness", "pores")]
        assert aggregate(params) == 10

    def test_mixed_scores(self):
        """[3, 1, 2] on 1..4 -> mean 1/3 -> 3."""
        params = [_param("a", 3), _param("b", 1), _param("c", 2)]
        assert aggregate(params) == 3

    def test_half_rounds_up(self):
        """[2, 1] on 1..3 -> mean 0.25 -> 2.5 -> 3."""
        params = [_param("a", 2, max_scale=3), _param("b", 1, max_scale=3)]
        assert aggregate(params) == 3

    def test_blemish_fixture(self, blemish_parameters):
        assert aggregate(blemish_parameters) == 2

    def test_order_does_not_matter(self, blemish_parameters):
        assert aggregate(list(reversed(blemish_parameters))) == aggregate(blemish_parameters)

    def test_accepts_generator(self, blemish_parameters):
        assert aggregate(p for p in blemish_parameters) == 2


class TestWorstStrategy:
    """Tests for the weighted worst-parameter strategy."""

    @pytest.fixture
    def worst(self):
        return ScoreAggregator(AggregationStrategy.WORST)

    def test_empty_yields_neutral(self, worst):
        assert worst.aggregate([]) == NEUTRAL_LEVEL

    def test_worst_parameter_wins(self, worst):
        params = [_param("oiliness", 1), _param("pores", 3)]
        assert worst.aggregate(params) == 7

    def test_redness_weighted_up(self, worst):
        """redness_present 3/5 -> 5.0 x 1.3 = 6.5 -> 7."""
        params = [_param("redness_present", 3, max_scale=5)]
        assert worst.aggregate(params) == 7

    def test_weighted_value_capped_at_ten(self, worst):
        params = [_param("couperose_present", 4)]
        assert worst.weighted_value(params[0]) == Decimal("10")
        assert worst.aggregate(params) == 10

    def test_predictive_factors_weighted_down(self, worst):
        params = [_param("predictive_factors_dryness", 4)]
        assert worst.aggregate(params) == 5

    def test_excluded_parameters_ignored(self, worst):
        params = [_param("freckles", 3, max_scale=3), _param("pores", 2)]
        assert worst.weighted_value(params[0]) is None
        assert worst.aggregate(params) == 3

    def test_conditional_parameters_ignored(self, worst):
        params = [_param("is_rosacea", 3, max_scale=3)]
        assert worst.aggregate(params) == 0

    def test_unknown_key_treated_as_severity(self, worst):
        assert worst.aggregate([_param("not_catalogued", 4)]) == 10


class TestStrategySelection:
    """Tests for constructing aggregators."""

    def test_default_is_mean(self):
        assert ScoreAggregator().strategy == AggregationStrategy.MEAN

    def test_strategy_from_string(self):
        assert ScoreAggregator("worst").strategy == AggregationStrategy.WORST

    def test_invalid_strategy_rejected(self):
        with pytest.raises(ValueError):
            ScoreAggregator("median")
