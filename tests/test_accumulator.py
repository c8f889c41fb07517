# tests/test_accumulator.py
"""
Tests for the drift accumulator.

Covers:
- Passivity predicate boundaries
- Accumulation only for DRIFT + passive
- Decay at twice the accumulation rate, clamped at zero
- Purity (input state untouched)
- Custom configuration
"""

import random

import pytest

from focus_nudge.drift import DriftAccumulator, DriftAccumulatorConfig
from focus_nudge.models import BehaviorRates, DriftState, PageMode
from tests.helpers import ACTIVE, PASSIVE


def state_with(drift_ms: int) -> DriftState:
    return DriftState(accumulated_drift_ms=drift_ms)


class TestIsPassive:
    """Tests for the passivity predicate."""

    def test_boundary_values_are_passive(self):
        acc = DriftAccumulator()
        assert acc.is_passive(BehaviorRates(scroll_per_min=5, key_per_min=2))

    def test_low_scroll_is_not_passive(self):
        acc = DriftAccumulator()
        assert not acc.is_passive(BehaviorRates(scroll_per_min=4, key_per_min=0))

    def test_typing_is_not_passive(self):
        acc = DriftAccumulator()
        assert not acc.is_passive(BehaviorRates(scroll_per_min=50, key_per_min=3))

    def test_clicks_are_ignored(self):
        acc = DriftAccumulator()
        quiet = BehaviorRates(scroll_per_min=10, key_per_min=0, click_per_min=0)
        clicky = BehaviorRates(scroll_per_min=10, key_per_min=0, click_per_min=100)
        assert acc.is_passive(quiet) == acc.is_passive(clicky)

    def test_zero_rates_are_not_passive(self):
        assert not DriftAccumulator().is_passive(BehaviorRates())


class TestUpdate:
    """Tests for DriftAccumulator.update."""

    def test_drift_and_passive_accumulates(self):
        acc = DriftAccumulator()
        new = acc.update(state_with(1_000), 5_000, PageMode.DRIFT, PASSIVE)
        assert new.accumulated_drift_ms == 6_000

    def test_good_mode_decays_twice_as_fast(self):
        acc = DriftAccumulator()
        new = acc.update(state_with(30_000), 5_000, PageMode.GOOD, PASSIVE)
        assert new.accumulated_drift_ms == 20_000

    def test_good_mode_clamps_at_zero(self):
        acc = DriftAccumulator()
        new = acc.update(state_with(3_000), 5_000, PageMode.GOOD, PASSIVE)
        assert new.accumulated_drift_ms == 0

    def test_unknown_mode_decays(self):
        acc = DriftAccumulator()
        new = acc.update(state_with(50_000), 5_000, PageMode.UNKNOWN, PASSIVE)
        assert new.accumulated_drift_ms == 40_000

    def test_active_user_on_drift_page_decays(self):
        acc = DriftAccumulator()
        new = acc.update(state_with(50_000), 5_000, PageMode.DRIFT, ACTIVE)
        assert new.accumulated_drift_ms == 40_000

    def test_zero_elapsed_is_a_no_op_for_drift(self):
        acc = DriftAccumulator()
        new = acc.update(state_with(7_000), 0, PageMode.GOOD, ACTIVE)
        assert new.accumulated_drift_ms == 7_000

    def test_records_observed_mode(self):
        acc = DriftAccumulator()
        new = acc.update(state_with(0), 5_000, PageMode.GOOD, ACTIVE)
        assert new.last_observed_mode == PageMode.GOOD

    def test_input_state_is_not_mutated(self):
        acc = DriftAccumulator()
        original = state_with(1_000)
        acc.update(original, 5_000, PageMode.DRIFT, PASSIVE)
        assert original.accumulated_drift_ms == 1_000
        assert original.last_observed_mode == PageMode.UNKNOWN

    def test_preserves_timing_fields(self):
        acc = DriftAccumulator()
        original = DriftState(accumulated_drift_ms=0, last_nudge_at_ms=123, last_tick_at_ms=456)
        new = acc.update(original, 5_000, PageMode.DRIFT, PASSIVE)
        assert new.last_nudge_at_ms == 123
        assert new.last_tick_at_ms == 456

    def test_negative_elapsed_rejected(self):
        with pytest.raises(ValueError):
            DriftAccumulator().update(state_with(0), -1, PageMode.DRIFT, PASSIVE)

    def test_never_negative_over_random_sequences(self):
        """Accumulator stays non-negative for arbitrary update sequences."""
        rng = random.Random(1234)
        acc = DriftAccumulator()
        state = state_with(0)
        modes = list(PageMode)
        for _ in range(2_000):
            behavior = BehaviorRates(
                scroll_per_min=rng.randint(0, 20),
                key_per_min=rng.randint(0, 5),
                click_per_min=rng.randint(0, 5),
            )
            state = acc.update(state, rng.randint(0, 20_000), rng.choice(modes), behavior)
            assert state.accumulated_drift_ms >= 0


class TestConfig:
    """Tests for DriftAccumulatorConfig overrides."""

    def test_defaults_match_constants(self):
        cfg = DriftAccumulatorConfig()
        assert cfg.passive_scroll_threshold == 5
        assert cfg.passive_key_threshold == 2
        assert cfg.decay_rate == 2

    def test_custom_decay_rate(self):
        acc = DriftAccumulator(DriftAccumulatorConfig(decay_rate=1))
        new = acc.update(state_with(10_000), 5_000, PageMode.GOOD, PASSIVE)
        assert new.accumulated_drift_ms == 5_000

    def test_custom_thresholds(self):
        acc = DriftAccumulator(DriftAccumulatorConfig(passive_scroll_threshold=20))
        assert not acc.is_passive(PASSIVE)

    def test_decay_rate_must_be_positive(self):
        with pytest.raises(ValueError):
            DriftAccumulatorConfig(decay_rate=0)
