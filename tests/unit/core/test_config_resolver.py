"""Tests for the config value resolvers."""

import logging

import pytest

from pomocat.config.resolver import resolve_delay, resolve_positive_integer


class TestResolvePositiveInteger:
    @pytest.mark.parametrize("value", [1, 25, 1500])
    def test_positive_int_passes_through(self, value, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolve_positive_integer(value, "work_duration_seconds", 99) == value
        assert caplog.records == []

    def test_positive_float_is_rounded_and_reported(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolve_positive_integer(299.6, "break_duration_seconds", 300) == 300
        assert "rounded" in caplog.text
        assert "break_duration_seconds" in caplog.text

    def test_round_to_nearest(self):
        assert resolve_positive_integer(4.4, "cycles_before_long_break", 4) == 4
        assert resolve_positive_integer(2.5, "cycles_before_long_break", 4) == 2
        assert resolve_positive_integer(7.51, "cycles_before_long_break", 4) == 8

    @pytest.mark.parametrize("value", [0, -1, -2.5, None, "25", True, float("nan"), [], 0.2])
    def test_invalid_values_use_default(self, value, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolve_positive_integer(value, "long_break_duration_seconds", 1200) == 1200
        assert "using default 1200" in caplog.text


class TestResolveDelay:
    def test_none_uses_default(self):
        assert resolve_delay(None, 60) == 60

    def test_negative_clamps_to_zero(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolve_delay(-10, 60) == 0
        assert "negative" in caplog.text

    @pytest.mark.parametrize("value", ["ten", float("nan"), False, {}])
    def test_non_numeric_clamps_to_zero(self, value):
        assert resolve_delay(value, 60) == 0

    def test_integers_pass_through(self):
        assert resolve_delay(0, 60) == 0
        assert resolve_delay(90, 60) == 90

    def test_float_is_rounded(self):
        assert resolve_delay(12.7, 60) == 13
