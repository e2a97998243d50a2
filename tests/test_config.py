"""Tests for engine configuration."""

from datetime import time

import pytest

from shiftplan.domain.config import ConfigurationError, ScheduleConfig
from shiftplan.domain.models import split_shift_hours


class TestScheduleConfig:
    """Tests for ScheduleConfig defaults and validation."""

    def test_defaults(self):
        config = ScheduleConfig()
        assert config.target_hours == 208
        assert config.overtime_multiplier == 1.5
        assert config.holiday_multiplier == 4.0
        assert config.fixed_peak_days == (15, 25)
        assert config.reference_window_hours == 12
        assert config.holidays_in(1) == (1,)
        assert config.holidays_in(3) == ()

    def test_frozen(self):
        config = ScheduleConfig()
        with pytest.raises(Exception):
            config.target_hours = 100

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"target_hours": 0},
            {"target_hours": -10},
            {"overtime_multiplier": 0},
            {"holiday_multiplier": -1},
            {"custom_peak_days": (32,)},
            {"fixed_peak_days": (0,)},
            {"holidays": {13: (1,)}},
            {"open_hour": 20, "close_hour": 8},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigurationError):
            ScheduleConfig(**kwargs)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ScheduleConfig(target_hours=0)

    def test_with_holidays_merges(self):
        config = ScheduleConfig().with_holidays(1, [28, 29, 1])
        assert config.holidays_in(1) == (1, 28, 29)
        # Original untouched
        assert ScheduleConfig().holidays_in(1) == (1,)

    def test_with_custom_peak_days(self):
        config = ScheduleConfig().with_custom_peak_days([20, 5, 20])
        assert config.custom_peak_days == (5, 20)

    def test_holidays_not_shared_with_caller(self):
        table = {1: (1,)}
        config = ScheduleConfig(holidays=table)
        table[6] = (1,)
        assert config.holidays_in(6) == ()
        with pytest.raises(TypeError):
            config.holidays[6] = (1,)

    def test_list_fields_stored_as_tuples(self):
        config = ScheduleConfig(custom_peak_days=[10], holidays={2: [16, 17]})
        assert config.custom_peak_days == (10,)
        assert config.holidays_in(2) == (16, 17)

    def test_hashable(self):
        assert hash(ScheduleConfig()) == hash(ScheduleConfig())
        assert ScheduleConfig() == ScheduleConfig()
        assert len({ScheduleConfig(), ScheduleConfig(target_hours=180)}) == 2


class TestConfigFromDict:
    """Tests for building a config from JSON-style data."""

    def test_basic_fields(self):
        config = ScheduleConfig.from_dict(
            {"target_hours": 180, "custom_peak_days": [10, 20]}
        )
        assert config.target_hours == 180
        assert config.custom_peak_days == (10, 20)

    def test_holidays_with_string_keys(self):
        config = ScheduleConfig.from_dict({"holidays": {"2": [16, 17]}})
        assert config.holidays_in(2) == (16, 17)
        assert config.holidays_in(1) == ()

    def test_delivery_windows(self):
        config = ScheduleConfig.from_dict(
            {
                "delivery_windows": [
                    {"label": "10:00", "carrier": "Local", "start": "10:00"},
                    {
                        "label": "16:00",
                        "start": "16:00",
                        "end": "16:30",
                        "weekdays": [1, 2],
                    },
                ]
            }
        )
        first, second = config.delivery_windows
        assert first.start == time(10)
        assert first.end is None
        assert second.carrier == "16:00"
        assert second.end == time(16, 30)
        assert second.weekdays == frozenset({1, 2})

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigurationError, match="Unknown"):
            ScheduleConfig.from_dict({"night_shift": True})

    def test_malformed_value_rejected(self):
        with pytest.raises(ConfigurationError):
            ScheduleConfig.from_dict({"custom_peak_days": ["soon"]})

    def test_invalid_value_rejected(self):
        with pytest.raises(ConfigurationError):
            ScheduleConfig.from_dict({"target_hours": 0})

    def test_numeric_string_coerced(self):
        config = ScheduleConfig.from_dict({"target_hours": "208", "open_hour": 7})
        assert config.target_hours == 208.0
        assert config.open_hour == 7

    @pytest.mark.parametrize(
        "payload",
        [
            {"target_hours": None},
            {"target_hours": "lots"},
            {"target_hours": True},
            {"close_hour": "8pm"},
            {"super_peak_enabled": "no"},
            {"double_day_peaks": 1},
            {"holidays": [1, 2]},
        ],
    )
    def test_wrong_type_rejected(self, payload):
        with pytest.raises(ConfigurationError):
            ScheduleConfig.from_dict(payload)

    def test_boolean_fields(self):
        config = ScheduleConfig.from_dict({"super_peak_enabled": False})
        assert config.super_peak_enabled is False


class TestSplitShiftHours:
    """Tests for pay bucket splitting."""

    @pytest.fixture
    def config(self):
        return ScheduleConfig()

    def test_standard_shift_is_regular(self, config):
        buckets = split_shift_hours(8, False, config)
        assert (buckets.regular, buckets.overtime, buckets.holiday) == (8, 0, 0)

    def test_long_shift_splits_overtime(self, config):
        buckets = split_shift_hours(10, False, config)
        assert buckets.regular == 8
        assert buckets.overtime == pytest.approx(3.0)
        assert buckets.holiday == 0

    def test_holiday_shift_is_weighted(self, config):
        buckets = split_shift_hours(7, True, config)
        assert buckets.regular == 0
        assert buckets.overtime == 0
        assert buckets.holiday == pytest.approx(28.0)
