"""Tests for staffing analysis."""

import pytest

from shiftplan.domain.config import ConfigurationError, ScheduleConfig
from shiftplan.scheduling.analysis import (
    StaffingAction,
    analyze_staffing,
    required_hours,
)


class TestStaffingAnalysis:
    """Tests for analyze_staffing."""

    def test_required_hours_february_2026(self):
        # Super-peak days 2, 15 and 25 cover 14h, the other 25 days 12h
        assert required_hours(2, 2026) == (3 * 14 + 25 * 12) * 2

    def test_hire_when_short(self):
        analysis = analyze_staffing(2, 2026, 3)
        assert analysis.optimal == 4
        assert analysis.action is StaffingAction.HIRE
        assert analysis.total_hours == 684
        assert analysis.avg_hours_per_employee == pytest.approx(228.0)
        assert analysis.overtime_risk == pytest.approx(20.0)
        assert analysis.peak_days == [2, 15, 25]

    @pytest.mark.parametrize("roster_size", [4, 5])
    def test_maintain(self, roster_size):
        analysis = analyze_staffing(2, 2026, roster_size)
        assert analysis.action is StaffingAction.MAINTAIN

    def test_reduce_when_overstaffed(self):
        analysis = analyze_staffing(2, 2026, 6)
        assert analysis.action is StaffingAction.REDUCE
        assert analysis.overtime_risk < 0

    def test_target_hours_from_config(self):
        analysis = analyze_staffing(2, 2026, 3, ScheduleConfig(target_hours=240))
        assert analysis.optimal == 3
        assert analysis.action is StaffingAction.MAINTAIN

    def test_high_overtime_risk(self):
        analysis = analyze_staffing(10, 2026, 2)
        # 756h over two people is well past the target
        assert analysis.has_high_overtime_risk(40)

    @pytest.mark.parametrize("month,size", [(0, 3), (13, 3), (2, 0)])
    def test_invalid_input(self, month, size):
        with pytest.raises(ConfigurationError):
            analyze_staffing(month, 2026, size)
