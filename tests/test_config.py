"""
Tests for configuration loading and validation.
"""

import pytest

from queueslots.config import AppConfig, BranchConfig, ServiceConfig
from queueslots.domain.models import ReservationWindow, ShiftRange, Weekday

CONFIG_YAML = """
branches:
  - name: olaya
    timezone: Asia/Riyadh
    business_day_anchor_hours: 4
    working_shifts:
      Monday:
        - {from: "09:00", to: "17:00"}
      friday:
        - {from: "22:00", to: "02:00"}
    services:
      - name: haircut
        duration: "01:30"
        reservation_time: {from: "10:00", to: "16:00"}
      - name: beard
        duration: 20
        require_employee: true
"""


class TestAppConfig:
    """Tests for AppConfig."""

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML, encoding="utf-8")

        config = AppConfig.load_from_yaml(path)
        branch = config.find_branch_by_name("OLAYA")

        assert branch is not None
        assert branch.build_clock().anchor_offset_hours == 4
        assert branch.build_clock().timezone_name == "Asia/Riyadh"

        template = branch.shift_template()
        assert template.for_weekday(Weekday.MONDAY) == [ShiftRange(from_time="09:00", to_time="17:00")]
        assert template.for_weekday(Weekday.FRIDAY) == [ShiftRange(from_time="22:00", to_time="02:00")]

        haircut = branch.find_service_by_name("haircut")
        assert haircut.duration_minutes == 90
        assert haircut.window() == ReservationWindow(from_time="10:00", to_time="16:00")
        assert branch.find_service_by_name("beard").window() is None
        assert branch.find_service_by_name("beard").require_employee

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("branches: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(path)

    def test_duplicate_branches(self):
        with pytest.raises(ValueError, match="Duplicate branch"):
            AppConfig(branches=[{"name": "olaya"}, {"name": "Olaya"}])

    def test_resolve_branch_service(self):
        config = AppConfig(branches=[{"name": "olaya", "services": [{"name": "haircut"}]}])

        branch, service = config.resolve_branch_service("olaya", "HAIRCUT")
        assert (branch.name, service.name) == ("olaya", "haircut")

        with pytest.raises(ValueError, match="Unknown branch"):
            config.resolve_branch_service("malqa", "haircut")
        with pytest.raises(ValueError, match="Unknown service"):
            config.resolve_branch_service("olaya", "massage")


class TestBranchConfig:
    """Tests for BranchConfig validation."""

    def test_invalid_timezone(self):
        with pytest.raises(ValueError):
            BranchConfig(name="olaya", timezone="Mars/Olympus_Mons")

    def test_anchor_out_of_range(self):
        with pytest.raises(ValueError):
            BranchConfig(name="olaya", business_day_anchor_hours=24)

    def test_unknown_weekday(self):
        with pytest.raises(ValueError):
            BranchConfig(name="olaya", working_shifts={"Caturday": [{"from": "09:00", "to": "17:00"}]})

    def test_duplicate_services(self):
        with pytest.raises(ValueError, match="Duplicate service"):
            BranchConfig(name="olaya", services=[{"name": "cut"}, {"name": "CUT"}])

    def test_malformed_shift_time_is_accepted(self):
        """Bad times are dropped at resolution time, not at load time."""
        branch = BranchConfig(name="olaya", working_shifts={"Monday": [{"from": "9am", "to": "17:00"}]})

        assert branch.shift_template().for_weekday(Weekday.MONDAY) == [
            ShiftRange(from_time="9am", to_time="17:00")
        ]


class TestServiceConfig:
    """Tests for ServiceConfig validation."""

    @pytest.mark.parametrize("duration", [0, -10, "00:00", "soon"])
    def test_invalid_duration(self, duration):
        with pytest.raises(ValueError):
            ServiceConfig(name="cut", duration=duration)

    def test_default_duration(self):
        assert ServiceConfig(name="cut").duration_minutes == 30
