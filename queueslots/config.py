"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain.business_clock import DEFAULT_ANCHOR_OFFSET_HOURS, BusinessClock, resolve_timezone
from .domain.models import ReservationWindow, ShiftRange, WeeklyShiftTemplate, Weekday, parse_duration


class ShiftConfig(BaseModel):
    """A ``from``/``to`` pair of ``HH:mm`` strings."""
    model_config = ConfigDict(populate_by_name=True)

    # Not validated as HH:mm here: a bad entry is skipped at resolution time
    from_: str = Field(alias="from")
    to: str


class ServiceConfig(BaseModel):
    """A bookable service of a branch."""
    name: str
    duration: Union[int, str] = 30  # minutes or "HH:mm"
    reservation_time: Optional[ShiftConfig] = None
    require_employee: bool = False

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, value: Union[int, str]) -> Union[int, str]:
        """Ensure the duration is positive and well-formed."""
        parse_duration(value)
        return value

    @property
    def duration_minutes(self) -> int:
        return parse_duration(self.duration)

    def window(self) -> Optional[ReservationWindow]:
        """Get the reservation window, if the service has one."""
        if self.reservation_time is None:
            return None
        return ReservationWindow(
            from_time=self.reservation_time.from_,
            to_time=self.reservation_time.to
        )


class BranchConfig(BaseModel):
    """Branch configuration: timezone, business day and weekly shifts."""
    name: str
    timezone: str = "Asia/Riyadh"
    business_day_anchor_hours: int = DEFAULT_ANCHOR_OFFSET_HOURS
    closing_soon_minutes: int = 60
    working_shifts: Dict[str, List[ShiftConfig]] = Field(default_factory=dict)
    services: List[ServiceConfig] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject unknown timezone identifiers."""
        resolve_timezone(value)
        return value

    @field_validator("business_day_anchor_hours")
    @classmethod
    def validate_anchor(cls, value: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= value <= 23:
            raise ValueError(f"business_day_anchor_hours must be between 0 and 23, got {value}")
        return value

    @field_validator("closing_soon_minutes")
    @classmethod
    def validate_closing_soon(cls, value: int) -> int:
        if value < 0:
            raise ValueError("closing_soon_minutes must not be negative")
        return value

    @field_validator("working_shifts")
    @classmethod
    def validate_weekdays(cls, value: Dict[str, List[ShiftConfig]]) -> Dict[str, List[ShiftConfig]]:
        """Ensure shift keys are weekday names."""
        for name in value:
            Weekday.from_name(name)
        return value

    @field_validator("services")
    @classmethod
    def validate_services(cls, value: List[ServiceConfig]) -> List[ServiceConfig]:
        """Ensure service names are unique within the branch."""
        seen: set[str] = set()
        for service in value:
            key = service.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate service name detected: {service.name}")
            seen.add(key)
        return value

    def build_clock(self) -> BusinessClock:
        return BusinessClock(
            timezone=self.timezone,
            anchor_offset_hours=self.business_day_anchor_hours
        )

    def shift_template(self) -> WeeklyShiftTemplate:
        return WeeklyShiftTemplate(shifts={
            Weekday.from_name(name): [
                ShiftRange(from_time=shift.from_, to_time=shift.to) for shift in shifts
            ]
            for name, shifts in self.working_shifts.items()
        })

    def find_service_by_name(self, name: str) -> ServiceConfig | None:
        """Find a service by its name."""
        for service in self.services:
            if service.name.lower() == name.lower():
                return service
        return None


class AppConfig(BaseModel):
    """Application configuration."""
    branches: List[BranchConfig] = Field(default_factory=list)

    @field_validator("branches")
    @classmethod
    def validate_branches(cls, value: List[BranchConfig]) -> List[BranchConfig]:
        """Ensure branch names are unique."""
        seen: set[str] = set()
        for branch in value:
            key = branch.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate branch name detected: {branch.name}")
            seen.add(key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def find_branch_by_name(self, name: str) -> BranchConfig | None:
        """Find a branch by its name."""
        for branch in self.branches:
            if branch.name.lower() == name.lower():
                return branch
        return None

    def resolve_branch_service(self, branch_name: str, service_name: str) -> tuple[BranchConfig, ServiceConfig]:
        """
        Resolve a branch and one of its services by name.

        Raises:
            ValueError: If either cannot be found
        """
        branch = self.find_branch_by_name(branch_name)
        if branch is None:
            raise ValueError(f"Unknown branch: '{branch_name}'.")

        service = branch.find_service_by_name(service_name)
        if service is None:
            raise ValueError(f"Unknown service '{service_name}' in branch '{branch.name}'.")

        return branch, service


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of queueslots/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
