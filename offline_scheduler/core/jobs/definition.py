"""Schedule records produced from declared schedule triggers."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT = 6


class ScheduleRecord(BaseModel):
    """
    One translated schedule trigger.

    Records are built once at startup and never updated.
    """

    model_config = ConfigDict(frozen=True)

    function_id: str
    rule_name: str
    cron_expression: str | None
    expression: str | None = None
    enabled: bool = True
    static_input: Any = None
    timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)

    @property
    def has_static_input(self) -> bool:
        return self.static_input is not None

    @property
    def label(self) -> str:
        """``function/rule`` label used in log lines."""
        return f"{self.function_id}/{self.rule_name}"


class FunctionSchedule(BaseModel):
    """Registry entry aggregating the surviving records of one function."""

    model_config = ConfigDict(frozen=True)

    function_id: str
    records: tuple[ScheduleRecord, ...]
    timeout: int | None = None
    module_name: str

    @property
    def enabled_records(self) -> tuple[ScheduleRecord, ...]:
        return tuple(r for r in self.records if r.enabled)
