"""Service configuration models consumed by the scheduler."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RUNTIME = "python3.12"

# custom.<plugin> sections read by the scheduler
OFFLINE_PLUGIN = "serverless-offline"
SCHEDULER_PLUGIN = "serverless-offline-scheduler"


def _stringify_env(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError("environment must be a mapping")
    return {
        str(k): (str(v).lower() if isinstance(v, bool) else str(v))
        for k, v in value.items()
        if v is not None
    }


class ScheduleEvent(BaseModel):
    """Structured form of a ``schedule`` trigger."""

    model_config = ConfigDict(extra="allow")

    rate: Any = None
    enabled: bool | None = None
    input: Any = None
    name: str | None = None


class FunctionDeclaration(BaseModel):
    """A declared function: handler reference, timeout, environment and triggers."""

    model_config = ConfigDict(extra="allow")

    handler: str
    timeout: int | None = Field(default=None, gt=0)
    environment: dict[str, str] = Field(default_factory=dict)
    runtime: str | None = None
    events: list[Any] = Field(default_factory=list)

    @field_validator("environment", mode="before")
    @classmethod
    def _coerce_environment(cls, value: Any) -> dict[str, str]:
        return _stringify_env(value)

    @field_validator("events", mode="before")
    @classmethod
    def _coerce_events(cls, value: Any) -> list[Any]:
        return value or []

    @property
    def module_name(self) -> str:
        """Handler path without the attribute (``src/jobs.run`` -> ``src/jobs``)."""
        return self.handler.rsplit(".", 1)[0]

    @property
    def handler_name(self) -> str:
        """Attribute looked up in the handler module."""
        return self.handler.rsplit(".", 1)[-1]

    def schedule_events(self) -> list[Any]:
        """Raw ``schedule`` values in declaration order."""
        return [e["schedule"] for e in self.events if isinstance(e, dict) and "schedule" in e]


class ProviderConfig(BaseModel):
    """Provider-level defaults shared by all functions."""

    model_config = ConfigDict(extra="allow")

    environment: dict[str, str] = Field(default_factory=dict)
    timeout: int | None = Field(default=None, gt=0)
    runtime: str = DEFAULT_RUNTIME

    @field_validator("environment", mode="before")
    @classmethod
    def _coerce_environment(cls, value: Any) -> dict[str, str]:
        return _stringify_env(value)


class ServiceConfig(BaseModel):
    """
    Parsed service definition.

    Usage:
        >>> service = ServiceConfig.model_validate({
        ...     "service_path": "/srv/app",
        ...     "provider": {"timeout": 10},
        ...     "functions": {
        ...         "report": {"handler": "jobs.report", "events": [{"schedule": "rate(5 minutes)"}]},
        ...     },
        ... })
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    service_path: Path = Path(".")
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    functions: dict[str, FunctionDeclaration] = Field(default_factory=dict)
    custom: dict[str, Any] = Field(default_factory=dict)

    @field_validator("functions", "custom", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> Any:
        return value or {}

    def get_function(self, function_id: str) -> FunctionDeclaration:
        """
        Look up a declared function.

        Raises:
            KeyError: Function not declared
        """
        try:
            return self.functions[function_id]
        except KeyError:
            raise KeyError(f"Function '{function_id}' is not declared in the service") from None

    def plugin_config(self, plugin_name: str) -> dict[str, Any]:
        """``custom.<plugin_name>`` section, or an empty dict."""
        section = self.custom.get(plugin_name)
        return dict(section) if isinstance(section, dict) else {}

    @property
    def stage_variables(self) -> dict[str, Any] | None:
        return self.custom.get("stageVariables")

    @property
    def location(self) -> str:
        """Handler root relative to the service path (``custom.serverless-offline.location``)."""
        return self.plugin_config(OFFLINE_PLUGIN).get("location") or "."

    def resolved_service_path(self) -> Path:
        return self.service_path / self.location
