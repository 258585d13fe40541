"""Schedule registry built from declared functions."""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from offline_scheduler.core.config import FunctionDeclaration, ProviderConfig, ScheduleEvent
from offline_scheduler.core.jobs.definition import DEFAULT_TIMEOUT, FunctionSchedule, ScheduleRecord
from offline_scheduler.core.triggers.expression import translate
from offline_scheduler.utils.logging import ContextLogger, _default_logger


class ScheduleRegistryBuilder:
    """
    Extracts schedule triggers from function declarations.

    Each ``schedule`` trigger becomes a ScheduleRecord. Triggers whose
    expression cannot be translated are dropped with a warning, and
    functions left without triggers contribute no entry. Declaration order
    is preserved for functions and for triggers within a function.

    Usage:
        >>> builder = ScheduleRegistryBuilder(provider=service.provider)
        >>> entries = builder.build(service.functions)
        >>> records = list(iter_records(entries))
    """

    def __init__(
        self,
        provider: ProviderConfig | None = None,
        logger: ContextLogger | None = None,
    ) -> None:
        self.provider = provider or ProviderConfig()
        self.logger = logger or ContextLogger(_default_logger, {"component": "ScheduleRegistry"})

    def build(self, functions: Mapping[str, FunctionDeclaration]) -> list[FunctionSchedule]:
        """
        Build registry entries for all declared functions.

        Args:
            functions: Function declarations keyed by function id

        Returns:
            One entry per function with at least one translatable schedule
        """
        entries: list[FunctionSchedule] = []

        for function_id, declaration in functions.items():
            timeout = self.effective_timeout(declaration)
            records = []
            for raw in declaration.schedule_events():
                record = self.parse_event(function_id, raw, timeout)
                if record is not None:
                    records.append(record)

            if records:
                entries.append(
                    FunctionSchedule(
                        function_id=function_id,
                        records=tuple(records),
                        timeout=declaration.timeout,
                        module_name=declaration.module_name,
                    )
                )

        return entries

    def effective_timeout(self, declaration: FunctionDeclaration) -> int:
        return declaration.timeout or self.provider.timeout or DEFAULT_TIMEOUT

    def parse_event(self, function_id: str, raw: Any, timeout: int) -> ScheduleRecord | None:
        """
        Parse one ``schedule`` value (expression string or structured object).

        Returns:
            ScheduleRecord, or None if the trigger is dropped
        """
        if isinstance(raw, str):
            return self._make_record(function_id, raw, ScheduleEvent(), timeout)

        try:
            event = ScheduleEvent.model_validate(raw)
        except ValidationError as e:
            self.logger.warning(
                "scheduler: Invalid schedule definition, will not schedule",
                function_id=function_id,
                error=str(e),
            )
            return None

        return self._make_record(function_id, event.rate, event, timeout)

    def _make_record(
        self, function_id: str, expression: Any, event: ScheduleEvent, timeout: int
    ) -> ScheduleRecord | None:
        cron_expression = translate(expression, self.logger.with_context(function_id=function_id))
        if cron_expression is None:
            return None

        return ScheduleRecord(
            function_id=function_id,
            rule_name=event.name or function_id,
            cron_expression=cron_expression,
            expression=expression,
            enabled=True if event.enabled is None else event.enabled,
            static_input=event.input,
            timeout=timeout,
        )


def build_registry(
    functions: Mapping[str, FunctionDeclaration],
    provider: ProviderConfig | None = None,
    logger: ContextLogger | None = None,
) -> list[FunctionSchedule]:
    """Build registry entries with a throwaway builder."""
    return ScheduleRegistryBuilder(provider=provider, logger=logger).build(functions)


def iter_records(entries: Iterable[FunctionSchedule]) -> Iterable[ScheduleRecord]:
    """Flatten registry entries into records, preserving order."""
    for entry in entries:
        yield from entry.records
