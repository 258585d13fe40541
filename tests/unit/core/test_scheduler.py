"""Unit tests for the OfflineScheduler facade."""

from unittest.mock import Mock

import pytest

from offline_scheduler import OfflineScheduler, ServiceConfig


@pytest.fixture
def scheduler(service):
    resolver = Mock(return_value=lambda event, context: {"rule": event.get("resources", ["static"])[0]})
    scheduler = OfflineScheduler(service, resolver=resolver)
    yield scheduler
    scheduler.shutdown(wait=False)


class TestOfflineScheduler:
    def test_accepts_raw_mapping(self, service_dict):
        scheduler = OfflineScheduler(service_dict)
        assert isinstance(scheduler.service, ServiceConfig)
        assert scheduler.service.functions["report"].handler == "jobs/report.handler"

    def test_records(self, scheduler):
        assert [r.rule_name for r in scheduler.records] == ["report", "daily-report", "hourly-cleanup"]
        assert [e.function_id for e in scheduler.entries] == ["report", "cleanup"]

    def test_start_registers_enabled_records(self, scheduler):
        assert scheduler.start() == 2
        assert scheduler.is_running()
        assert len(scheduler.engine.get_jobs()) == 2

    def test_start_twice_raises(self, scheduler):
        scheduler.start()
        with pytest.raises(RuntimeError, match="already running"):
            scheduler.start()

    def test_run_now(self, scheduler):
        firings = scheduler.run_now("daily-report")

        assert len(firings) == 1
        assert firings[0].wait(1)
        # static input replaces the synthesized event
        assert firings[0].result == {"rule": "static"}

    def test_run_now_includes_disabled_records(self, scheduler):
        firings = scheduler.run_now("hourly-cleanup")
        assert [f.record.function_id for f in firings] == ["cleanup"]

    def test_run_now_unknown_rule(self, scheduler):
        assert scheduler.run_now("missing") == []

    def test_stop_rule_and_stop_all(self, scheduler):
        scheduler.start()

        assert scheduler.stop_rule("report") == 1
        assert scheduler.stop_all() == 1
        assert scheduler.engine.get_jobs() == []
