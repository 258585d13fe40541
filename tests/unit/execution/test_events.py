"""Unit tests for scheduled event synthesis."""

import uuid
from datetime import datetime

from offline_scheduler.core.execution.events import build_event, rule_arn
from offline_scheduler.core.jobs.definition import ScheduleRecord


class TestBuildEvent:
    def test_synthesized_event(self, record):
        event = build_event(record)

        assert event["account"] == "123456789012"
        assert event["region"] == "serverless-offline"
        assert event["detail"] == {}
        assert event["detail-type"] == "Scheduled Event"
        assert event["source"] == "aws.events"
        assert event["resources"] == [rule_arn("report")]
        assert event["resources"][0].endswith(":rule/report")
        assert event["isOffline"] is True
        assert "stageVariables" not in event
        uuid.UUID(event["id"])
        assert event["time"].endswith("Z")
        datetime.fromisoformat(event["time"].replace("Z", "+00:00"))

    def test_unique_ids(self, record):
        assert build_event(record)["id"] != build_event(record)["id"]

    def test_stage_variables(self, record):
        event = build_event(record, {"tier": "free"})
        assert event["stageVariables"] == {"tier": "free"}

    def test_static_input_is_used_verbatim(self):
        record = ScheduleRecord(
            function_id="report",
            rule_name="daily",
            cron_expression="0 10 * * ?",
            static_input={"full": True, "items": [1, 2]},
        )

        event = build_event(record, {"tier": "free"})

        assert event == {"full": True, "items": [1, 2]}

    def test_static_input_mutation_does_not_leak(self):
        record = ScheduleRecord(
            function_id="report",
            rule_name="daily",
            cron_expression="0 10 * * ?",
            static_input={"items": [1]},
        )

        build_event(record)["items"].append(2)

        assert build_event(record) == {"items": [1]}

    def test_falsy_static_input_is_kept(self):
        record = ScheduleRecord(
            function_id="report", rule_name="r", cron_expression="* * * * *", static_input=""
        )
        assert build_event(record) == ""
