"""Synthetic scheduled-event payloads."""

import copy
import uuid
from typing import Any

from offline_scheduler.core.jobs.definition import ScheduleRecord
from offline_scheduler.utils.time import iso_timestamp

ACCOUNT_ID = "123456789012"
REGION = "serverless-offline"


def rule_arn(rule_name: str) -> str:
    return f"arn:aws:events:{REGION}:{ACCOUNT_ID}:rule/{rule_name}"


def build_event(
    record: ScheduleRecord, stage_variables: dict[str, Any] | None = None
) -> Any:
    """
    Build the event payload for one firing.

    A record's static input is returned as-is (deep-copied so a handler
    mutating it cannot leak into the next firing). Otherwise a scheduled
    event notification is synthesized.

    Args:
        record: Schedule record being fired
        stage_variables: ``custom.stageVariables`` of the service, if any

    Returns:
        Event payload
    """
    if record.has_static_input:
        return copy.deepcopy(record.static_input)

    event: dict[str, Any] = {
        "account": ACCOUNT_ID,
        "region": REGION,
        "detail": {},
        "detail-type": "Scheduled Event",
        "source": "aws.events",
        "time": iso_timestamp(),
        "id": str(uuid.uuid4()),
        "resources": [rule_arn(record.rule_name)],
        "isOffline": True,
    }
    if stage_variables is not None:
        event["stageVariables"] = copy.deepcopy(stage_variables)
    return event
