"""Example handlers for the quick start service."""

import asyncio
import os


def handler(event, context):
    """Direct style: the return value completes the invocation."""
    print(f"report for stage {context.environment.get('STAGE')} ({event.get('detail-type', 'input')})")
    return {"remaining_ms": context.get_remaining_time_in_millis()}


async def refresh(event, context):
    """Direct style returning a coroutine."""
    await asyncio.sleep(0.1)
    return {"refreshed": True, "pid": os.getpid()}


def cleanup(event, context, callback):
    """Callback style: completion is signaled through ``callback``."""
    callback(None, {"deleted": 0})
