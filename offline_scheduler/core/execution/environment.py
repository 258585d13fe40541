"""Per-invocation environment snapshots."""

import os
from collections.abc import Mapping

# Flags telling handler code it runs outside the cloud
LOCAL_FLAGS: dict[str, str] = {
    "IS_LOCAL": "true",
    "IS_OFFLINE": "true",
}


def build_environment(
    provider_env: Mapping[str, str] | None = None,
    function_env: Mapping[str, str] | None = None,
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """
    Merge environment layers in increasing precedence.

    Order: base (process environment by default), local flags, provider
    variables, function variables.

    Args:
        provider_env: Provider-level variables
        function_env: Function-level variables
        base: Starting environment (defaults to ``os.environ``)

    Returns:
        New dict; ``os.environ`` is not modified
    """
    return {
        **(os.environ if base is None else base),
        **LOCAL_FLAGS,
        **(provider_env or {}),
        **(function_env or {}),
    }


def apply_environment(environment: Mapping[str, str]) -> None:
    """
    Replace the process environment with ``environment``.

    Process-wide: concurrent firings calling this race and the last writer
    wins.
    """
    os.environ.clear()
    os.environ.update(environment)
