"""Handler resolution: from a function declaration to a callable."""

import importlib.util
import sys
import uuid
from collections.abc import Callable, Mapping
from importlib.machinery import SourceFileLoader
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol

from offline_scheduler.core.common.exceptions import HandlerResolutionError
from offline_scheduler.core.config import FunctionDeclaration


class UncachedSourceLoader(SourceFileLoader):
    """Compiles from source on every load, bypassing __pycache__."""

    def get_code(self, fullname):
        return self.source_to_code(self.get_data(self.path), self.path)


class HandlerResolver(Protocol):
    """
    Protocol for handler resolvers.

    Args:
        function: Function declaration
        function_id: Declared function id
        service_path: Directory handler paths are relative to
        runtime: Configured runtime identifier
        options: Merged scheduler/plugin options, including ``environment``

    Returns:
        Callable following the direct or callback convention

    Raises:
        HandlerResolutionError: Handler cannot be located
    """

    def __call__(
        self,
        function: FunctionDeclaration,
        function_id: str,
        service_path: Path,
        runtime: str,
        options: Mapping[str, Any],
    ) -> Callable: ...


class ModuleHandlerResolver:
    """
    Loads handlers from Python modules under the service path.

    The module is executed fresh on every call so edits to handler code are
    picked up by the next firing.

    Usage:
        >>> resolver = ModuleHandlerResolver()
        >>> handler = resolver(function, "report", Path("/srv/app"), "python3.12", {})
    """

    def __init__(self, add_service_path: bool = True) -> None:
        """
        Initialize resolver.

        Args:
            add_service_path: Put the service path on ``sys.path`` so handler
                modules can import their siblings
        """
        self.add_service_path = add_service_path

    def __call__(
        self,
        function: FunctionDeclaration,
        function_id: str,
        service_path: Path,
        runtime: str,
        options: Mapping[str, Any],
    ) -> Callable:
        if not runtime.startswith("python"):
            raise HandlerResolutionError(
                f"Runtime '{runtime}' of function '{function_id}' cannot be run in-process"
            )

        module_path = Path(service_path) / f"{function.module_name}.py"
        if not module_path.is_file():
            raise HandlerResolutionError(
                f"Unable to find source for '{function_id}': {module_path} does not exist"
            )

        module = self._load_module(function_id, module_path)

        handler = getattr(module, function.handler_name, None)
        if handler is None or not callable(handler):
            raise HandlerResolutionError(
                f"Module {module_path} has no callable '{function.handler_name}' "
                f"(function '{function_id}')"
            )
        return handler

    def _load_module(self, function_id: str, module_path: Path) -> ModuleType:
        if self.add_service_path:
            root = str(module_path.parent)
            if root not in sys.path:
                sys.path.insert(0, root)

        # Bytecode caches keyed on mtime would miss edits made within the same second
        name = f"_offline_handler_{uuid.uuid4().hex}"
        loader = UncachedSourceLoader(name, str(module_path))
        spec = importlib.util.spec_from_file_location(name, str(module_path), loader=loader)
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise HandlerResolutionError(
                f"Importing {module_path} for '{function_id}' failed: {e}"
            ) from e
        return module
