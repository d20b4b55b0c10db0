"""
Registry diagnostics - event fan-out for registrations, imports,
lazy resolutions and factory calls.

Listeners are plain objects with an ``on_event(event)`` method. A registry
without listeners pays only for an empty-list check per event.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Protocol
import dataclasses
import logging
import time

logger = logging.getLogger("depreg.diagnostics")


class RegistryEventType(Enum):
    REGISTRATION = "registration"
    IMPORT = "import"
    RESOLUTION_START = "resolution_start"
    RESOLUTION_SUCCESS = "resolution_success"
    RESOLUTION_FAILURE = "resolution_failure"
    FACTORY_INVOCATION = "factory_invocation"


@dataclasses.dataclass
class RegistryEvent:
    """One registry occurrence, as seen by listeners."""
    type: RegistryEventType
    name: Optional[str] = None
    kind: Optional[str] = None
    duration: Optional[float] = None
    error: Optional[BaseException] = None
    metadata: Dict[str, Any] = dataclasses.field(default_factory=dict)


class DiagnosticListener(Protocol):
    def on_event(self, event: RegistryEvent) -> None:
        ...


_MESSAGES = {
    RegistryEventType.REGISTRATION: "Registered {e.kind} '{e.name}'",
    RegistryEventType.IMPORT: "Imported {count} entries from {source}",
    RegistryEventType.RESOLUTION_START: "Resolving lazy value '{e.name}'...",
    RegistryEventType.RESOLUTION_SUCCESS: "Resolved '{e.name}' in {e.duration:.4f}s",
    RegistryEventType.RESOLUTION_FAILURE: "Failed to resolve '{e.name}': {e.error}",
    RegistryEventType.FACTORY_INVOCATION: "Invoking factory '{e.name}'",
}


class ConsoleDiagnosticListener:
    """
    Writes events to the ``depreg.diagnostics`` logger.

    Failures always go out at ERROR; everything else at ``log_level``.
    """

    def __init__(self, log_level: int = logging.DEBUG):
        self.log_level = log_level

    def on_event(self, event: RegistryEvent) -> None:
        level = logging.ERROR if event.type is RegistryEventType.RESOLUTION_FAILURE else self.log_level
        message = _MESSAGES[event.type].format(
            e=event,
            count=event.metadata.get("count", 0),
            source=event.metadata.get("source"),
        )
        logger.log(level, message)


class RegistryDiagnostics:
    """Holds a registry's listeners and dispatches events to them."""

    def __init__(self):
        self._listeners: List[DiagnosticListener] = []

    @property
    def listeners(self) -> List[DiagnosticListener]:
        return list(self._listeners)

    def add_listener(self, listener: DiagnosticListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: DiagnosticListener) -> None:
        self._listeners.remove(listener)

    def emit(self, event_type: RegistryEventType, **fields: Any) -> None:
        if not self._listeners:
            return
        event = RegistryEvent(type=event_type, **fields)
        for listener in self._listeners:
            try:
                listener.on_event(event)
            except Exception as e:
                logger.error(f"Diagnostic listener error: {e}")

    @contextmanager
    def measure(self, **fields: Any) -> Iterator[None]:
        """
        Wrap one lazy resolution.

        Emits RESOLUTION_START on entry and RESOLUTION_SUCCESS or
        RESOLUTION_FAILURE (with the duration) on exit. Exceptions are
        re-raised unchanged.
        """
        self.emit(RegistryEventType.RESOLUTION_START, **fields)
        started = time.perf_counter()
        try:
            yield
        except BaseException as e:
            self.emit(
                RegistryEventType.RESOLUTION_FAILURE,
                duration=time.perf_counter() - started,
                error=e,
                **fields,
            )
            raise
        self.emit(
            RegistryEventType.RESOLUTION_SUCCESS,
            duration=time.perf_counter() - started,
            **fields,
        )
