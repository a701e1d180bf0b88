# lambdas/upload_notifier/log_sink.py
import json
import logging
from typing import Any, Optional, Protocol


class LogEmissionError(RuntimeError):
    """The logging collaborator rejected or failed a write."""
    pass


class LogSink(Protocol):
    """
    Where structured entries go. The handler only talks to this interface,
    so tests can swap in an in-memory sink.
    """

    def emit(self, entry: dict) -> None:
        ...

    def echo(self, payload: Any) -> None:
        ...


class LoggingSink:
    """
    Writes each entry as a single JSON line through the standard logging
    module. In Lambda those lines land in the function's CloudWatch log group.

    The sink's logger always runs at INFO; LOG_LEVEL only tunes the
    diagnostic output around it.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, name: str = "upload_notifier"):
        self.logger = logger or logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

    def emit(self, entry: dict) -> None:
        self._write(json.dumps(entry))

    def echo(self, payload: Any) -> None:
        # default=str so non-JSON payloads are still visible
        self._write(json.dumps({"payload": payload}, default=str))

    def _write(self, line: str) -> None:
        # e.g. logging.disable() would drop the line without an error
        if not self.logger.isEnabledFor(logging.INFO):
            raise LogEmissionError(f"Logger '{self.logger.name}' is not accepting INFO records.")
        self.logger.info(line)
