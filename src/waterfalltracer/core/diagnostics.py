"""Optional sink for non-fatal instrumentation failures."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

LOG_TYPE = "waterfall_tracer_error"


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives a structured record and a human readable message.

    Implementations should not raise; a raising sink is reported through
    ``warnings.warn`` and otherwise ignored.
    """

    def warn(self, record: Mapping[str, object], message: str) -> None: ...


class LoggingSink:
    """Forwards diagnostics to a stdlib logger at WARNING level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("waterfalltracer")

    def warn(self, record: Mapping[str, object], message: str) -> None:
        err = record.get("err")
        self.logger.warning(
            message,
            exc_info=err if isinstance(err, BaseException) else None,
            extra={"waterfall_tracer": dict(record)},
        )


class WarningsSink:
    """Forwards diagnostics to ``warnings.warn``."""

    def warn(self, record: Mapping[str, object], message: str) -> None:
        err = record.get("err")
        suffix = f": {err!r}" if err is not None else ""
        warnings.warn(f"waterfalltracer: {message}{suffix}", stacklevel=3)


def emit(
    sink: DiagnosticSink | None,
    message: str,
    *,
    err: BaseException | None = None,
    **fields: object,
) -> None:
    """Send one diagnostic record to ``sink``. No sink means nothing is emitted."""
    if sink is None:
        return
    record: dict[str, object] = {"log_type": LOG_TYPE, "err": err, **fields}
    try:
        sink.warn(record, message)
    except Exception:
        warnings.warn(
            "waterfalltracer: diagnostic sink error while reporting: " + message,
            stacklevel=2,
        )
