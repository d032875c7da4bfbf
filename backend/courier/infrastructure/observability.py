"""Structured Logging — JSON records with token redaction.

Invariants:
    - Every record carries timestamp, level, logger name, and message
    - Courier extras (identity_id, username, message_id, error_code, path,
      operation) are surfaced when present; anything else passed as extra is dropped
    - Signed tokens never reach a handler: driver errors echo bound parameters,
      so a failed session write would otherwise log the token it carried
    - setup_logging is idempotent: calling it twice installs one handler

Design Decisions:
    - Redaction is a logging.Filter on the handler, so third-party loggers
      (sqlalchemy, uvicorn) are scrubbed too
"""

import json
import logging
import re
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "identity_id", "username", "message_id", "error_code",
    "path", "operation",
)

# header.payload.signature, header always starts with base64url('{"')
_JWT_PATTERN = re.compile(r"eyJ[\w-]*\.[\w-]*\.[\w-]*")
REDACTED = "[token]"


class TokenRedactionFilter(logging.Filter):
    """Replace anything shaped like a JWT in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        scrubbed = _JWT_PATTERN.sub(REDACTED, message)
        if scrubbed != message:
            record.msg, record.args = scrubbed, None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(
            (key, record.__dict__[key])
            for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            log["exception"] = _JWT_PATTERN.sub(
                REDACTED, self.formatException(record.exc_info),
            )
        return json.dumps(log, ensure_ascii=False)


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the Courier handler on the root logger, replacing a previous one."""
    global _handler
    handler = logging.StreamHandler()
    handler.addFilter(TokenRedactionFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    if _handler is not None:
        logging.root.removeHandler(_handler)
    _handler = handler
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
