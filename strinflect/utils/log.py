from __future__ import annotations
import json, logging, sys
from typing import Any, Dict, Optional, TextIO

# attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for k, v in vars(record).items():
            if k not in _RESERVED:
                payload[k] = v
        return json.dumps(payload, separators=(",", ":"), default=str)


def get_logger(
    name: str = "strinflect",
    level: str | int = "INFO",
    structured_json: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure `name` once (stdout handler, JSON or plain) and return it.
    Later calls return the same logger untouched; library modules log through
    `logging.getLogger(__name__)` children of "strinflect".
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    handler = logging.StreamHandler(stream or sys.stdout)
    if structured_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
