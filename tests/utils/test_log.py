import io
import json
import logging
from strinflect.utils.log import get_logger, JsonFormatter

def test_json_formatter_basic_and_extra():
    logger = logging.getLogger("t-json")
    logger.handlers.clear()
    logger.setLevel(logging.INFO)

    # capture a single record via a proper Handler
    class CapHandler(logging.Handler):
        def __init__(self):
            super().__init__(level=0)
            self.last = None
            self.setFormatter(JsonFormatter())

        def emit(self, record: logging.LogRecord) -> None:
            self.last = self.format(record)

    cap = CapHandler()
    logger.handlers = [cap]

    logger.info("placeholder_skipped", extra={"spec": "action", "target": ":action"})
    payload = json.loads(cap.last)
    assert payload["message"] == "placeholder_skipped"
    assert payload["level"] == "INFO"
    assert payload["spec"] == "action"
    assert payload["target"] == ":action"
    assert "time" in payload
    assert "msg" not in payload and "args" not in payload

def test_get_logger_writes_json_to_stream():
    buf = io.StringIO()
    lg = get_logger("strinflect-test-stream", level="DEBUG", stream=buf)
    lg.debug("registry_overwrite", extra={"filter": "x"})
    line = json.loads(buf.getvalue().strip())
    assert line["filter"] == "x"
    assert line["name"] == "strinflect-test-stream"

def test_get_logger_idempotent_and_plain_mode():
    lg1 = get_logger("strinflect-test", level="DEBUG", structured_json=True)
    lg2 = get_logger("strinflect-test", level="INFO", structured_json=True)
    assert lg1 is lg2
    assert len(lg1.handlers) == 1
    assert lg1.level == logging.DEBUG
    lg3 = get_logger("strinflect-plain", level="INFO", structured_json=False)
    assert not isinstance(lg3.handlers[0].formatter, JsonFormatter)
    assert lg3.propagate is False
