import logging
import json
from logging.handlers import HTTPHandler

_HANDLER_MARK = "_fle_json_handler"


class JSONFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload["fields"] = fields
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_json_logging(siem_endpoint: str | None = None, level=logging.INFO, stream=None):
    if siem_endpoint:
        # siem_endpoint format: host:port
        host, sep, port = siem_endpoint.rpartition(':')
        if not sep or not host or not port.isdigit():
            raise ValueError(f"SIEM endpoint must be host:port, got {siem_endpoint!r}")

    logger = logging.getLogger()
    logger.setLevel(level)

    # Replace handlers installed by an earlier call
    for h in list(logger.handlers):
        if getattr(h, _HANDLER_MARK, False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)

    if siem_endpoint:
        http = HTTPHandler(siem_endpoint, '/ingest', method='POST')
        http.setFormatter(JSONFormatter())
        setattr(http, _HANDLER_MARK, True)
        logger.addHandler(http)

    return logger
