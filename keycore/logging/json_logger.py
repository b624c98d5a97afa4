import logging
import json
from logging.handlers import HTTPHandler

# Attributes passed via `extra=` that are copied into the JSON payload.
EXTRA_FIELDS = ("key_type", "error_kind")


class JSONFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_json_logging(siem_endpoint: str | None = None, level=logging.INFO, json_format: bool = True):
    logger = logging.getLogger("keycore")
    logger.setLevel(level)

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

    if siem_endpoint:
        # siem_endpoint format: host:port
        host, port = siem_endpoint.split(':')
        http = HTTPHandler(f"{host}:{port}", '/ingest', method='POST')
        http.setFormatter(JSONFormatter())
        logger.addHandler(http)

    return logger


def configure_from_env():
    """Configure keycore logging from KEYCORE_* settings."""
    from keycore import config
    return configure_json_logging(
        siem_endpoint=config.SIEM_ENDPOINT,
        level=config.LOG_LEVEL,
        json_format=config.LOG_JSON,
    )
