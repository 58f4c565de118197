# telemetry/logging.py
import logging
import sys
from typing import Optional

import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | service=%(service)s | %(message)s"

# Client libraries that log every request at INFO.
CHATTY_LOGGERS = ("httpx", "httpcore", "google_genai", "openai")


class _ServiceFilter(logging.Filter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


def configure_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> None:
    """
    Route all service logs to stdout tagged with the service name.

    JSearch and model-provider client chatter is held at WARNING unless the
    service itself runs at DEBUG, so request logs stay readable.
    """
    service_name = service_name or settings.SERVICE_NAME
    log_level = (level or settings.LOG_LEVEL).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_ServiceFilter(service_name))

    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    client_level = logging.DEBUG if log_level == "DEBUG" else logging.WARNING
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)

    logging.getLogger(__name__).info("logging configured (level=%s)", log_level)
