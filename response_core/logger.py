import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import settings

NOISY_LOGGERS = ("asyncio", "httpx", "httpcore", "nats")


def setup_logging(environment: Optional[str] = None, level: Optional[str] = None):
    """
    Install a single stdout handler on the root logger.
    Production emits one JSON object per record tagged with the service name;
    every other environment gets the plain console format.
    """
    environment = environment or settings.ENVIRONMENT
    root = logging.getLogger()

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if environment == "production":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            static_fields={"service": "response-core"},
            json_ensure_ascii=False,
        )
    else:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(level or settings.LOG_LEVEL)

    logging.getLogger("uvicorn.access").disabled = True
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
