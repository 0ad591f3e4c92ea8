"""
Logging configuration.

Imported once by the application entry point for its side effect.
"""

import logging
import sys

from straymap.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=LOG_FORMAT,
    stream=sys.stdout,
)

# httpx logs every request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
