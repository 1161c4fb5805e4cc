import logging
from typing import Optional

from .settings import settings

ISO_FMT = "%Y-%m-%dT%H:%M:%S%z"

def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
        datefmt=ISO_FMT,
    )
    # httpx logs every request at INFO; keep it for debugging only
    logging.getLogger("httpx").setLevel(logging.WARNING)
    if settings.DEBUG:
        logging.getLogger("app").setLevel(logging.DEBUG)
