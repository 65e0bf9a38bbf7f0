import logging
import sys

from app.core.config import settings


def configure_logging() -> None:
    # basicConfig is a no-op once the root logger has handlers
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
