import logging

import uvicorn

from app.core.config import settings
from app.core.logging import configure_logging

logger = logging.getLogger(__name__)


def main():
    configure_logging()
    logger.info("API running on http://localhost:%s", settings.PORT)
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
