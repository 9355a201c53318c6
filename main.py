import logging

import uvicorn

from wysiwym.config import settings
from wysiwym.main import create_app
from wysiwym.middleware.logging import setup_structured_logging

setup_structured_logging(log_level=settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)

app = create_app()


if __name__ == "__main__":
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
