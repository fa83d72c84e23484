import logging

import uvicorn

from cafe_menu.config import settings
from cafe_menu.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging(settings.log_level, settings.project_id)
    logger.info("Menu API running on port %d", settings.port)
    uvicorn.run("cafe_menu.main:app", host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
