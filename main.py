import logging

import uvicorn

from infrastructure.config import get_settings
from infrastructure.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def run() -> None:
    config = get_settings()
    setup_logging(config.log_level)

    logger.info(
        f"Starting server at http://{config.host}:{config.port} "
        f"(Reload: {config.reload}, storage: {config.storage})"
    )

    uvicorn.run(
        "backend_fastapi.main:app",
        host=config.host,
        port=config.port,
        reload=config.reload,
        log_level=config.log_level,
    )


if __name__ == "__main__":
    run()
