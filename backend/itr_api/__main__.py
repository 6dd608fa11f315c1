"""
ITR API: Process Entrypoint
===========================

Usage:
    python -m itr_api          (or the `itr-api` console script)

Loads configuration, configures logging and serves the application with
uvicorn on HOST:PORT until killed.

Exit status:
    0  server stopped normally
    1  configuration missing or invalid (DB_URL/POSTGRES_URL, PORT)
    3  application startup failed, e.g. the database is unreachable
       (reported by uvicorn after the lifespan raised)
"""

import logging
import sys

import uvicorn
from pydantic import ValidationError as SettingsError

logger = logging.getLogger("itr_api")


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
    )

    # Settings are validated on first import of the config module
    try:
        from itr_api.config import settings
    except SettingsError as e:
        missing = ", ".join(
            str(err["loc"][0]).upper() for err in e.errors() if err.get("loc")
        )
        logger.critical("Invalid or missing configuration (%s): %s", missing, e)
        return 1

    from itr_api.main import app, setup_logging

    setup_logging(settings.log_level)
    logger.info("Listening on %s:%d", settings.host, settings.port)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,  # keep the root logging configuration
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
