"""Console entry point: ``echonote-server``.

Configures logging from settings and serves ``echonote.api.app:app``
with uvicorn on ``settings.app_host:settings.app_port``.
"""

import logging

import uvicorn

from echonote.core.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "echonote.api.app:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
