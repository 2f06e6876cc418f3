import logging

import uvicorn

from dmserver.core.config import settings
from dmserver.core.logging import configure_logging

logger = logging.getLogger("dmserver")


def main() -> None:
    configure_logging(settings.log_level)
    logger.info("Server listening on https://%s:%d", settings.host, settings.port)
    uvicorn.run(
        "dmserver.main:app",
        host=settings.host,
        port=settings.port,
        ssl_certfile=settings.tls_certfile,
        ssl_keyfile=settings.tls_keyfile,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
