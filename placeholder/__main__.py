"""CLI entry point: python -m placeholder"""

from __future__ import annotations

import uvicorn

from placeholder.config import get_settings
from placeholder.lib.logger import configure_logging, get_logger


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    get_logger("placeholder").info("Server running on port %s", settings.port)

    uvicorn.run(
        "placeholder.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
