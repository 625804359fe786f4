from __future__ import annotations

import asyncio
import logging

from kapa_docs.app.observability.service import configure_logging
from kapa_docs.core.config import ConfigurationError, load_config
from kapa_docs.core.env import load_dotenv_file
from kapa_docs.server import serve

LOGGER = logging.getLogger("kapa_docs")


def main() -> int:
    load_dotenv_file()
    try:
        config = load_config()
    except ConfigurationError as exc:
        configure_logging()
        LOGGER.error("Startup error: %s", exc)
        return 1

    configure_logging(config.log_level)
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        LOGGER.info("Shutting down MCP server")
    except Exception as exc:  # noqa: BLE001
        LOGGER.error("MCP server error: %s", exc, exc_info=exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
