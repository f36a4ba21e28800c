# commander/app/main.py
from __future__ import annotations

import logging
import sys
import uvicorn

from rest_api.app import create_app

from ..domain.errors import CommanderError
from ..utils import logging as logging_utils
from .controller import AppController
from .settings import CommanderSettings

log = logging.getLogger(__name__)


def main() -> int:
    """Serve the command surface on the configured host and port."""
    level = logging_utils.configure_root()
    try:
        settings = CommanderSettings.from_env()
    except CommanderError as exc:
        log.error("Invalid settings: %s", exc.message)
        return 2

    controller = AppController(settings)
    log.info(
        "Serving on %s:%d (data_dir=%s, log level %s)",
        settings.api_host,
        settings.api_port,
        settings.data_dir,
        logging_utils.level_name(level),
    )
    uvicorn.run(
        create_app(controller),
        host=settings.api_host,
        port=settings.api_port,
        log_level=logging_utils.level_name(level).lower(),
        access_log=logging_utils.access_log_enabled(level),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
