from __future__ import annotations

import logging

from analytics_service.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    settings = get_settings()
    resolved = (level or settings.log_level).upper()

    root = logging.getLogger()
    root.setLevel(resolved)
    if any(getattr(handler, "_analytics_handler", False) for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._analytics_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # httpx logs each request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
