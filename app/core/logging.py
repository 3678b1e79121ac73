import logging
import sys

from pythonjsonlogger import jsonlogger

from app.core.config import Settings


def configure_logging(settings: Settings) -> None:
    """
    JSON lines on stdout. Every record carries the service name and
    environment; services add ids (project_id, asset_id, ...) via `extra`.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # clear handlers if reloaded
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
            static_fields={"service": settings.app_name, "env": settings.environment},
        )
    )
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    # no SQL statement logging at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
