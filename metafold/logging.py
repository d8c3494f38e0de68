from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Any

from .config import Settings

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
JSON_FORMAT = "%(message)s"

STREAM_HANDLER_NAME = "metafold.stream"
FILE_HANDLER_NAME = "metafold.file"


def _install(logger: logging.Logger, handler: logging.Handler, name: str) -> None:
    for existing in logger.handlers[:]:
        if existing.get_name() == name:
            logger.removeHandler(existing)
            existing.close()
    handler.set_name(name)
    logger.addHandler(handler)


def configure_logging(settings: Settings, level: int = logging.INFO) -> None:
    """Attach client handlers to the ``metafold`` logger.

    Calling this again replaces the handlers it installed earlier, so records
    are never emitted twice.
    """
    logger = logging.getLogger("metafold")
    logger.setLevel(level)

    formatter = logging.Formatter(JSON_FORMAT if settings.log_json else PLAIN_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    _install(logger, stream_handler, STREAM_HANDLER_NAME)

    if settings.log_dir is not None:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_dir / "metafold.log", maxBytes=5 * 1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        _install(logger, file_handler, FILE_HANDLER_NAME)


def log_event(
    logger: logging.Logger, event: str, *, level: int = logging.INFO, **fields: Any
) -> None:
    """Log a job lifecycle event as one JSON object.

    ``None`` fields are left out and values that JSON cannot encode, such as
    datetimes, are stringified. The event name is also attached to the record
    as ``event`` for handlers that filter on it.
    """
    if not logger.isEnabledFor(level):
        return
    body: dict[str, Any] = {"event": event}
    body.update({key: value for key, value in fields.items() if value is not None})
    logger.log(level, json.dumps(body, default=str, sort_keys=True), extra={"event": event})
