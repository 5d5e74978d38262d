import logging
import sys

from flask import g, has_app_context

from ddnstool import settings

LOG_FORMAT = settings.LOG_FORMAT


class DiagnosticsFilter(logging.Filter):
    """Only let ddnstool records through while diagnostics are switched on.

    Diagnostics are on when `LOG_ENABLED` is set, or when the current request
    asked for them with `log=true` (stored as `g.diagnostics`). Records from
    other loggers always pass.
    """

    def filter(self, record):
        if not record.name.startswith("ddnstool"):
            return True
        if settings.LOG_ENABLED:
            return True
        if has_app_context():
            return bool(getattr(g, 'diagnostics', False))
        return False


def configure_logging():
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(DiagnosticsFilter())
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[handler]
    )
