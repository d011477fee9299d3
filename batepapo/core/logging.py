"""Process-wide logging for batepapo.

Every record carries the correlation id of the request that produced it.
Records emitted by the eviction sweep (or anything else outside a request)
are tagged ``none``.
"""
import logging
import sys
import contextvars

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"

# Driver and engine chatter; SQL echo stays off unless asked for explicitly
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")

request_id_ctx_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx_var.get() or "none"
        return True


def _attach_filter(handler: logging.Handler) -> None:
    if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
        handler.addFilter(RequestIdFilter())


def configure_logging(level: str | None = None) -> None:
    """Send records to stdout tagged with the request id.

    Safe to call more than once. If a host (uvicorn, pytest) already
    installed handlers they are kept and only gain the request id filter.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    for handler in root.handlers:
        _attach_filter(handler)

    root.setLevel(level.upper() if level else logging.INFO)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
