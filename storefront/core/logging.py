# storefront/core/logging.py
import logging
import sys
from contextvars import ContextVar
import colorlog

# Tenant of the request being served; set by TenantMiddleware
tenant_var: ContextVar[str] = ContextVar("tenant", default="-")

DEFAULT_FORMAT = "%(log_color)s%(asctime)s %(levelname)-8s [%(name)s] [%(tenant)s]%(reset)s %(message)s"

# third-party loggers that log every call at INFO
CHATTY_LOGGERS = ("httpx", "httpcore", "redis")


class TenantFilter(logging.Filter):
    """Adds `record.tenant` so formats can show which storefront a line belongs to."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tenant = tenant_var.get()
        return True


def configure_logging(level=logging.INFO, fmt: str = DEFAULT_FORMAT):
    handler = colorlog.StreamHandler(sys.stdout)
    handler.addFilter(TenantFilter())
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt,
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
