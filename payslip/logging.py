import logging
from contextlib import contextmanager
from typing import Iterator

import structlog

SERVICE_NAME = "payslip"


def add_service(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def build_renderer(fmt: str):
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    if fmt == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    raise ValueError(f"Unknown log format {fmt!r}, expected 'json' or 'console'")


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Route structlog events through stdlib logging.

    Events carry the service name, the logger name and any payroll context
    bound with :func:`payroll_context`.
    """
    level = level.upper()
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        add_service,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.processors.format_exc_info,
            build_renderer(fmt),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        logger_factory=structlog.stdlib.LoggerFactory(),
    )

    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger().setLevel(level)


@contextmanager
def payroll_context(**values) -> Iterator[None]:
    """Attach run details (period, employee id) to every event logged inside."""
    with structlog.contextvars.bound_contextvars(**values):
        yield


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
