import logging
import sys
import structlog

def configure_logging(log_level: str = "INFO", json_format: bool = True):
    """
    Configure global logging for the setup service.
    
    Args:
        log_level: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
        json_format: If True, one JSON object per line for the setup server log. If False, console text for local wizard runs.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # stdout carries the MCP stdio transport, so everything logs to stderr
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
