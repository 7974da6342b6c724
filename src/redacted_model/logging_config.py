"""Structured logging configuration using structlog.

Provides JSON output for production and pretty console output for
development. The library itself only calls structlog.get_logger(); an
application embedding it calls configure_logging() once at startup.
Level and environment default to REDACTION_LOG_LEVEL and
REDACTION_ENVIRONMENT (see config.py).
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, WrappedLogger

from redacted_model.config import settings
from redacted_model.policy import RedactionPolicy


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add application context to all log events."""
    event_dict["app"] = "redacted-model"
    return event_dict


class RedactEventFields:
    """
    structlog processor that applies a RedactionPolicy to event keys.
    
    Example:
        >>> processor = RedactEventFields(RedactionPolicy(["password"]))
        >>> processor(None, "info", {"event": "login", "password": "hunter2"})
        {'event': 'login', 'password': '[Hidden Data]'}
    
    Works on the policy directly rather than through RedactedRecord, whose
    own debug log would re-enter the processor chain.
    """
    
    def __init__(self, policy: RedactionPolicy):
        self.policy = policy
    
    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key in list(event_dict):
            if not self.policy.should_redact(key):
                continue
            value: Any = self.policy.resolve_redacted_value(key, event_dict[key])
            if value is None and self.policy.omit_null_redacted_keys:
                del event_dict[key]
            else:
                event_dict[key] = value
        return event_dict


def configure_logging(
    log_level: Optional[str] = None,
    environment: Optional[str] = None,
    redaction_policy: Optional[RedactionPolicy] = None,
) -> None:
    """Configure structlog for structured logging.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to settings.LOG_LEVEL.
        environment: Environment name (development, production).
                     Defaults to settings.ENVIRONMENT.
        redaction_policy: When given, log event keys are redacted with it
                          (see RedactEventFields).
    
    In production mode the output is JSON with ISO timestamps and
    formatted exception info. In development mode it is colored console output.
    """
    log_level = log_level or settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)
    
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]
    if redaction_policy is not None:
        shared_processors.append(RedactEventFields(redaction_policy))
    
    is_production = environment.lower() == "production"
    
    if is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    
    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level_int)
    
    root_logger = logging.getLogger()
    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)
    
    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
