"""
Configuração de logging estruturado com structlog.

Logs são formatados como JSON em produção e coloridos em desenvolvimento.
"""

import logging
import sys

import structlog

from taskflow.core.config import Settings, settings as default_settings


def add_app_context(settings: Settings) -> structlog.types.Processor:
    """Processador que identifica a aplicação e o backend de storage em cada evento."""

    def processor(logger, method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("app", settings.PROJECT_NAME)
        event_dict.setdefault("environment", settings.ENVIRONMENT)
        event_dict.setdefault("backend", settings.STORAGE_BACKEND)
        return event_dict

    return processor


def setup_logging(settings: Settings | None = None) -> None:
    """Configura logging estruturado para a aplicação."""
    settings = settings or default_settings

    # Processadores comuns
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_app_context(settings),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.DEBUG:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True)
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
    )
