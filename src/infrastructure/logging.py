"""Structured Logging"""
from __future__ import annotations

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """
    構造化ログを設定

    Lambda では stdout がそのまま CloudWatch Logs に送られるため、
    1行1JSON で出力する。
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
    )
