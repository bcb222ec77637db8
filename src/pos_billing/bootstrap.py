from __future__ import annotations

import logging
from dataclasses import dataclass

import structlog

from pos_billing.config import BillingSettings
from pos_billing.core.domain.model.cart import Cart
from pos_billing.core.domain.service.checkout_service import (
    CheckoutDeps,
    CheckoutService,
)

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class UseCases:
    checkout: CheckoutService


def configure_logging(settings: BillingSettings) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _LEVELS[settings.log_level]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def build_usecases(settings: BillingSettings | None = None) -> UseCases:
    settings = settings or BillingSettings.from_env()
    configure_logging(settings)
    checkout = CheckoutService(CheckoutDeps(settings=settings))
    return UseCases(checkout=checkout)


def open_cart() -> Cart:
    # one cart per checkout session; the caller owns it
    return Cart()
