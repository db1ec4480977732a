"""Observability configuration using Logfire.

Usage:
    import logfire

    logfire.info("Account created", account_id=str(account.id))

    with logfire.span("identity_reconciler.find_or_create", nickname=nickname):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from usergroup.config import Settings
from usergroup.util.error import ConfigurationError


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Sending to the Logfire cloud is decided by, in order: the explicit
    ``OBSERVABILITY__SEND_TO_LOGFIRE`` setting, then whether a token is set.

    Args:
        settings: Application settings

    Raises:
        ConfigurationError: If sending is forced on without a token outside
            development and test
    """
    observability = settings.observability
    if observability.send_to_logfire is not None:
        send_to_logfire = observability.send_to_logfire
    else:
        send_to_logfire = bool(observability.logfire_token)

    if (
        send_to_logfire
        and not observability.logfire_token
        and settings.environment in ("staging", "production")
    ):
        raise ConfigurationError(
            "OBSERVABILITY__SEND_TO_LOGFIRE is set but no OBSERVABILITY__LOGFIRE_TOKEN"
        )

    config_kwargs = {
        "service_name": "usergroup-accounts",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if observability.logfire_token:
        config_kwargs["token"] = observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(observability.logfire_token),
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Traces every SQL statement, including the inserts that hit the
    nickname unique index.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")
