"""Logfire setup for the engagement service.

Services open their own spans and attach ids as attributes:

    with logfire.span("like_service.toggle_like", target_id=str(target_id)):
        logfire.info("Like toggled", user_id=str(user_id), is_liked=True)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from engage.config import ObservabilitySettings, Settings

# Path parameters copied onto request spans
TRACED_PATH_PARAMS = ("content_item_id", "comment_id")


def _sends_to_logfire(observability: ObservabilitySettings) -> bool:
    """Explicit OBSERVABILITY__SEND_TO_LOGFIRE wins, otherwise a token enables it."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Args:
        settings: Application settings
    """
    send_to_logfire = _sends_to_logfire(settings.observability)

    logfire.configure(
        service_name="engage",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token or None,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        git_sha=settings.git_sha,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace API requests, tagging each span with the targeted item or comment."""

    def map_request_attributes(request, attributes):
        result = {**attributes, "path": request.url.path}
        if request.client:
            result["client_host"] = request.client.host
        for name in TRACED_PATH_PARAMS:
            if name in request.path_params:
                result[name] = request.path_params[name]
        return result

    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=map_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements, including savepoints and counter updates."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
