"""Caller resolution for API routes."""

from fastapi import Request

from engage.config import AuthSettings
from engage.domain.service import IdentityService


def resolve_caller_id(
    request: Request,
    identity_service: IdentityService,
    auth_settings: AuthSettings,
) -> str | None:
    """Read the caller's user id from the auth cookie or bearer header.

    Args:
        request: Incoming request
        identity_service: Identity service for token verification
        auth_settings: Cookie name configuration

    Returns:
        User ID string, or None for anonymous callers
    """
    token = request.cookies.get(auth_settings.cookie_name)
    if not token:
        header = request.headers.get("Authorization", "")
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            token = credentials

    user_id = identity_service.get_user_id_from_token(token)
    return str(user_id) if user_id else None
