"""FastAPI dependencies shared by routers."""

from fastapi import Depends, Header, Request

from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import CallerIdentity


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def get_caller(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> CallerIdentity | None:
    """Resolve the bearer token to a caller; None when absent or invalid.

    Services reject a missing caller themselves, so this never raises.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return container.token_service.resolve_caller(token.strip())
