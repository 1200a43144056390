"""REST API router for hooks and hook templates."""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hookreg.db.engine import get_session
from hookreg.schemas.hooks import ConformanceReport, Hook, HookListResponse, NewHookTemplate
from hookreg.services.registry import (
    Caller,
    HookNotFoundError,
    HookRegistry,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["hooks"])


def get_registry(session: AsyncSession = Depends(get_session)) -> HookRegistry:
    """Build a registry bound to the request's database session."""
    return HookRegistry(session)


def get_caller(
    x_caller_id: str | None = Header(default=None, alias="X-Caller-ID"),
) -> Caller | None:
    """Build the caller from the X-Caller-ID header, if present."""
    if x_caller_id is None:
        return None
    return Caller(caller_id=x_caller_id)


def _unauthenticated(e: UnauthenticatedError) -> HTTPException:
    logger.warning("Rejected unauthenticated request: %s", e)
    return HTTPException(status_code=401, detail=str(e))


@router.get("/hooks", response_model=HookListResponse)
async def list_hooks_endpoint(
    registry: HookRegistry = Depends(get_registry),
    caller: Caller | None = Depends(get_caller),
) -> HookListResponse:
    """List all hooks ordered by display name.

    Requires X-Caller-ID header.
    """
    try:
        hooks = await registry.list_hooks(caller)
    except UnauthenticatedError as e:
        raise _unauthenticated(e) from e

    return HookListResponse(hooks=hooks, count=len(hooks))


# NOTE: /hooks/template must come BEFORE /hooks/{hook_id}
@router.get("/hooks/template", response_model=NewHookTemplate)
async def get_new_hook_template_endpoint(
    template_name: str | None = Query(
        default=None, description="Exact template name; omit for all templates"
    ),
    registry: HookRegistry = Depends(get_registry),
    caller: Caller | None = Depends(get_caller),
) -> NewHookTemplate:
    """Get templates and the event catalog for building a new hook.

    An unknown template_name returns an empty template list, not a 404.
    """
    try:
        return await registry.get_new_hook_template(caller, template_name)
    except UnauthenticatedError as e:
        raise _unauthenticated(e) from e


@router.get("/hooks/{hook_id}", response_model=Hook)
async def get_hook_endpoint(
    hook_id: int,
    registry: HookRegistry = Depends(get_registry),
    caller: Caller | None = Depends(get_caller),
) -> Hook:
    """Get a hook with its registered events and configuration."""
    try:
        return await registry.get_hook(caller, hook_id)
    except UnauthenticatedError as e:
        raise _unauthenticated(e) from e
    except HookNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.get("/hooks/{hook_id}/conformance", response_model=ConformanceReport)
async def get_hook_conformance_endpoint(
    hook_id: int,
    registry: HookRegistry = Depends(get_registry),
    caller: Caller | None = Depends(get_caller),
) -> ConformanceReport:
    """Compare a hook's configuration with its template's declared schema."""
    try:
        return await registry.check_hook(caller, hook_id)
    except UnauthenticatedError as e:
        raise _unauthenticated(e) from e
    except HookNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
