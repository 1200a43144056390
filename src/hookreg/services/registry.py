"""Hook registry: the read operations exposed to the REST API and CLI.

Every operation takes the calling principal explicitly and checks it once, before
any database read.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hookreg.db.models import Hook as HookRow
from hookreg.schemas.hooks import ConformanceReport, Hook, NewHookTemplate
from hookreg.services.conformance import check_conformance
from hookreg.services.events import build_event_catalog
from hookreg.services.hooks import assemble_all_hooks, assemble_hook
from hookreg.services.templates import assemble_template_view, resolve_schema

logger = logging.getLogger(__name__)


class HookRegistryError(Exception):
    """Error during hook registry operations."""

    pass


class UnauthenticatedError(HookRegistryError):
    """No valid caller was presented."""

    pass


class HookNotFoundError(HookRegistryError):
    """Hook not found."""

    def __init__(self, hook_id: int) -> None:
        super().__init__(f"Hook '{hook_id}' not found")
        self.hook_id = hook_id


@dataclass(frozen=True)
class Caller:
    """An authenticated principal, as established by the authorization layer."""

    caller_id: str


def require_caller(caller: Caller | None) -> Caller:
    """Return the caller, or raise UnauthenticatedError if there is none.

    Raises:
        UnauthenticatedError: If caller is missing or has an empty ID
    """
    if caller is None or not caller.caller_id.strip():
        raise UnauthenticatedError("A valid caller is required")
    return caller


class HookRegistry:
    """Read façade over hooks, templates and the event catalog."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_hooks(self, caller: Caller | None) -> list[Hook]:
        """List all hooks ordered by display name."""
        require_caller(caller)
        return await assemble_all_hooks(self.session)

    async def get_hook(self, caller: Caller | None, hook_id: int) -> Hook:
        """Get a single hook.

        Raises:
            UnauthenticatedError: If caller is missing
            HookNotFoundError: If no hook has this ID
        """
        require_caller(caller)
        hook = await assemble_hook(self.session, hook_id)
        if hook is None:
            raise HookNotFoundError(hook_id)
        return hook

    async def get_new_hook_template(
        self, caller: Caller | None, template_name: str | None = None
    ) -> NewHookTemplate:
        """Get the data needed to render a "create hook" form.

        Returns all templates, or those named template_name (possibly none),
        each carrying the same event catalog, which is computed once.
        """
        require_caller(caller)
        event_catalog = await build_event_catalog(self.session)
        templates = await assemble_template_view(
            self.session, template_name, event_catalog=event_catalog
        )
        return NewHookTemplate(templates=templates, event_catalog=event_catalog)

    async def check_hook(self, caller: Caller | None, hook_id: int) -> ConformanceReport:
        """Check a hook's configuration against its template's schema.

        Raises:
            UnauthenticatedError: If caller is missing
            HookNotFoundError: If no hook has this ID
        """
        hook = await self.get_hook(caller, hook_id)
        # Template names are not unique, so resolve by the hook's template ID
        template_id = await self.session.scalar(
            select(HookRow.template_id).where(HookRow.id == hook_id)
        )
        schema = await resolve_schema(self.session, template_id) if template_id is not None else []

        report = check_conformance(hook, schema)
        if not report.conforms:
            logger.info(
                "Hook %s does not conform to template %r: missing=%s unknown=%s",
                hook_id,
                hook.template_name,
                report.missing_required,
                report.unknown_fields,
            )
        return report
