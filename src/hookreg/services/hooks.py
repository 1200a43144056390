"""Hook assembly service.

Hooks are assembled in three steps: base rows (joined with their template name),
then registered events and configuration values fetched in bulk for all base
rows, then joined in memory. A hook deleted between the base read and the
sub-reads renders with empty events and config.
"""

import logging
from collections.abc import Sequence

from sqlalchemy import Row, Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from hookreg.db.models import Hook as HookRow
from hookreg.db.models import HookConfiguration, HookRegisteredEvent, HookTemplate
from hookreg.schemas.hooks import ConfigField, Event, Hook

logger = logging.getLogger(__name__)


def _base_query() -> Select:
    return select(
        HookRow.id,
        HookTemplate.name.label("template_name"),
        HookRow.name.label("display_name"),
        HookRow.is_active,
        HookRow.created_date,
        HookRow.lastmodified_date,
    ).join(HookTemplate, HookRow.template_id == HookTemplate.id)


async def _fetch_events(
    session: AsyncSession, hook_ids: Sequence[int]
) -> dict[int, list[Event]]:
    """Fetch registered events for hooks, keyed by hook ID.

    Duplicate registrations in storage are returned as-is.
    """
    events: dict[int, list[Event]] = {hook_id: [] for hook_id in hook_ids}
    stmt = (
        select(
            HookRegisteredEvent.hook_id,
            HookRegisteredEvent.action_name,
            HookRegisteredEvent.entity_name,
        )
        .where(HookRegisteredEvent.hook_id.in_(list(events)))
        .order_by(HookRegisteredEvent.id)
    )
    result = await session.execute(stmt)
    for hook_id, action_name, entity_name in result:
        events[hook_id].append(Event(action_name=action_name, entity_name=entity_name))
    return events


async def _fetch_config(
    session: AsyncSession, hook_ids: Sequence[int]
) -> dict[int, list[ConfigField]]:
    """Fetch configuration values for hooks keyed by hook ID, ordered by field name."""
    config: dict[int, list[ConfigField]] = {hook_id: [] for hook_id in hook_ids}
    stmt = (
        select(
            HookConfiguration.hook_id,
            HookConfiguration.field_name,
            HookConfiguration.field_value,
        )
        .where(HookConfiguration.hook_id.in_(list(config)))
        .order_by(HookConfiguration.field_name, HookConfiguration.id)
    )
    result = await session.execute(stmt)
    for hook_id, field_name, field_value in result:
        config[hook_id].append(ConfigField(field_name=field_name, field_value=field_value))
    return config


async def _assemble(session: AsyncSession, base_rows: Sequence[Row]) -> list[Hook]:
    if not base_rows:
        return []

    hook_ids = [row.id for row in base_rows]
    events = await _fetch_events(session, hook_ids)
    config = await _fetch_config(session, hook_ids)

    return [
        Hook(
            id=row.id,
            template_name=row.template_name,
            display_name=row.display_name,
            is_active=bool(row.is_active),
            created_at=row.created_date,
            updated_at=row.lastmodified_date,
            registered_events=events[row.id],
            config=config[row.id],
        )
        for row in base_rows
    ]


async def assemble_hook(session: AsyncSession, hook_id: int) -> Hook | None:
    """Assemble a single hook.

    No events or config are fetched when the hook does not exist.

    Args:
        session: Database session
        hook_id: Hook ID

    Returns:
        Hook if found, None otherwise
    """
    result = await session.execute(_base_query().where(HookRow.id == hook_id))
    base_row = result.one_or_none()
    if base_row is None:
        logger.debug("Hook %s not found", hook_id)
        return None

    hooks = await _assemble(session, [base_row])
    return hooks[0]


async def assemble_all_hooks(session: AsyncSession) -> list[Hook]:
    """Assemble every hook.

    Args:
        session: Database session

    Returns:
        Hooks ordered by display name
    """
    result = await session.execute(_base_query().order_by(HookRow.name, HookRow.id))
    hooks = await _assemble(session, result.all())

    logger.debug("Assembled %d hook(s)", len(hooks))
    return hooks
