"""Event catalog built from the system permission catalog.

Every permission whose action is a real state change (CREATE, UPDATE, APPROVE...)
is a subscribable hook event. Maker-checker and read permissions are internal
and never trigger hooks.
"""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hookreg.db.models import Permission
from hookreg.schemas.hooks import Event, Grouping

logger = logging.getLogger(__name__)

# Substrings (case-sensitive) marking actions that can never be hook events
EXCLUDED_ACTION_MARKERS = ("CHECKER", "READ")

PermissionTriple = tuple[str, str, str]


def is_subscribable(action_name: str) -> bool:
    """Return True if an action may be used as a hook trigger event."""
    return not any(marker in action_name for marker in EXCLUDED_ACTION_MARKERS)


def group_events(permissions: Iterable[PermissionTriple]) -> list[Grouping]:
    """Partition (grouping, entity_name, action_name) triples into groupings.

    Input order is preserved both across and within groupings, so callers should
    supply triples already ordered by grouping, then entity name. Filtered-out
    triples never produce an empty grouping.

    Args:
        permissions: Permission triples in catalog order

    Returns:
        Groupings in first-seen order, each with its events in input order
    """
    buckets: dict[str, list[Event]] = {}
    for grouping, entity_name, action_name in permissions:
        if not is_subscribable(action_name):
            continue
        buckets.setdefault(grouping, []).append(
            Event(action_name=action_name, entity_name=entity_name)
        )

    return [Grouping(name=name, events=events) for name, events in buckets.items()]


async def build_event_catalog(session: AsyncSession) -> list[Grouping]:
    """Build the system-wide event catalog from the permissions table.

    Args:
        session: Database session

    Returns:
        Groupings ordered by grouping name, events ordered by entity name
    """
    stmt = (
        select(Permission.grouping, Permission.entity_name, Permission.action_name)
        .where(Permission.entity_name.is_not(None), Permission.action_name.is_not(None))
        .order_by(Permission.grouping, Permission.entity_name, Permission.id)
    )
    result = await session.execute(stmt)
    catalog = group_events(result.all())

    logger.debug(
        "Built event catalog: %d groupings, %d events",
        len(catalog),
        sum(len(g.events) for g in catalog),
    )
    return catalog
