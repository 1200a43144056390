"""Hook template service: schema resolution and template assembly."""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hookreg.db.models import HookSchemaField
from hookreg.db.models import HookTemplate as HookTemplateRow
from hookreg.schemas.hooks import Grouping, HookTemplate, SchemaField
from hookreg.services.events import build_event_catalog

logger = logging.getLogger(__name__)


def _to_schema_field(row: HookSchemaField) -> SchemaField:
    return SchemaField(
        field_type=row.field_type,
        field_name=row.field_name,
        optional=bool(row.optional),
        placeholder=row.placeholder,
    )


async def resolve_schemas(
    session: AsyncSession,
    template_ids: Sequence[int],
) -> dict[int, list[SchemaField]]:
    """Resolve the declared schema of several templates in one query.

    Args:
        session: Database session
        template_ids: Template IDs to resolve

    Returns:
        Map of template ID to its schema fields ordered by field name. Every
        requested ID is present, templates without fields map to an empty list.
    """
    schemas: dict[int, list[SchemaField]] = {template_id: [] for template_id in template_ids}
    if not schemas:
        return schemas

    stmt = (
        select(HookSchemaField)
        .where(HookSchemaField.hook_template_id.in_(list(schemas)))
        .order_by(HookSchemaField.field_name, HookSchemaField.id)
    )
    result = await session.execute(stmt)
    for row in result.scalars():
        schemas[row.hook_template_id].append(_to_schema_field(row))

    return schemas


async def resolve_schema(session: AsyncSession, template_id: int) -> list[SchemaField]:
    """Resolve the declared schema of a single template.

    Args:
        session: Database session
        template_id: Template ID

    Returns:
        Schema fields ordered by field name (empty if the template declares none)
    """
    schemas = await resolve_schemas(session, [template_id])
    return schemas[template_id]


async def assemble_template_view(
    session: AsyncSession,
    template_name: str | None = None,
    *,
    event_catalog: list[Grouping] | None = None,
) -> list[HookTemplate]:
    """Assemble templates with their schema and the shared event catalog.

    A name that matches no template yields an empty list rather than an error.

    Args:
        session: Database session
        template_name: Exact template name, or None for all templates
        event_catalog: Pre-built catalog to attach; built once here if omitted

    Returns:
        Templates ordered by name
    """
    stmt = select(HookTemplateRow.id, HookTemplateRow.name)
    if template_name is not None:
        stmt = stmt.where(HookTemplateRow.name == template_name)
    stmt = stmt.order_by(HookTemplateRow.name, HookTemplateRow.id)

    result = await session.execute(stmt)
    rows = result.all()

    if event_catalog is None:
        event_catalog = await build_event_catalog(session)

    schemas = await resolve_schemas(session, [row.id for row in rows])

    logger.debug("Assembled %d template(s) for name=%r", len(rows), template_name)
    return [
        HookTemplate(
            id=row.id,
            name=row.name,
            schema=schemas[row.id],
            event_catalog=event_catalog,
        )
        for row in rows
    ]
