"""Seed the built-in hook templates into the database."""

import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hookreg.config import get_settings
from hookreg.db.models import HookSchemaField, HookTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """A schema field to seed."""

    field_name: str
    field_type: str = "string"
    optional: bool = False
    placeholder: str | None = None


BUILTIN_TEMPLATES: dict[str, list[FieldSpec]] = {
    "Web": [
        FieldSpec("Payload URL"),
        FieldSpec("Content Type", optional=True, placeholder="json / form"),
    ],
    "SMS": [
        FieldSpec("Payload URL"),
        FieldSpec("SMS Provider"),
        FieldSpec("Phone Number"),
        FieldSpec("SMS Provider Token"),
        FieldSpec("SMS Provider Account Id"),
    ],
}


async def seed_template(session: AsyncSession, name: str, fields: list[FieldSpec]) -> bool:
    """Create a template with its schema unless one with that name exists.

    Returns:
        True if the template was created, False if it already existed
    """
    result = await session.execute(select(HookTemplate.id).where(HookTemplate.name == name))
    if result.first() is not None:
        logger.info("Template %r already exists, skipping", name)
        return False

    template = HookTemplate(
        name=name,
        schema_fields=[
            HookSchemaField(
                field_name=f.field_name,
                field_type=f.field_type,
                optional=f.optional,
                placeholder=f.placeholder,
            )
            for f in fields
        ],
    )
    session.add(template)
    await session.flush()

    logger.info("Created template %r with %d field(s)", name, len(fields))
    return True


async def seed_all_templates(session: AsyncSession) -> int:
    """Seed every built-in template.

    Returns:
        Number of templates created
    """
    created = 0
    for name, fields in BUILTIN_TEMPLATES.items():
        if await seed_template(session, name, fields):
            created += 1
    return created


async def main() -> None:
    """Run the seeding script."""
    logging.basicConfig(level=logging.INFO)

    settings = get_settings()
    engine = create_async_engine(settings.database_url)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as session:
        async with session.begin():
            await seed_all_templates(session)

    await engine.dispose()
    logger.info("Seeding complete")


if __name__ == "__main__":
    asyncio.run(main())
