"""Shared fixtures: an in-memory SQLite database and seeded hook registry rows."""

import os
from collections.abc import AsyncGenerator, Generator
from datetime import date

# Point the default engine at SQLite before any hookreg module builds it
os.environ.setdefault("HOOKREG_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from hookreg.db.models import (  # noqa: E402
    Base,
    Hook,
    HookConfiguration,
    HookRegisteredEvent,
    HookSchemaField,
    HookTemplate,
    Permission,
)

# (grouping, entity_name, action_name) in insertion order
PERMISSION_ROWS: list[tuple[str, str | None, str | None]] = [
    ("portfolio", "CLIENT", "CREATE"),
    ("portfolio", "CLIENT", "READ"),
    ("portfolio", "CLIENT", "CREATE_CHECKER"),
    ("portfolio", "LOAN", "APPROVE"),
    ("portfolio", "LOAN", "DISBURSE"),
    ("portfolio", "LOAN", "READ_TRANSACTIONS"),
    ("organisation", "OFFICE", "CREATE"),
    ("organisation", "OFFICE", "READ"),
    ("special", None, None),
    ("configuration", "HOOK", "UPDATE"),
    ("authorisation", "ROLE", "READ"),
]


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def statement_log(db_engine: AsyncEngine) -> Generator[list[str], None, None]:
    """Record every SQL statement executed against the test database."""
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany) -> None:  # noqa: ANN001
        statements.append(statement)

    event.listen(db_engine.sync_engine, "before_cursor_execute", _record)
    yield statements
    event.remove(db_engine.sync_engine, "before_cursor_execute", _record)


@pytest.fixture
async def permission_catalog(db_session: AsyncSession) -> None:
    """Seed the permissions table."""
    for grouping, entity_name, action_name in PERMISSION_ROWS:
        db_session.add(
            Permission(
                grouping=grouping,
                code=f"{action_name or 'ALL'}_{entity_name or 'FUNCTIONS'}",
                entity_name=entity_name,
                action_name=action_name,
            )
        )
    await db_session.commit()


@pytest.fixture
async def web_template(db_session: AsyncSession) -> HookTemplate:
    """The "Web" template: a required Payload URL and an optional Content Type."""
    template = HookTemplate(
        name="Web",
        schema_fields=[
            HookSchemaField(field_name="Payload URL", field_type="string", optional=False),
            HookSchemaField(
                field_name="Content Type",
                field_type="string",
                optional=True,
                placeholder="json / form",
            ),
        ],
    )
    db_session.add(template)
    await db_session.commit()
    return template


@pytest.fixture
async def sms_template(db_session: AsyncSession) -> HookTemplate:
    template = HookTemplate(
        name="SMS",
        schema_fields=[
            HookSchemaField(field_name="Phone Number", field_type="string"),
            HookSchemaField(field_name="SMS Provider", field_type="string"),
        ],
    )
    db_session.add(template)
    await db_session.commit()
    return template


@pytest.fixture
async def web_hook(db_session: AsyncSession, web_template: HookTemplate) -> Hook:
    """Hook 7 ("My Hook") on the Web template, subscribed to CREATE on CLIENT."""
    hook = Hook(
        id=7,
        template_id=web_template.id,
        name="My Hook",
        is_active=True,
        created_date=date(2024, 1, 2),
        lastmodified_date=date(2024, 3, 4),
        registered_events=[HookRegisteredEvent(action_name="CREATE", entity_name="CLIENT")],
        configuration=[HookConfiguration(field_name="Payload URL", field_value="https://x")],
    )
    db_session.add(hook)
    await db_session.commit()
    return hook


@pytest.fixture
async def more_hooks(
    db_session: AsyncSession, web_template: HookTemplate, sms_template: HookTemplate
) -> list[Hook]:
    """Three more hooks inserted out of display-name order."""
    hooks = [
        Hook(
            template_id=sms_template.id,
            name="Zulu Alerts",
            is_active=False,
            created_date=date(2024, 2, 1),
            lastmodified_date=date(2024, 2, 1),
            registered_events=[
                HookRegisteredEvent(action_name="APPROVE", entity_name="LOAN"),
                HookRegisteredEvent(action_name="DISBURSE", entity_name="LOAN"),
            ],
            configuration=[
                HookConfiguration(field_name="SMS Provider", field_value="twilio"),
                HookConfiguration(field_name="Phone Number", field_value="+15550100"),
            ],
        ),
        Hook(
            template_id=web_template.id,
            name="Alpha Sync",
            is_active=True,
            created_date=date(2024, 2, 2),
            lastmodified_date=date(2024, 2, 3),
            configuration=[
                HookConfiguration(field_name="Payload URL", field_value="https://alpha"),
                HookConfiguration(field_name="Content Type", field_value="json"),
            ],
        ),
        Hook(
            template_id=web_template.id,
            name="Mid Feed",
            is_active=True,
            created_date=date(2024, 2, 5),
            lastmodified_date=date(2024, 2, 5),
        ),
    ]
    db_session.add_all(hooks)
    await db_session.commit()
    return hooks
