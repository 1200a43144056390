"""SQLAlchemy models for hookreg."""

from datetime import date

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""


class Permission(Base):
    """A system permission. Non-internal actions double as hook trigger events."""

    __tablename__ = "permissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    grouping: Mapped[str] = mapped_column(String(64), nullable=False)
    code: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    entity_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    action_name: Mapped[str | None] = mapped_column(String(128), nullable=True)

    __table_args__ = (Index("idx_permissions_grouping_entity", "grouping", "entity_name"),)


class HookTemplate(Base):
    """A reusable declaration of the configuration a class of hooks requires."""

    __tablename__ = "hook_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)

    # Relationships
    schema_fields: Mapped[list["HookSchemaField"]] = relationship(
        "HookSchemaField", back_populates="template", cascade="all, delete-orphan"
    )
    hooks: Mapped[list["Hook"]] = relationship("Hook", back_populates="template")

    __table_args__ = (Index("idx_hook_templates_name", "name"),)


class HookSchemaField(Base):
    """One configuration slot declared by a template."""

    __tablename__ = "hook_schema_fields"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hook_template_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hook_templates.id", ondelete="CASCADE"), nullable=False
    )
    field_type: Mapped[str] = mapped_column(String(45), nullable=False)
    field_name: Mapped[str] = mapped_column(String(100), nullable=False)
    placeholder: Mapped[str | None] = mapped_column(String(100), nullable=True)
    optional: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    template: Mapped[HookTemplate] = relationship("HookTemplate", back_populates="schema_fields")

    __table_args__ = (
        UniqueConstraint("hook_template_id", "field_name", name="uq_hook_schema_template_field"),
    )


class Hook(Base):
    """A configured webhook instance."""

    __tablename__ = "hooks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    template_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hook_templates.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_date: Mapped[date] = mapped_column(
        Date, nullable=False, server_default=text("CURRENT_DATE")
    )
    lastmodified_date: Mapped[date] = mapped_column(
        Date, nullable=False, server_default=text("CURRENT_DATE")
    )

    # Relationships
    template: Mapped[HookTemplate] = relationship("HookTemplate", back_populates="hooks")
    registered_events: Mapped[list["HookRegisteredEvent"]] = relationship(
        "HookRegisteredEvent", back_populates="hook", cascade="all, delete-orphan"
    )
    configuration: Mapped[list["HookConfiguration"]] = relationship(
        "HookConfiguration", back_populates="hook", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_hooks_name", "name"),)


class HookRegisteredEvent(Base):
    """An (action, entity) event a hook subscribes to."""

    __tablename__ = "hook_registered_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hook_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hooks.id", ondelete="CASCADE"), nullable=False
    )
    entity_name: Mapped[str] = mapped_column(String(45), nullable=False)
    action_name: Mapped[str] = mapped_column(String(45), nullable=False)

    # Relationships
    hook: Mapped[Hook] = relationship("Hook", back_populates="registered_events")

    __table_args__ = (Index("idx_hook_events_hook", "hook_id"),)


class HookConfiguration(Base):
    """A stored configuration value for one of a hook's schema fields."""

    __tablename__ = "hook_configuration"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hook_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hooks.id", ondelete="CASCADE"), nullable=False
    )
    field_type: Mapped[str] = mapped_column(String(45), nullable=False, default="string")
    field_name: Mapped[str] = mapped_column(String(100), nullable=False)
    field_value: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    hook: Mapped[Hook] = relationship("Hook", back_populates="configuration")

    __table_args__ = (Index("idx_hook_configuration_hook", "hook_id"),)
