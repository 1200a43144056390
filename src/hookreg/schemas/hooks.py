"""Pydantic schemas for hooks, templates and the event catalog.

These are read-only snapshots assembled from storage on every read. None of them
holds a reference back to the database.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class Event(_Snapshot):
    """An (action, entity) pair a hook can subscribe to."""

    action_name: str
    entity_name: str


class Grouping(_Snapshot):
    """A named bucket of related events (one functional area)."""

    name: str
    events: list[Event]


class SchemaField(_Snapshot):
    """A configuration slot declared by a template."""

    kind: Literal["schema"] = "schema"
    field_type: str = Field(description="Opaque type tag interpreted by the client")
    field_name: str
    optional: bool = False
    placeholder: str | None = None


class ConfigField(_Snapshot):
    """A hook's stored value for one configuration slot."""

    kind: Literal["config"] = "config"
    field_name: str
    field_value: str


class HookTemplate(_Snapshot):
    """A template with its resolved schema and the shared event catalog."""

    id: int
    name: str
    schema_: list[SchemaField] = Field(alias="schema", default_factory=list)
    event_catalog: list[Grouping] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Hook(_Snapshot):
    """A configured hook: identity, active flag, subscribed events and config values."""

    id: int
    template_name: str
    display_name: str
    is_active: bool
    created_at: date
    updated_at: date
    registered_events: list[Event] = Field(default_factory=list)
    config: list[ConfigField] = Field(default_factory=list)


class NewHookTemplate(_Snapshot):
    """Everything a client needs to render a "create hook" form."""

    templates: list[HookTemplate]
    event_catalog: list[Grouping]


class HookListResponse(BaseModel):
    """Response from GET /hooks endpoint."""

    hooks: list[Hook]
    count: int = Field(description="Number of hooks returned")


class ConformanceReport(_Snapshot):
    """Comparison of a hook's config against its template's declared schema."""

    hook_id: int
    template_name: str
    missing_required: list[str] = Field(
        default_factory=list, description="Required schema fields with no config value"
    )
    unknown_fields: list[str] = Field(
        default_factory=list, description="Config fields the template does not declare"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def conforms(self) -> bool:
        return not self.missing_required and not self.unknown_fields
