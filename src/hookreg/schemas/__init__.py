"""Schemas for hookreg data models."""

from hookreg.schemas.hooks import (
    ConfigField,
    ConformanceReport,
    Event,
    Grouping,
    Hook,
    HookListResponse,
    HookTemplate,
    NewHookTemplate,
    SchemaField,
)

__all__ = [
    "ConfigField",
    "ConformanceReport",
    "Event",
    "Grouping",
    "Hook",
    "HookListResponse",
    "HookTemplate",
    "NewHookTemplate",
    "SchemaField",
]
