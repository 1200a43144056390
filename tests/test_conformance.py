"""Tests for the hook/template conformance check."""

from datetime import date

from hookreg.schemas.hooks import ConfigField, Hook, SchemaField
from hookreg.services.conformance import check_conformance

WEB_SCHEMA = [
    SchemaField(field_type="string", field_name="Content Type", optional=True),
    SchemaField(field_type="string", field_name="Payload URL", optional=False),
]


def _hook(*config: tuple[str, str]) -> Hook:
    return Hook(
        id=1,
        template_name="Web",
        display_name="Test",
        is_active=True,
        created_at=date(2024, 1, 2),
        updated_at=date(2024, 1, 2),
        config=[ConfigField(field_name=name, field_value=value) for name, value in config],
    )


def test_required_fields_present() -> None:
    report = check_conformance(_hook(("Payload URL", "https://x")), WEB_SCHEMA)

    assert report.conforms is True
    assert report.missing_required == []
    assert report.unknown_fields == []


def test_optional_fields_may_be_absent() -> None:
    report = check_conformance(
        _hook(("Payload URL", "https://x"), ("Content Type", "json")), WEB_SCHEMA
    )

    assert report.conforms is True


def test_missing_required_field() -> None:
    report = check_conformance(_hook(("Content Type", "json")), WEB_SCHEMA)

    assert report.conforms is False
    assert report.missing_required == ["Payload URL"]


def test_unknown_config_field() -> None:
    report = check_conformance(
        _hook(("Payload URL", "https://x"), ("Secret", "s3cr3t"), ("Api Key", "k")), WEB_SCHEMA
    )

    assert report.conforms is False
    assert report.unknown_fields == ["Api Key", "Secret"]


def test_template_without_schema() -> None:
    """If the template has no schema every config field is unknown."""
    report = check_conformance(_hook(("Payload URL", "https://x")), [])

    assert report.missing_required == []
    assert report.unknown_fields == ["Payload URL"]


def test_report_serializes_conforms() -> None:
    report = check_conformance(_hook(), WEB_SCHEMA)

    data = report.model_dump()
    assert data["conforms"] is False
    assert data["hook_id"] == 1
    assert data["template_name"] == "Web"
