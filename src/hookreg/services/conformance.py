"""Compare a hook's stored configuration with its template's declared schema."""

from collections.abc import Sequence

from hookreg.schemas.hooks import ConformanceReport, Hook, SchemaField


def check_conformance(hook: Hook, schema: Sequence[SchemaField]) -> ConformanceReport:
    """Report required fields the hook leaves unset and config the template doesn't declare.

    Nothing is rejected or rewritten; the report is purely descriptive.

    Args:
        hook: Assembled hook
        schema: Schema fields of the hook's template (empty if the template is gone)

    Returns:
        ConformanceReport with both lists sorted by field name
    """
    declared = {field.field_name for field in schema}
    configured = {field.field_name for field in hook.config}

    missing_required = sorted(
        field.field_name
        for field in schema
        if not field.optional and field.field_name not in configured
    )
    unknown_fields = sorted(configured - declared)

    return ConformanceReport(
        hook_id=hook.id,
        template_name=hook.template_name,
        missing_required=missing_required,
        unknown_fields=unknown_fields,
    )
