"""hookreg command-line interface."""

import asyncio
import logging

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

# Load .env file before importing config
load_dotenv()

from hookreg.db.engine import async_session  # noqa: E402
from hookreg.schemas.hooks import Hook  # noqa: E402
from hookreg.scripts.seed_templates import seed_all_templates  # noqa: E402
from hookreg.services.registry import (  # noqa: E402
    Caller,
    HookRegistry,
    HookRegistryError,
)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _print_hook(console: Console, hook: Hook) -> None:
    status = "[green]active[/]" if hook.is_active else "[red]inactive[/]"
    console.print(f"\n[bold]{hook.display_name}[/] (#{hook.id})  {status}")
    console.print(f"  Template: {hook.template_name}")
    console.print(f"  Created:  {hook.created_at}  Updated: {hook.updated_at}")

    console.print("  Events:")
    if not hook.registered_events:
        console.print("    (none)")
    for event in hook.registered_events:
        console.print(f"    {event.action_name} {event.entity_name}")

    console.print("  Config:")
    if not hook.config:
        console.print("    (none)")
    for field in hook.config:
        console.print(f"    {field.field_name} = {field.field_value}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--caller", default="cli", show_default=True, help="Caller ID for registry reads")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, caller: str) -> None:
    """hookreg - Hook configuration registry."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["caller"] = Caller(caller_id=caller)
    setup_logging(verbose)


@cli.group()
def hooks() -> None:
    """Inspect configured hooks."""
    pass


@hooks.command("ls")
@click.pass_context
def hooks_ls(ctx: click.Context) -> None:
    """List hooks ordered by display name."""
    caller: Caller = ctx.obj["caller"]

    async def _list() -> None:
        async with async_session() as session:
            try:
                found = await HookRegistry(session).list_hooks(caller)
            except HookRegistryError as e:
                raise click.ClickException(str(e)) from e

        if not found:
            click.echo("No hooks found.")
            return

        table = Table("ID", "Name", "Template", "Active", "Events", "Updated")
        for hook in found:
            table.add_row(
                str(hook.id),
                hook.display_name,
                hook.template_name,
                "yes" if hook.is_active else "no",
                str(len(hook.registered_events)),
                str(hook.updated_at),
            )
        Console().print(table)

    asyncio.run(_list())


@hooks.command("show")
@click.argument("hook_id", type=int)
@click.pass_context
def hooks_show(ctx: click.Context, hook_id: int) -> None:
    """Show a hook with its events and configuration."""
    caller: Caller = ctx.obj["caller"]

    async def _show() -> None:
        async with async_session() as session:
            try:
                hook = await HookRegistry(session).get_hook(caller, hook_id)
            except HookRegistryError as e:
                raise click.ClickException(str(e)) from e

        _print_hook(Console(), hook)

    asyncio.run(_show())


@hooks.command("check")
@click.argument("hook_id", type=int)
@click.pass_context
def hooks_check(ctx: click.Context, hook_id: int) -> None:
    """Check a hook's configuration against its template schema."""
    caller: Caller = ctx.obj["caller"]

    async def _check() -> None:
        async with async_session() as session:
            try:
                report = await HookRegistry(session).check_hook(caller, hook_id)
            except HookRegistryError as e:
                raise click.ClickException(str(e)) from e

        console = Console()
        if report.conforms:
            console.print(f"[green]Hook {hook_id} conforms to template {report.template_name}[/]")
            return

        console.print(f"[yellow]Hook {hook_id} does not conform to {report.template_name}[/]")
        for name in report.missing_required:
            console.print(f"  missing required: {name}")
        for name in report.unknown_fields:
            console.print(f"  unknown field:    {name}")
        ctx.exit(1)

    asyncio.run(_check())


@cli.group()
def templates() -> None:
    """Inspect hook templates."""
    pass


@templates.command("ls")
@click.option("--name", "-n", default=None, help="Exact template name")
@click.pass_context
def templates_ls(ctx: click.Context, name: str | None) -> None:
    """List templates with their schema fields."""
    caller: Caller = ctx.obj["caller"]

    async def _list() -> None:
        async with async_session() as session:
            try:
                view = await HookRegistry(session).get_new_hook_template(caller, name)
            except HookRegistryError as e:
                raise click.ClickException(str(e)) from e

        if not view.templates:
            click.echo("No templates found.")
            return

        console = Console()
        for template in view.templates:
            table = Table("Field", "Type", "Optional", "Placeholder", title=template.name)
            for field in template.schema_:
                table.add_row(
                    field.field_name,
                    field.field_type,
                    "yes" if field.optional else "no",
                    field.placeholder or "",
                )
            console.print(table)

    asyncio.run(_list())


@cli.group()
def events() -> None:
    """Inspect the subscribable event catalog."""
    pass


@events.command("ls")
@click.pass_context
def events_ls(ctx: click.Context) -> None:
    """List subscribable events by grouping."""
    caller: Caller = ctx.obj["caller"]

    async def _list() -> None:
        async with async_session() as session:
            try:
                view = await HookRegistry(session).get_new_hook_template(caller)
            except HookRegistryError as e:
                raise click.ClickException(str(e)) from e
        catalog = view.event_catalog

        if not catalog:
            click.echo("No events found.")
            return

        console = Console()
        for grouping in catalog:
            console.print(f"[bold]{grouping.name}[/] ({len(grouping.events)})")
            for event in grouping.events:
                console.print(f"  {event.action_name} {event.entity_name}")

    asyncio.run(_list())


@cli.group()
def db() -> None:
    """Database maintenance."""
    pass


@db.command("seed-templates")
def db_seed_templates() -> None:
    """Create the built-in Web and SMS templates if missing."""

    async def _seed() -> None:
        async with async_session() as session:
            async with session.begin():
                created = await seed_all_templates(session)
        click.echo(f"Created {created} template(s).")

    asyncio.run(_seed())


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
