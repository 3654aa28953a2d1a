"""CLI commands for Upcraft."""

import sys
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog import RoleCatalog
from cli.config import get_paths, load_config_model
from cli.logging_config import setup_logging
from gaps import CareerContext
from shared_types import GapStatus
from store import init_db, set_default_db_path
from store import goals as goal_store
from store import skills as skill_store
from store.learning import seed_resources

console = Console()

_STATUS_STYLE = {
    GapStatus.MISSING: "red",
    GapStatus.IMPROVEMENT: "yellow",
    GapStatus.STRONG: "green",
}


def _db_path(ctx: click.Context) -> Path:
    return ctx.obj["db_path"]


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Config file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None):
    """Upcraft - skill gaps and learning paths for your target role."""
    try:
        config = load_config_model(config_path)
    except ValueError as e:
        console.print(f"[red]Config error:[/] {escape(str(e))}")
        sys.exit(1)
    paths = get_paths(config.to_dict())
    setup_logging(
        json_mode=config.logging.json_mode,
        level="DEBUG" if verbose else config.logging.level,
        log_file=paths["log_file"],
    )
    set_default_db_path(paths["db_path"])
    ctx.obj = {"config": config, "db_path": paths["db_path"]}


@cli.command("init-db")
@click.pass_context
def init_db_cmd(ctx: click.Context):
    """Create tables and seed the role catalog and resource library."""
    db_path = _db_path(ctx)
    init_db(db_path)
    roles = RoleCatalog(db_path).seed()
    added = seed_resources(db_path=db_path)
    console.print(f"[green]Database ready[/] at {db_path} ({roles} roles, {added} new resources)")


@cli.command()
@click.option("--industry", default=None, help="Filter by industry")
@click.option("--type", "role_type", default=None, help="Filter by role type")
@click.pass_context
def roles(ctx: click.Context, industry: str | None, role_type: str | None):
    """List catalog roles."""
    catalog = RoleCatalog(_db_path(ctx))
    found = catalog.list_roles(industry=industry, role_type=role_type)
    if not found:
        console.print("[dim]No roles found. Run `upcraft init-db` first.[/]")
        return

    table = Table(title="Roles")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Industry")
    table.add_column("Type")
    table.add_column("Required skills")
    for role in found:
        table.add_row(str(role.id), role.title, role.industry, role.role_type, ", ".join(role.required_skills))
    console.print(table)


@cli.command()
@click.argument("user_id")
@click.option("--role", "role_title", default=None, help="Compare against this role instead of the stored target")
@click.pass_context
def gaps(ctx: click.Context, user_id: str, role_title: str | None):
    """Show a user's skill gaps, most urgent first."""
    db_path = _db_path(ctx)
    catalog = RoleCatalog(db_path)

    role = None
    if role_title:
        role = catalog.find_by_title(role_title)
        if role is None:
            console.print(f"[red]Unknown role:[/] {escape(role_title)}")
            sys.exit(1)
    else:
        goal = goal_store.current_goal(user_id, db_path=db_path)
        if goal and goal["target_role_id"]:
            role = catalog.get(goal["target_role_id"])

    career = CareerContext(
        user_id=user_id,
        skills_provider=lambda: skill_store.skill_levels_for_user(user_id, db_path=db_path),
        initial_role=role,
    )
    view = career.dashboard.view()
    career.close()

    if view.message:
        console.print(f"[yellow]{view.message}[/]")
        if not view.skill_gaps:
            return

    table = Table(title=f"Skill gaps for {role.title}")
    table.add_column("Skill")
    table.add_column("Status")
    table.add_column("Progress", justify="right")
    for entry in view.skill_gaps:
        style = _STATUS_STYLE[GapStatus(entry["status"])]
        table.add_row(entry["skillName"], f"[{style}]{entry['status']}[/]", f"{entry['percentage']}%")
    console.print(table)
    summary = view.gap_summary
    console.print(
        f"{summary['total']} required skills, average {summary['mean_percentage']}% of target"
    )


@cli.command("config")
@click.pass_context
def show_config(ctx: click.Context):
    """Show the effective configuration (API key masked)."""
    data = ctx.obj["config"].model_dump(mode="json")
    if data["llm"].get("api_key"):
        data["llm"]["api_key"] = "***"
    console.print(yaml.safe_dump(data, sort_keys=False))


@cli.command()
@click.option("--host", default=None, help="Bind host")
@click.option("--port", default=None, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool):
    """Run the REST API with uvicorn."""
    import uvicorn

    web = ctx.obj["config"].web
    uvicorn.run(
        "web.app:app",
        host=host or web.host,
        port=port or web.port,
        reload=reload,
        log_config=None,
    )


def main():
    cli()


if __name__ == "__main__":
    main()
