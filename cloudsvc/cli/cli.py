# cloudsvc/cli/cli.py
"""
cloudsvc CLI - main application.

Commands:
    cloudsvc new                     Create a service project
    cloudsvc add-web-role            Add a web role
    cloudsvc add-worker-role         Add a worker role
    cloudsvc add-cache-worker-role   Add a cache-hosting worker role
    cloudsvc enable-memcache         Enable memcache on a web role
    cloudsvc roles                   List the project's roles

NOTE: Commands use lazy loading - implementations are imported only when a
command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from cloudsvc.config import load_config
from cloudsvc.logging.logger import configure_logging

app = typer.Typer(
    name="cloudsvc",
    help="Manage cloud service projects: roles, settings and role features.",
    no_args_is_help=True,
    add_completion=False,
)

PATH_OPTION_HELP = "Project folder."


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Manage cloud service projects."""
    ctx.obj = {"verbose": verbose}


def _setup_logging(ctx: typer.Context, project: Optional[Path]) -> None:
    """Apply --verbose, else the log level configured for the project (or the defaults)."""
    if (ctx.obj or {}).get("verbose"):
        configure_logging("DEBUG")
        return

    from cloudsvc.cli.errors import reported_errors

    with reported_errors():
        configure_logging(load_config(project).logging.level)


# =============================================================================
# LAZY COMMANDS
# =============================================================================


@app.command("new")
def new(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Service name (also the project folder name)."),
    path: Path = typer.Option(Path("."), "--path", "-p", help="Parent folder."),
) -> None:
    """Create a new service project."""
    from cloudsvc.cli.commands import new as mod

    _setup_logging(ctx, None)
    mod.command(name=name, path=path)


@app.command("add-web-role")
def add_web_role(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Role name."),
    instances: int = typer.Option(1, "--instances", "-i", min=1, help="Instance count."),
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """Add a web role."""
    from cloudsvc.cli.commands import add_role as mod
    from cloudsvc.scaffold import RoleTemplate

    _setup_logging(ctx, path)
    mod.command(template=RoleTemplate.WEB, name=name, instances=instances, path=path)


@app.command("add-worker-role")
def add_worker_role(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Role name."),
    instances: int = typer.Option(1, "--instances", "-i", min=1, help="Instance count."),
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """Add a worker role."""
    from cloudsvc.cli.commands import add_role as mod
    from cloudsvc.scaffold import RoleTemplate

    _setup_logging(ctx, path)
    mod.command(template=RoleTemplate.WORKER, name=name, instances=instances, path=path)


@app.command("add-cache-worker-role")
def add_cache_worker_role(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Role name."),
    instances: int = typer.Option(1, "--instances", "-i", min=1, help="Instance count."),
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """Add a cache-hosting worker role."""
    from cloudsvc.cli.commands import add_role as mod
    from cloudsvc.scaffold import RoleTemplate

    _setup_logging(ctx, path)
    mod.command(template=RoleTemplate.CACHE_WORKER, name=name, instances=instances, path=path)


@app.command("enable-memcache")
def enable_memcache(
    ctx: typer.Context,
    role_name: str = typer.Argument(..., help="Web role to enable memcache on."),
    cache_worker_role_name: str = typer.Argument(..., help="Cache worker role backing the cache."),
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """Enable memcache on a web role using a cache worker role."""
    from cloudsvc.cli.commands import enable as mod

    _setup_logging(ctx, path)
    mod.command(role_name=role_name, cache_worker_role_name=cache_worker_role_name, path=path)


@app.command("roles")
def roles(
    ctx: typer.Context,
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """List the project's roles."""
    from cloudsvc.cli.commands import roles as mod

    _setup_logging(ctx, path)
    mod.command(path=path)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
