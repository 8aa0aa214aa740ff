"""Command line interface for Git ECA."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import CONFIG_PATH_ENV, ConfigManager
from .models import ValidationRequest, ValidationResponse
from .validation import build_validation_engine

console = Console()


def _load_request(request_file: Path, strict: bool) -> ValidationRequest:
    try:
        data = json.loads(request_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(
            f"Could not read request file {request_file}: {e}"
        ) from e

    try:
        request = ValidationRequest.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid validation request: {e}") from e

    if strict:
        request.strict_mode = True
    return request


def _display_outcome(outcome: ValidationResponse) -> None:
    """Render the per-commit outcome as a table."""
    table = Table(title="Commit validation", show_lines=True)
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Code", justify="right")
    table.add_column("Message")

    styles = {"message": "white", "warning": "yellow", "error": "bold red"}
    for commit_hash, commit_status in outcome.commits.items():
        rows = (
            [("message", m) for m in commit_status.messages]
            + [("warning", m) for m in commit_status.warnings]
            + [("error", m) for m in commit_status.errors]
        )
        for kind, entry in rows:
            table.add_row(
                commit_hash[:12],
                f"[{styles[kind]}]{kind}[/{styles[kind]}]",
                str(entry.code),
                entry.message,
            )

    console.print(table)
    summary = (
        f"tracked project: {outcome.tracked_project}, "
        f"strict mode: {outcome.strict_mode}, errors: {outcome.error_count}"
    )
    if outcome.passed:
        console.print(f"✅ Validation passed ({summary})", style="green")
    else:
        console.print(f"❌ Validation failed ({summary})", style="red")


@click.group()
@click.option("--config", "-c", type=click.Path(exists=False), help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(version=__version__, prog_name="git-eca")
@click.pass_context
def cli(ctx, config: Optional[str], verbose: bool):
    """Validate Git commits against the Eclipse Contributor Agreement.

    \b
    EXAMPLES:
      git-eca validate request.json           # Validate a request file
      git-eca validate request.json --strict  # Treat warnings as errors
      git-eca serve --port 8080               # Run the HTTP service
      git-eca init-config                     # Write a default config file
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_manager"] = ConfigManager(Path(config) if config else None)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


@cli.command()
@click.argument("request_file", type=click.Path(exists=True, path_type=Path))
@click.option("--strict", is_flag=True, help="Enforce errors on untracked projects")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON outcome")
@click.pass_context
def validate(ctx, request_file: Path, strict: bool, as_json: bool):
    """Validate the commits described in REQUEST_FILE.

    Exits with status 1 when validation fails.
    """
    config_manager: ConfigManager = ctx.obj["config_manager"]
    try:
        config = config_manager.get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    request = _load_request(request_file, strict)
    engine = build_validation_engine(config)
    outcome = engine.validate(request)

    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
    else:
        _display_outcome(outcome)

    if not outcome.passed:
        sys.exit(1)


@cli.command()
@click.option("--host", type=str, help="Host to bind server to")
@click.option("--port", type=int, help="Port to run server on")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx, host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP validation service."""
    import uvicorn

    config_manager: ConfigManager = ctx.obj["config_manager"]
    config = config_manager.get_config()
    os.environ[CONFIG_PATH_ENV] = str(config_manager.config_path)

    host = host or config.server.host
    port = port or config.server.port
    console.print(f"Starting Git ECA Server on {host}:{port}", style="cyan")
    uvicorn.run(
        "git_eca.server.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@cli.command("init-config")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init_config(ctx, force: bool):
    """Write the default configuration file."""
    config_manager: ConfigManager = ctx.obj["config_manager"]
    if config_manager.config_path.exists() and not force:
        raise click.ClickException(
            f"Config already exists at {config_manager.config_path} (use --force)"
        )
    config_manager.create_default_config()
    console.print(f"✅ Config written to {config_manager.config_path}", style="green")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
