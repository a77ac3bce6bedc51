"""CLI interface for n8n-deploy."""

import asyncio
import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator, NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typer.core import TyperGroup

from n8n_deploy.config import Settings, get_settings, require_api_key
from n8n_deploy.exceptions import ConfigError, N8nDeployError, RemoteError, UsageError
from n8n_deploy.logging import get_logger, log_failure, setup_logging


class DeployGroup(TyperGroup):
    """Command group that reports unknown commands with exit code 1."""

    def resolve_command(self, ctx: typer.Context, args: list[str]):
        if args and self.get_command(ctx, args[0]) is None:
            err_console.print(f"[red]Error: Unknown command: {escape(args[0])}[/red]")
            err_console.print(escape(ctx.get_usage()))
            err_console.print(f"Try '{ctx.command_path} help' for the list of commands.")
            raise typer.Exit(1)
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="n8n-deploy",
    help="Deploy and manage workflows on an n8n instance via its REST API.",
    cls=DeployGroup,
    invoke_without_command=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True, soft_wrap=True)
logger = get_logger("cli")


def _run_async(coro):
    """Run async coroutine in sync context."""
    return asyncio.run(coro)


def _describe(error: N8nDeployError) -> str:
    if isinstance(error, RemoteError) and error.status_code is not None:
        return f"HTTP error! status: {error.status_code}, message: {error.detail}"
    return str(error)


@contextmanager
def _error_boundary(operation: str, context: Optional[dict[str, Any]] = None) -> Iterator[None]:
    """Report any n8n-deploy error for ``operation`` and exit with status 1."""
    try:
        yield
    except N8nDeployError as e:
        log_failure(logger, operation, e, context, level=logging.DEBUG)
        err_console.print(f"[red]Error {operation}: {escape(_describe(e))}[/red]")
        raise typer.Exit(1)


def _load_settings() -> Settings:
    """Read settings, turning invalid environment values into a ConfigError."""
    try:
        return get_settings()
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]).upper() for err in e.errors() if err["loc"]})
        raise ConfigError(f"Invalid configuration for {', '.join(fields) or 'settings'}") from e


def _config_failure(error: ConfigError, settings: Optional[Settings] = None) -> NoReturn:
    """Report a configuration problem and exit with status 1."""
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    if settings is not None:
        err_console.print(f"   Get your API key from: {settings.api_key_hint}")
        err_console.print('   Then run: export N8N_API_KEY="your-key-here"')
    raise typer.Exit(1)


def _write_output(path: str, workflows: list) -> None:
    try:
        with open(path, "w") as f:
            json.dump([w.to_dict() for w in workflows], f, indent=2)
    except OSError as e:
        raise N8nDeployError(f"Could not write {path}: {e.strerror or e}") from e


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj


def _client(settings: Settings):
    from n8n_deploy.client import WorkflowClient

    return WorkflowClient.from_settings(settings)


def _deploy(settings: Settings, file: Optional[str]) -> None:
    from n8n_deploy.documents import load_document

    path = file or settings.n8n_default_workflow

    with _error_boundary("loading workflow", {"path": path}):
        document = load_document(path, settings.n8n_workflow_base_dir)

    name = document.get("name", "<unnamed>")
    console.print(f"[bold blue]Deploying workflow \"{escape(str(name))}\" to n8n...[/bold blue]")

    with _error_boundary("deploying workflow", {"path": path}):
        summary = _run_async(_client(settings).deploy(document))

    console.print("[bold green]Workflow deployed successfully![/bold green]")
    console.print(f"   Workflow ID:   {summary.id}")
    console.print(f"   Workflow Name: {escape(summary.name)}")
    console.print(f"   Workflow URL:  {summary.url_for(settings.n8n_api_url)}")


def _toggle(settings: Settings, workflow_id: Optional[str], active: bool) -> None:
    action = "activate" if active else "deactivate"
    verb = "Activating" if active else "Deactivating"
    operation = f"{verb.lower()} workflow"

    with _error_boundary(operation, {"workflow_id": workflow_id}):
        if not workflow_id:
            raise UsageError(f"Workflow ID required for {action} command")

        console.print(f"[bold blue]{verb} workflow {workflow_id}...[/bold blue]")
        _run_async(_client(settings).set_active_state(workflow_id, active))

    console.print(f"[bold green]Workflow {workflow_id} {action}d successfully![/bold green]")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Deploy and manage workflows on an n8n instance.

    Running without a command deploys the default workflow document.
    Requires N8N_API_KEY; N8N_API_URL selects the instance.
    """
    try:
        settings = _load_settings()
    except ConfigError as e:
        _config_failure(e)

    setup_logging(level=logging.DEBUG if verbose else settings.n8n_log_level)

    try:
        require_api_key(settings)
    except ConfigError as e:
        _config_failure(e, settings)

    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        _deploy(settings, None)


@app.command()
def deploy(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(
        None, help="Workflow JSON file (default: N8N_DEFAULT_WORKFLOW)"
    ),
):
    """
    Deploy a workflow document as a new workflow.

    Relative paths resolve against N8N_WORKFLOW_BASE_DIR. Deploying the
    same file twice creates two workflows.
    """
    _deploy(_settings(ctx), file)


@app.command("list")
def list_workflows(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Also write the workflows to a JSON file"
    ),
):
    """List all existing workflows."""
    settings = _settings(ctx)

    console.print("[bold blue]Fetching workflows from n8n...[/bold blue]")

    with _error_boundary("listing workflows"):
        workflows = _run_async(_client(settings).list_workflows())

    if not workflows:
        console.print("[yellow]No workflows found in your n8n instance[/yellow]")
    else:
        table = Table(title=f"Existing workflows ({len(workflows)})")
        table.add_column("Name", style="cyan")
        table.add_column("ID", style="magenta")
        table.add_column("Active", justify="center")
        table.add_column("URL", style="dim")

        for workflow in workflows:
            table.add_row(
                escape(workflow.name),
                workflow.id,
                "[green]yes[/green]" if workflow.active else "[red]no[/red]",
                workflow.url_for(settings.n8n_api_url),
            )

        console.print(table)

    if output:
        with _error_boundary("saving workflows", {"output": output}):
            _write_output(output, workflows)
        console.print(f"\n[dim]Workflows saved to {output}[/dim]")


@app.command()
def activate(
    ctx: typer.Context,
    workflow_id: Optional[str] = typer.Argument(None, help="ID of the workflow to activate"),
):
    """Activate a workflow by ID."""
    _toggle(_settings(ctx), workflow_id, True)


@app.command()
def deactivate(
    ctx: typer.Context,
    workflow_id: Optional[str] = typer.Argument(None, help="ID of the workflow to deactivate"),
):
    """Deactivate a workflow by ID."""
    _toggle(_settings(ctx), workflow_id, False)


@app.command("help")
def show_help(ctx: typer.Context):
    """Show this help message."""
    typer.echo(ctx.parent.get_help())


@app.command()
def version():
    """Show version information."""
    from n8n_deploy import __version__

    console.print(f"n8n-deploy v{__version__}")


if __name__ == "__main__":
    app()
