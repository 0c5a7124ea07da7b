"""Entry point for quell CLI."""

import json
import logging
from pathlib import Path

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from quell.core.config import Config, ConfigError, ConfigLoader
from quell.core.loader import DocumentError
from quell.core.plugin import NoPluginFoundError, PluginConflictError, PluginManager
from quell.core.reconciler import DirectiveReconciler, ReconcileResult
from quell.models.problem import SEVERITY_STYLES, Problem

click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True

SEVERITY_LABELS = {2: "error", 1: "warning", 0: "off"}

# Exit codes
EXIT_PROBLEMS = 1
EXIT_USAGE = 2


def _configure_logging(verbose: bool) -> None:
    """Route log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _get_plugin_manager() -> PluginManager:
    """Create and configure the plugin manager.

    Discovers plugins via entry points (including the built-in json plugin
    registered in pyproject.toml).

    Returns:
        Configured PluginManager instance.
    """
    manager = PluginManager()
    manager.discover()
    return manager


def _load_config(config_path: str | None) -> Config:
    """Load the explicit config file, or merge the discovered ones.

    Raises:
        ConfigError: If a config file is invalid.
    """
    loader = ConfigLoader()
    if config_path:
        return loader.load(Path(config_path))
    return loader.load_merged()


def _severity_label(severity: int | None) -> str:
    if severity is None:
        return "-"
    return SEVERITY_LABELS.get(severity, str(severity))


def _print_plugins(console: Console, manager: PluginManager) -> None:
    plugins = manager.list_plugins()
    if not plugins:
        console.print("[yellow]No plugins found.[/yellow]")
        return

    table = Table(title="Available Plugins")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Version", style="green")
    table.add_column("Description")

    for name in sorted(plugins):
        info = manager.get_plugin_info(name)
        if info:
            table.add_row(
                info["name"],
                info.get("version", "unknown"),
                info.get("description", ""),
            )

    console.print(table)


def _print_problem(console: Console, problem: Problem, style: str = "") -> None:
    """Print one problem as an aligned text row."""
    location = f"{problem.line}:{problem.column}"
    severity = _severity_label(problem.severity)
    row = f"  {location:>8s}  {severity:8s}  {problem.message or ''}"
    if problem.rule_id:
        row += f"  {problem.rule_id}"
    style = style or SEVERITY_STYLES.get(problem.severity, "")
    # markup=False so messages like "[foo]" are not read as rich tags
    console.print(row, style=style or None, markup=False)


def _output_text(
    console: Console,
    result: ReconcileResult,
    title: str,
    show_suppressed: bool,
) -> None:
    """Output surfaced problems as human-readable text.

    Args:
        console: Rich console for output.
        result: Reconciliation result to display.
        title: Heading printed above the problems (usually the file path).
        show_suppressed: Also list the problems hidden by directives.
    """
    stats = result.stats()

    if result.problems:
        console.print(title, style="underline", markup=False)
        for problem in result.problems:
            _print_problem(console, problem)
        console.print()

    if show_suppressed and result.suppressed:
        console.print("Suppressed:", style="dim")
        for problem in result.suppressed:
            _print_problem(console, problem, style="dim")
        console.print()

    errors = sum(1 for p in result.problems if p.is_error)
    warnings = sum(1 for p in result.problems if p.severity == 1)
    total = len(result.problems)

    summary = (
        f"{total} problem{'s' if total != 1 else ''} "
        f"({errors} error{'s' if errors != 1 else ''}, "
        f"{warnings} warning{'s' if warnings != 1 else ''}), "
        f"{stats.suppressed} suppressed"
    )
    if total:
        console.print(summary, style="red bold" if errors else "yellow", markup=False)
    else:
        console.print(summary, style="green", markup=False)


def _output_result(
    console: Console,
    result: ReconcileResult,
    output_format: str,
    title: str,
    show_suppressed: bool,
) -> None:
    """Output the reconciliation result in the requested format.

    Args:
        console: Rich console for output.
        result: Reconciliation result to output.
        output_format: Output format (text, json, count).
        title: Heading for text output.
        show_suppressed: Include suppressed problems in text/json output.
    """
    if output_format == "json":
        # JSONL format: one JSON object per line
        for problem in result.problems:
            print(json.dumps(problem.to_dict()))
        if show_suppressed:
            for problem in result.suppressed:
                print(json.dumps({**problem.to_dict(), "suppressed": True}))

    elif output_format == "count":
        stats = result.stats()
        console.print(
            f"total={stats.total_problems} reported={stats.reported} "
            f"suppressed={stats.suppressed} unused={stats.unused_directives}"
        )

    else:
        _output_text(console, result, title, show_suppressed)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("document", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--version", is_flag=True, help="Show version and exit.")
@click.option(
    "--list-plugins",
    is_flag=True,
    help="List all available input plugins and exit."
)
@click.option(
    "--plugin",
    type=str,
    help="Force a specific input plugin (bypasses auto-detection)."
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Use this config file instead of discovering quell.toml files."
)
@click.option(
    "--report-unused-directives/--no-report-unused-directives",
    "report_unused",
    default=None,
    help="Report disable directives that suppressed nothing. Default: from config (off)."
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "count"], case_sensitive=False),
    default=None,
    help="Output format: text (colored), json (JSONL), or count (summary). Default: from config (text)."
)
@click.option(
    "--show-suppressed",
    is_flag=True,
    help="Also display problems that were suppressed by directives."
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log debug information to stderr."
)
@click.pass_context
def cli(
    ctx: click.Context,
    document: str | None,
    version: bool,
    list_plugins: bool,
    plugin: str | None,
    config_path: str | None,
    report_unused: bool | None,
    output_format: str | None,
    show_suppressed: bool,
    verbose: bool,
) -> None:
    """quell - apply inline disable directives to lint problems.

    Reads a DOCUMENT holding the directives and problems of one linted file
    and prints the problems that are not suppressed.
    """
    _configure_logging(verbose)
    err_console = Console(stderr=True, soft_wrap=True)

    if version:
        from quell import __version__
        click.echo(f"quell {__version__}")
        return

    if list_plugins:
        _print_plugins(Console(), _get_plugin_manager())
        return

    if document is None:
        err_console.print("[red]Error:[/red] Missing argument 'DOCUMENT'.")
        ctx.exit(EXIT_USAGE)

    try:
        config = _load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(EXIT_USAGE)

    console = Console(no_color=not config.output.color)
    output_format = (output_format or config.output.format).lower()
    if report_unused is None:
        report_unused = config.directives.report_unused

    manager = _get_plugin_manager()
    path = Path(document)
    plugin_name = plugin or config.general.default_plugin

    if plugin_name:
        selected = manager.get_plugin(plugin_name)
        if selected is None:
            err_console.print(f"[red]Error:[/red] Plugin '{plugin_name}' not found.")
            err_console.print("\nAvailable plugins:")
            for name in manager.list_plugins():
                err_console.print(f"  - {name}")
            ctx.exit(EXIT_USAGE)
    else:
        try:
            selected = manager.get_plugin(manager.auto_detect(path))
        except NoPluginFoundError as e:
            err_console.print("[red]Error:[/red] No plugin can handle this file.")
            err_console.print(f"  {escape(str(e))}")
            err_console.print("\nUse --plugin to specify a plugin manually.")
            ctx.exit(EXIT_USAGE)
        except PluginConflictError as e:
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            ctx.exit(EXIT_USAGE)

    try:
        lint_document = selected.load_document(path)
    except DocumentError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(EXIT_USAGE)

    reconciler = DirectiveReconciler(report_unused_directives=report_unused)
    result = reconciler.reconcile(lint_document.directives, lint_document.problems)

    _output_result(console, result, output_format, str(path), show_suppressed)

    if any(problem.is_error for problem in result.problems):
        ctx.exit(EXIT_PROBLEMS)


if __name__ == "__main__":
    cli()
