"""codeguide CLI: entry point for the code explainer."""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from codeguide import __app_name__, __version__
from codeguide.ai.explainer import ExplanationRequester
from codeguide.config import DEFAULT_MODEL, DEFAULT_ROOT_ENV_VAR
from codeguide.core.credentials import CredentialResolver
from codeguide.core.pipeline import run_explain
from codeguide.log import configure_logging
from codeguide.models import PROJECT, NoSelection, Outcome, Success
from codeguide.render import render_html
from codeguide.utils import STDIN_MARKER, find_project_root, read_selection

# ---------------------------------------------------------------------------
# App & Console
# ---------------------------------------------------------------------------

app = typer.Typer(
    name=__app_name__,
    help="💡 codeguide: explain selected source code with Gemini.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

# ---------------------------------------------------------------------------
# Version callback
# ---------------------------------------------------------------------------


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]{__app_name__}[/bold cyan] v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------


@app.callback()
def main(
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-v",
        help="Show the application version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """codeguide: get a plain-language explanation of a code selection."""


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------


def _project_root_option() -> Optional[Path]:  # noqa: UP007
    return typer.Option(
        None,
        "--project-root",
        help="Project whose .codeguide/settings.json is checked for the API key.",
        file_okay=False,
    )


def _default_root_option() -> Optional[Path]:  # noqa: UP007
    return typer.Option(
        None,
        "--default-root",
        envvar=DEFAULT_ROOT_ENV_VAR,
        help="Fallback directory used when no project root is known.",
        file_okay=False,
    )


def _build_resolver(
    project_root: Optional[Path],  # noqa: UP007
    default_root: Optional[Path],  # noqa: UP007
    start: Path,
) -> CredentialResolver:
    """Create a resolver, discovering the project root from *start* if needed."""
    root = project_root if project_root is not None else find_project_root(start)
    return CredentialResolver(root, default_root=default_root)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def explain(
    path: str = typer.Argument(
        ...,
        help="File containing the code to explain, or '-' to read stdin.",
    ),
    lines: Optional[str] = typer.Option(  # noqa: UP007
        None,
        "--lines",
        "-l",
        help="1-based inclusive line range to select, e.g. 10:24, 10: or :24.",
    ),
    project_root: Optional[Path] = _project_root_option(),  # noqa: UP007
    default_root: Optional[Path] = _default_root_option(),  # noqa: UP007
    model: str = typer.Option(
        DEFAULT_MODEL,
        "--model",
        help="Gemini model id.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output the result as JSON instead of a Rich panel.",
    ),
    html_out: Optional[Path] = typer.Option(  # noqa: UP007
        None,
        "--html",
        help="Also write the explanation as a standalone HTML page.",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug diagnostics on stderr.",
    ),
) -> None:
    """Explain a selection of source code."""

    configure_logging(verbose=verbose)

    # --- Read selection ---
    try:
        selection = read_selection(path, line_range=lines)
    except (FileNotFoundError, IsADirectoryError) as exc:
        console.print(f"[bold red]✗[/bold red] {exc}")
        raise typer.Exit(code=1)
    except ValueError as exc:
        console.print(f"[bold red]✗[/bold red] Invalid --lines value: {exc}")
        raise typer.Exit(code=1)

    start = Path.cwd() if path == STDIN_MARKER else Path(selection.origin)
    resolver = _build_resolver(project_root, default_root, start)
    requester = ExplanationRequester(model=model)

    if not output_json and not selection.is_blank():
        console.print(f"[dim]Source:[/dim] {selection.origin}")
        console.print(f"[bold]🤖 Generating explanation using {model}…[/bold]\n")

    outcome = run_explain(selection, resolver, requester)

    # --- Output ---
    if output_json:
        _print_json(outcome)
    else:
        _print_rich(outcome)

    if isinstance(outcome, Success):
        if html_out is not None:
            _write_html(outcome, html_out, quiet=output_json)
        return

    raise typer.Exit(code=1)


@app.command()
def key(
    project_root: Optional[Path] = _project_root_option(),  # noqa: UP007
    default_root: Optional[Path] = _default_root_option(),  # noqa: UP007
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug diagnostics on stderr.",
    ),
) -> None:
    """Show which configuration source supplies the API key."""

    configure_logging(verbose=verbose)

    resolver = _build_resolver(project_root, default_root, Path.cwd())
    credential = resolver.resolve()

    if credential is None:
        console.print(
            "[bold red]✗[/bold red] No Gemini API key found in "
            ".codeguide/settings.json or the user settings."
        )
        raise typer.Exit(code=1)

    base = resolver.base_directory()
    where = f"{credential.source} settings"
    if credential.source == PROJECT and base is not None:
        where = f"project settings ({base})"
    console.print(
        f"[bold green]✔[/bold green] API key [bold]{credential.masked()}[/bold] "
        f"from {where}"
    )


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _print_json(outcome: Outcome) -> None:
    """Print the outcome as structured JSON."""
    print(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))


def _print_rich(outcome: Outcome) -> None:
    """Render the outcome as a Rich panel or a coloured message."""
    if isinstance(outcome, Success):
        console.print(
            Panel(
                Text(outcome.text),
                title="💡 Code Explanation",
                border_style="yellow" if outcome.is_sentinel() else "cyan",
            )
        )
    elif isinstance(outcome, NoSelection):
        console.print(f"[bold yellow]⚠[/bold yellow] {outcome.message}")
    else:
        # Plain Text: API error bodies are shown verbatim.
        console.print(Text.assemble(("✗ ", "bold red"), outcome.message))


def _write_html(outcome: Success, destination: Path, *, quiet: bool) -> None:
    """Write the explanation page to *destination*."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render_html(outcome.text), encoding="utf-8")
    if not quiet:
        console.print(f"[dim]HTML written to[/dim] {os.fspath(destination)}")
