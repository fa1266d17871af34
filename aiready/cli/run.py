"""CLI commands."""
from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel

from aiready.classify.content_type import detect_content_type
from aiready.config.settings import settings
from aiready.geo.visibility import VisibilityRates, compute_ai_visibility_score
from aiready.platforms.readiness import evaluate_platform_readiness
from aiready.progress.delta import progress_from_history
from aiready.progress.service import snapshot_from_rows
from aiready.report.formatter import (
    OutputFormat,
    format_json,
    format_platforms,
    format_progress,
    format_quick_wins,
    format_report,
    format_visibility,
)
from aiready.scoring.quick_wins import get_quick_wins
from aiready.scoring.scorer import UngradedPage, score_page_data

app = typer.Typer(
    add_completion=False,
    help="aiready - Score pages for AI-readiness from extracted signals",
)
console = Console()


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot read {path}: {e}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {path} is not valid JSON: {e}")
        raise typer.Exit(1)


def _load_list(path: Path, what: str) -> list:
    data = _load_json(path)
    if not isinstance(data, list):
        console.print(f"[red]Error:[/red] {path} must contain a JSON list of {what}")
        raise typer.Exit(1)
    return data


def _emit(report: str, output: str, save: str | None) -> None:
    if save:
        save_path = Path(save)
        save_path.write_text(report, encoding="utf-8")
        console.print(f"\n[green]Report saved to:[/green] {save_path}")
    elif output == "cli":
        console.print(report)
    else:
        console.print(report, markup=False, soft_wrap=True)


def _check_output(output: str) -> OutputFormat:
    if output not in ("cli", "json", "markdown"):
        console.print(f"[red]Error:[/red] Invalid output format '{output}'. Use cli, json, or markdown.")
        raise typer.Exit(1)
    return output  # type: ignore


@app.command()
def score(
    signals_file: Path = typer.Argument(..., help="JSON file with one page's signals"),
    output: str = typer.Option(
        "cli",
        "--output",
        "-o",
        help="Output format: cli, json, markdown",
    ),
    save: str | None = typer.Option(
        None,
        "--save",
        "-s",
        help="Save report to file",
    ),
    page_id: str | None = typer.Option(None, "--page-id", help="Identifier carried into the result"),
) -> None:
    """Score a page from its extracted signals.

    Exits 1 when the signals are malformed or the page grades D or F.

    Examples:
        aiready score page.json
        aiready score page.json -o json
        aiready score page.json -o markdown -s report.md
    """
    output_format = _check_output(output)
    data = _load_json(signals_file)

    if output_format == "cli":
        console.print(Panel.fit(
            f"[bold cyan]aiready[/bold cyan]\n[dim]Scoring:[/dim] {signals_file}",
            border_style="cyan",
        ))

    result = score_page_data(data, page_id=page_id)
    _emit(format_report(result.to_dict(), output_format), output_format, save)

    if isinstance(result, UngradedPage):
        raise typer.Exit(1)
    if result.letter_grade in ("D", "F"):
        raise typer.Exit(1)


@app.command()
def classify(
    url: str = typer.Argument(..., help="Page URL"),
    schema_type: list[str] = typer.Option(
        [],
        "--schema-type",
        "-t",
        help="schema.org @type found on the page (repeatable)",
    ),
) -> None:
    """Classify a page's content type from its URL and schema types.

    Example:
        aiready classify https://example.com/blog/post -t BlogPosting
    """
    result = detect_content_type(url, schema_type)
    console.print(
        f"[bold]{result.type.value}[/bold] (confidence {result.confidence:.2f}) - {url}"
    )
    for signal in result.signals:
        console.print(f"  [dim]{signal}[/dim]")


@app.command("quick-wins")
def quick_wins(
    issues_file: Path = typer.Argument(..., help="JSON list of crawl issues"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum wins to show"),
    output: str = typer.Option("cli", "--output", "-o", help="Output format: cli, json"),
) -> None:
    """Rank a crawl's issues by the score a fix would recover."""
    issues = _load_list(issues_file, "issues")
    wins = get_quick_wins(issues, limit=limit if limit is not None else settings.api.quick_win_limit)
    rows = [w.to_dict() for w in wins]
    if output == "json":
        console.print(format_json(rows), markup=False, soft_wrap=True)
    else:
        console.print(format_quick_wins(rows))


@app.command()
def platforms(
    issues_file: Path = typer.Argument(..., help="JSON list of crawl issues"),
    output: str = typer.Option("cli", "--output", "-o", help="Output format: cli, json"),
) -> None:
    """Show per-assistant readiness for a crawl's issues."""
    issues = _load_list(issues_file, "issues")
    rows = [p.to_dict() for p in evaluate_platform_readiness(issues)]
    if output == "json":
        console.print(format_json(rows), markup=False, soft_wrap=True)
    else:
        console.print(format_platforms(rows))


@app.command()
def visibility(
    llm_mentions: float = typer.Option(0.0, "--llm-mentions", help="LLM mention rate (0-1)"),
    ai_search: float = typer.Option(0.0, "--ai-search", help="AI search presence rate (0-1)"),
    share_of_voice: float = typer.Option(0.0, "--share-of-voice", help="Share of voice (0-1)"),
    backlinks: float = typer.Option(0.0, "--backlinks", help="Backlink authority signal (0-1)"),
    output: str = typer.Option("cli", "--output", "-o", help="Output format: cli, json"),
) -> None:
    """Compute the AI visibility score from normalized rates."""
    result = compute_ai_visibility_score(VisibilityRates(
        llm_mention_rate=llm_mentions,
        ai_search_presence_rate=ai_search,
        share_of_voice=share_of_voice,
        backlink_authority_signal=backlinks,
    ))
    if output == "json":
        console.print(format_json(result.to_dict()), markup=False, soft_wrap=True)
    else:
        console.print(format_visibility(result.to_dict()))


def _parse_created_at(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    # naive timestamps are taken as UTC so they sort with aware ones
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


@app.command()
def progress(
    history_file: Path = typer.Argument(
        ..., help="JSON list of crawls, each with id, status, created_at, pages, scores, issues"
    ),
    output: str = typer.Option("cli", "--output", "-o", help="Output format: cli, json"),
) -> None:
    """Compare the two newest completed crawls of a project."""
    crawls = _load_list(history_file, "crawls")
    snapshots = []
    for crawl in crawls:
        if not isinstance(crawl, dict):
            console.print("[red]Error:[/red] Each crawl must be a JSON object")
            raise typer.Exit(1)
        header = {**crawl, "created_at": _parse_created_at(crawl.get("created_at"))}
        snapshots.append(snapshot_from_rows(
            header,
            crawl.get("pages", []),
            crawl.get("scores", []),
            crawl.get("issues", []),
        ))

    delta = progress_from_history(snapshots)
    payload = delta.to_dict() if delta else None
    if output == "json":
        console.print(format_json({"progress": payload}), markup=False, soft_wrap=True)
    else:
        console.print(format_progress(payload))


@app.command()
def version() -> None:
    """Show version information."""
    console.print("[bold]aiready[/bold] v0.1.0")
    console.print("[dim]AI-readiness scoring and insight engine[/dim]")


if __name__ == "__main__":
    app()
