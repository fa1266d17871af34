"""Report formatting utilities."""
from __future__ import annotations

import json
from typing import Literal

from aiready.scoring.grades import determine_grade

OutputFormat = Literal["cli", "json", "markdown"]

GRADE_COLORS = {"A": "green", "B": "blue", "C": "yellow", "D": "red", "F": "red bold"}

CATEGORY_LABELS = [
    ("technical_score", "Technical"),
    ("content_score", "Content"),
    ("ai_readiness_score", "AI Readiness"),
    ("performance_score", "Performance"),
]

STATUS_MARKERS = {
    "pass": "[green]✓[/green]",
    "critical_fail": "[red]✗[/red]",
    "needs_attention": "[yellow]![/yellow]",
}


def format_report(results: dict, output: OutputFormat = "cli") -> str:
    """Format a page score for output.

    Args:
        results: ``PageScore.to_dict()`` or ``UngradedPage.to_dict()``
        output: Output format - 'cli', 'json', or 'markdown'

    Returns:
        Formatted string representation of results
    """
    if output == "json":
        return format_json(results)
    elif output == "markdown":
        return _format_markdown(results)
    else:
        return _format_cli(results)


def format_json(payload) -> str:
    """Format any JSON-serializable payload."""
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _bar(percentage: float, width: int = 20) -> str:
    filled = int(width * max(0, min(100, percentage)) / 100)
    bar = "█" * filled + "░" * (width - filled)
    if percentage >= 75:
        color = "green"
    elif percentage >= 50:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{bar}[/{color}]"


def _issues_by_severity(results: dict) -> dict[str, list[dict]]:
    grouped: dict[str, list[dict]] = {"critical": [], "warning": [], "info": []}
    for issue in results.get("issues", []):
        grouped.setdefault(issue.get("severity", "info"), []).append(issue)
    return grouped


def _format_cli(results: dict) -> str:
    """Format results for terminal display with Rich-compatible markup."""
    lines = []
    url = results.get("url") or "Unknown page"

    lines.append("[bold cyan]AI Readiness Report[/bold cyan]")
    lines.append(f"[dim]Page:[/dim] {url}")
    lines.append("")

    if results.get("status") == "ungraded":
        lines.append("[bold red]Page could not be graded:[/bold red]")
        for error in results.get("errors", []):
            lines.append(f"  [red]✗[/red] {error}")
        return "\n".join(lines)

    total = results.get("overall_score", 0)
    grade, label = determine_grade(total)
    color = GRADE_COLORS.get(grade, "white")
    lines.append(
        f"[bold]Overall Score:[/bold] [{color}]{total}/100 ({grade} - {label})[/{color}]"
    )
    lines.append(f"[dim]Content type:[/dim] {results.get('content_type', 'unknown')}")
    lines.append("")

    lines.append("[bold]Score Breakdown:[/bold]")
    for key, label in CATEGORY_LABELS:
        score = results.get(key, 0)
        lines.append(f"  {label:15} {_bar(score)} {score}/100")
    lines.append("")

    caps = results.get("caps_applied", [])
    if caps:
        lines.append("[bold]Caps Applied:[/bold]")
        for cap in caps:
            lines.append(f"  [red]↓[/red] {cap}")
        lines.append("")

    grouped = _issues_by_severity(results)
    if grouped["critical"]:
        lines.append("[bold red]Critical Issues:[/bold red]")
        for issue in grouped["critical"]:
            lines.append(f"  [red]✗[/red] {issue['message']} [dim]({issue['code']})[/dim]")
        lines.append("")

    if grouped["warning"]:
        lines.append("[bold yellow]Warnings:[/bold yellow]")
        for issue in grouped["warning"]:
            lines.append(f"  [yellow]![/yellow] {issue['message']} [dim]({issue['code']})[/dim]")
        lines.append("")

    if grouped["info"]:
        lines.append("[bold blue]Suggestions:[/bold blue]")
        for issue in grouped["info"]:
            lines.append(f"  [blue]i[/blue] {issue['message']} [dim]({issue['code']})[/dim]")
        lines.append("")

    if not results.get("issues"):
        lines.append("[green]✓ No issues detected[/green]")

    return "\n".join(lines).rstrip()


def _format_markdown(results: dict) -> str:
    """Format results as Markdown."""
    lines = []
    url = results.get("url") or ""
    lines.append("# AI Readiness Report")
    lines.append("")
    if url:
        lines.append(f"**URL:** {url}")
        lines.append("")

    if results.get("status") == "ungraded":
        lines.append("## Ungraded")
        lines.append("")
        for error in results.get("errors", []):
            lines.append(f"- ❌ {error}")
        return "\n".join(lines)

    total = results.get("overall_score", 0)
    grade, label = determine_grade(total)
    lines.append("## Overall Score")
    lines.append("")
    lines.append(f"**{total}/100** ({grade} - {label})")
    lines.append("")
    lines.append(f"Content type: **{results.get('content_type', 'unknown')}**")
    lines.append("")

    lines.append("### Score Breakdown")
    lines.append("")
    lines.append("| Category | Score |")
    lines.append("|----------|-------|")
    for key, label in CATEGORY_LABELS:
        lines.append(f"| {label} | {results.get(key, 0)} |")
    lines.append("")

    caps = results.get("caps_applied", [])
    if caps:
        lines.append("### Caps Applied")
        lines.append("")
        for cap in caps:
            lines.append(f"- `{cap}`")
        lines.append("")

    issues = results.get("issues", [])
    if issues:
        lines.append("## Issues")
        lines.append("")
        lines.append("| Severity | Code | Issue | Impact |")
        lines.append("|----------|------|-------|--------|")
        for issue in issues:
            emoji = {"critical": "❌", "warning": "⚠️"}.get(issue.get("severity"), "ℹ️")
            lines.append(
                f"| {emoji} {issue['severity']} | `{issue['code']}` | {issue['message']} | {issue['score_impact']} |"
            )
        lines.append("")

        lines.append("## Recommended Fixes")
        lines.append("")
        for i, issue in enumerate(issues, 1):
            lines.append(f"{i}. **{issue['code']}**: {issue['recommendation']}")

    return "\n".join(lines).rstrip()


def format_quick_wins(wins: list[dict]) -> str:
    """Rich markup listing of quick wins (``QuickWin.to_dict()`` rows)."""
    if not wins:
        return "[green]✓ No quick wins: nothing fixable was found[/green]"
    lines = ["[bold]Quick Wins:[/bold]"]
    effort_colors = {"low": "green", "medium": "yellow", "high": "red"}
    for i, win in enumerate(wins, 1):
        effort = win["effort_level"]
        color = effort_colors.get(effort, "white")
        pages = win["affected_pages"]
        lines.append(
            f"  {i}. [bold]{win['code']}[/bold] {win['message']} "
            f"(impact {win['score_impact']}, [{color}]{effort} effort[/{color}], "
            f"{pages} page{'s' if pages != 1 else ''})"
        )
        lines.append(f"     [dim]{win['recommendation']}[/dim]")
    return "\n".join(lines)


def format_platforms(platforms: list[dict]) -> str:
    """Rich markup listing of per-platform readiness."""
    lines = []
    for platform in platforms:
        rate = platform["pass_rate"]
        lines.append(f"[bold]{platform['platform']:12}[/bold] {_bar(rate)} {rate}%")
        for check in platform["checks"]:
            marker = STATUS_MARKERS.get(check["status"], "?")
            lines.append(f"    {marker} {check['label']} [dim]({check['importance']})[/dim]")
        lines.append("")
    return "\n".join(lines).rstrip()


def format_visibility(score: dict) -> str:
    grade = score["grade"]
    color = GRADE_COLORS.get(grade, "white")
    lines = [f"[bold]AI Visibility:[/bold] [{color}]{score['overall']}/100 ({grade})[/{color}]"]
    for name, points in score["breakdown"].items():
        lines.append(f"  {name.replace('_', ' ').title():20} {points}")
    return "\n".join(lines)


def _signed(value: float) -> str:
    return f"+{value}" if value > 0 else str(value)


def format_progress(progress: dict | None) -> str:
    """Rich markup summary of a ``ProgressDelta.to_dict()``."""
    if progress is None:
        return "[yellow]Not enough completed crawls to compute progress[/yellow]"

    delta = progress["score_delta"]
    color = "green" if delta > 0 else "red" if delta < 0 else "white"
    lines = [
        f"[bold]Progress:[/bold] {progress['previous_score']} → {progress['current_score']} "
        f"[{color}]({_signed(delta)})[/{color}]",
        "",
        "[bold]Category Deltas:[/bold]",
    ]
    for category, value in progress["category_deltas"].items():
        lines.append(f"  {category.replace('_', ' ').title():15} {_signed(value)}")
    lines.append("")
    lines.append(
        f"[bold]Issues:[/bold] [green]{progress['issues_fixed']} fixed[/green], "
        f"[red]{progress['issues_new']} new[/red], {progress['issues_persisting']} persisting"
    )

    if progress["top_improved_pages"]:
        lines.append("")
        lines.append("[bold green]Top Improved:[/bold green]")
        for page in progress["top_improved_pages"]:
            lines.append(f"  [green]↑[/green] {page['url']} ({_signed(page['delta'])})")
    if progress["top_regressed_pages"]:
        lines.append("")
        lines.append("[bold red]Top Regressed:[/bold red]")
        for page in progress["top_regressed_pages"]:
            lines.append(f"  [red]↓[/red] {page['url']} ({_signed(page['delta'])})")
    return "\n".join(lines)
