"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from resume_ats.analysis.analyzer import Analyzer
from resume_ats.analysis.checks import DEFAULT_RUBRIC
from resume_ats.analysis.plan import truncate_plan
from resume_ats.clients.llm_client import LLMClient
from resume_ats.config import load_config
from resume_ats.models.analysis import AnalysisResult, CheckStatus, ResultStatus
from resume_ats.parsers.document_loader import load_document
from resume_ats.pipeline.ai_evaluator import AIResumeEvaluator
from resume_ats.pipeline.orchestrator import ScoringOrchestrator

app = typer.Typer(
    name="resume-ats",
    help="ATS compatibility scoring for structured resumes",
    no_args_is_help=True,
)
console = Console()

STATUS_STYLE = {
    CheckStatus.PASS: ("PASS", "green"),
    CheckStatus.WARNING: ("WARN", "yellow"),
    CheckStatus.FAIL: ("FAIL", "red"),
}
RESULT_COLOR = {
    ResultStatus.EXCELLENT: "green",
    ResultStatus.GOOD: "cyan",
    ResultStatus.NEEDS_IMPROVEMENT: "yellow",
    ResultStatus.POOR: "red",
    ResultStatus.INVALID_CONTENT: "red",
}
PRIORITY_TITLES = {1: "Critical", 2: "Important", 3: "Nice to have"}


@app.command()
def analyze(
    file: Path = typer.Argument(help="Resume document (.json, .yaml)"),
    ai: bool = typer.Option(False, "--ai", help="Try AI evaluation first, falling back to the rubric"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    top: int = typer.Option(None, "--top", help="Number of improvement actions to show"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Score a resume and show the improvement plan."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = load_config(config_path)
        document = load_document(file)
        analyzer = Analyzer.from_config(config)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    if verbose:
        console.print(f"[dim]Experience entries: {len(document.experience)}[/dim]")
        console.print(f"[dim]Skills: {document.skill_count}[/dim]")

    if ai or config.ai.enabled:
        llm = LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)
        evaluator = AIResumeEvaluator(llm, model=config.llm.model, max_tokens=config.llm.max_tokens)
        orchestrator = ScoringOrchestrator(analyzer, evaluator, timeout=config.ai.timeout)
        if as_json:
            result = asyncio.run(orchestrator.evaluate(document))
        else:
            with console.status("Evaluating resume..."):
                result = asyncio.run(orchestrator.evaluate(document))
        if verbose and not as_json:
            usage = llm.get_token_summary()
            console.print(
                f"[dim]Tokens: {usage['input']:,} in / {usage['output']:,} out"
                f" ({len(usage['calls'])} call(s))[/dim]"
            )
    else:
        result = analyzer.analyze(document)

    if as_json:
        console.print_json(result.model_dump_json())
        return

    _render_result(result, top if top is not None else config.analyzer.plan_display_limit)


def _render_result(result: AnalysisResult, top: int) -> None:
    color = RESULT_COLOR[result.status]
    label = result.status.value.replace("_", " ").title()
    source = "AI" if result.source == "ai" else "rubric"
    if result.is_fallback:
        source += " (fallback)"
    console.print(
        Panel(
            f"[bold {color}]{result.score}/100[/bold {color}]  {label}\n[dim]Scored by {source}[/dim]",
            title="ATS Score",
        )
    )

    for priority in (1, 2, 3):
        checks = result.checks_by_priority(priority)
        if not checks:
            continue
        table = Table(title=PRIORITY_TITLES[priority], title_justify="left", show_header=False)
        table.add_column("status", width=6)
        table.add_column("check")
        table.add_column("message")
        for check in checks:
            tag, style = STATUS_STYLE[check.status]
            table.add_row(f"[{style}]{tag}[/{style}]", check.label, escape(check.message))
        console.print(table)

    if result.missing_keywords:
        console.print(
            Panel(escape(", ".join(result.missing_keywords)), title="Missing keywords", border_style="blue")
        )

    plan = truncate_plan(result.improvement_plan, top)
    if plan:
        lines = [f"  \\[{a.impact.value}] {escape(a.action)}" for a in plan]
        hidden = len(result.improvement_plan) - len(plan)
        if hidden > 0:
            lines.append(f"  [dim]... {hidden} more[/dim]")
        console.print(Panel("\n".join(lines), title="Improvement plan", border_style="cyan"))

    if result.summary_suggestion:
        console.print(Panel(escape(result.summary_suggestion), title="Suggested summary", border_style="green"))

    for line in result.feedback:
        console.print(f"- {escape(line)}")


@app.command()
def rubric() -> None:
    """Show the checks, weights and priorities used for scoring."""
    table = Table(title="Scoring rubric")
    table.add_column("id")
    table.add_column("check")
    table.add_column("priority", justify="right")
    table.add_column("weight", justify="right")
    for descriptor in DEFAULT_RUBRIC:
        table.add_row(descriptor.id, descriptor.label, str(descriptor.priority), f"{descriptor.weight:g}")
    console.print(table)
    console.print(f"[dim]Total weight: {DEFAULT_RUBRIC.total_weight:g}[/dim]")


@app.command()
def verbs(
    theme: str = typer.Option(None, "--theme", "-t", help="Only show one theme"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """List recognised action verbs by theme."""
    try:
        patterns = Analyzer.from_config(load_config(config_path)).patterns
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    themes = patterns.action_verbs
    if theme is not None:
        if theme not in themes:
            console.print(f"[red]Unknown theme: {theme}. Choose from {', '.join(themes)}[/red]")
            raise typer.Exit(1)
        themes = {theme: themes[theme]}

    for name, words in themes.items():
        console.print(f"  [bold]{name}[/bold]: {', '.join(words)}")


if __name__ == "__main__":
    app()
