"""Main CLI entry point for the nbscore command."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..bulk import BulkExporter, BulkImporter
from ..core.classifier import Classification
from ..core.config import ScoringConfigManager
from ..core.models import LeadRecord
from ..core.nb_score import NBScoreBand, get_nb_score_band
from ..core.scorer import LeadScorer, ScoringResult
from ..core.summary import determine_next_action, generate_recommendations, generate_summary
from ..core.verification import VerificationOutcome, apply_verification, outcome_from_status

console = Console()

CLASSIFICATION_COLORS = {
    Classification.HOT: "red",
    Classification.WARM_QUALIFIED: "yellow",
    Classification.WARM_ENGAGED: "yellow",
    Classification.NURTURE: "blue",
    Classification.COLD: "dim",
    Classification.DISQUALIFIED: "dim red",
    Classification.SPAM: "magenta",
}

BAND_COLORS = {NBScoreBand.HOT: "green", NBScoreBand.WARM: "yellow", NBScoreBand.COLD: "red"}


def get_manager(config_path: Optional[str] = None) -> ScoringConfigManager:
    """Get config manager instance."""
    return ScoringConfigManager(Path(config_path) if config_path else None)


def get_scorer(config_path: Optional[str] = None) -> LeadScorer:
    return LeadScorer(get_manager(config_path).config)


def parse_as_of(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Expected an ISO date such as 2026-01-31, got {value!r}", param_hint="--as-of")


def load_lead_file(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not read lead file {path}: {e}")
    # Accept either a bare lead or the API request body
    if isinstance(data, dict) and isinstance(data.get("lead"), dict):
        return data["lead"]
    return data


def _styled_classification(classification: Classification) -> str:
    style = CLASSIFICATION_COLORS[classification]
    return f"[{style}]{classification.value}[/{style}]"


def _result_panel(lead: LeadRecord, result: ScoringResult, scorer: LeadScorer) -> Panel:
    band = get_nb_score_band(result.nb_score, scorer.config.nb_score)
    band_style = BAND_COLORS[band]
    lines = [
        f"[bold]NB Score:[/bold] [{band_style}]{result.nb_score}[/{band_style}] ({band.value})",
        f"[bold]Classification:[/bold] {_styled_classification(result.classification)}",
        f"[bold]Priority:[/bold] {result.priority.priority.value} ({result.priority.response_time}) - "
        f"{result.priority.description}",
        f"[bold]Call:[/bold] level {result.call_priority.level} - {result.call_priority.response_time}",
        "",
        f"[bold]Quality:[/bold] {result.quality_score.total}/100",
        f"[bold]Intent:[/bold] {result.intent_score.total}/100",
        f"[bold]Confidence:[/bold] {result.confidence_score.total}/10",
        "",
        f"[bold]28-day buyer:[/bold] {'yes' if result.is_28_day_buyer else 'no'}",
        f"[bold]Low urgency:[/bold] {'yes' if result.low_urgency_flag else 'no'}",
    ]

    if result.fake_lead_flags:
        lines.extend(["", "[bold magenta]Spam Flags:[/bold magenta]"])
        lines.extend(f"  • {flag}" for flag in result.fake_lead_flags)
    if result.risk_flags:
        lines.extend(["", "[bold]Risk Flags:[/bold]"])
        lines.extend(f"  • {flag}" for flag in result.risk_flags)

    lines.extend([
        "",
        f"[bold]Summary:[/bold] {generate_summary(lead, result, scorer.config.risk)}",
        f"[bold]Next action:[/bold] [cyan]{determine_next_action(lead, result)}[/cyan]",
    ])
    recommendations = generate_recommendations(lead, result, scorer.config.risk)
    if recommendations:
        lines.extend(["", "[bold]Recommendations:[/bold]"])
        lines.extend(f"  {i}. {rec}" for i, rec in enumerate(recommendations, 1))

    title = f"Lead {lead.id}: {lead.name or 'Unnamed'}" if lead.id else (lead.name or "Unnamed lead")
    return Panel("\n".join(lines), title=title)


@click.group()
@click.version_option(version="1.0.0", prog_name="nbscore")
def cli():
    """NB Lead Engine - property buyer lead scoring.

    \b
    Quick Start:
      nbscore score lead.json                 # Score one lead
      nbscore batch leads.csv -o scored.csv   # Score a file of leads
      nbscore nb 55 70 9                      # Composite NB Score
      nbscore config show                     # Current thresholds
    """
    pass


# ============================================================================
# SCORING COMMANDS
# ============================================================================

@cli.command()
@click.argument("lead_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--as-of", help="Reference date (ISO) for lead-age checks")
@click.option("--config", "config_path", help="Custom scoring config path")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON result")
def score(lead_file: str, as_of: Optional[str], config_path: Optional[str], as_json: bool):
    """Score a single lead from a JSON file."""
    scorer = get_scorer(config_path)
    lead = LeadRecord.from_dict(load_lead_file(lead_file))
    result = scorer.score_lead(lead, parse_as_of(as_of))

    if as_json:
        data = result.to_dict()
        data["summary"] = generate_summary(lead, result, scorer.config.risk)
        data["next_action"] = determine_next_action(lead, result)
        data["recommendations"] = generate_recommendations(lead, result, scorer.config.risk)
        click.echo(json.dumps(data, indent=2))
        return

    console.print(_result_panel(lead, result, scorer))


@cli.command()
@click.argument("lead_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--as-of", help="Reference date (ISO) for lead-age checks")
@click.option("--config", "config_path", help="Custom scoring config path")
def explain(lead_file: str, as_of: Optional[str], config_path: Optional[str]):
    """Explain every factor behind a lead's scores."""
    scorer = get_scorer(config_path)
    result = scorer.score_lead(load_lead_file(lead_file), parse_as_of(as_of))
    console.print(scorer.explain_score(result), markup=False, highlight=False)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Write results to file")
@click.option("--format", "-f", "output_format", type=click.Choice(["csv", "json"]), default="csv")
@click.option("--as-of", help="Reference date (ISO) for lead-age checks")
@click.option("--config", "config_path", help="Custom scoring config path")
@click.option("--limit", "-n", default=20, help="Number of leads to show")
def batch(
    input_file: str,
    output: Optional[str],
    output_format: str,
    as_of: Optional[str],
    config_path: Optional[str],
    limit: int,
):
    """Score every lead in a CSV or JSON file.

    \b
    Examples:
      nbscore batch leads.csv
      nbscore batch leads.json -o scored.json -f json
    """
    scorer = get_scorer(config_path)
    reference = parse_as_of(as_of)
    imported = BulkImporter().load(input_file)
    if not imported.ok:
        raise click.ClickException(imported.file_error)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        progress.add_task(f"Scoring {imported.imported} leads...", total=None)
        results = scorer.score_batch(imported.leads, reference)

    scored = list(zip(imported.leads, results))

    for error in imported.errors:
        location = f"row {error['row']}" if "row" in error else f"item {error.get('index')}"
        console.print(f"[yellow]Skipped {location}: {error['error']}[/yellow]")

    if output:
        exporter = BulkExporter()
        if output_format == "json":
            exporter.to_json(scored, output)
        else:
            exporter.to_csv(scored, output)
        console.print(f"[green]✓ Wrote {len(scored)} results to {output}[/green]")

    ranked = sorted(scored, key=lambda pair: pair[1].nb_score, reverse=True)[:limit]
    table = Table(title=f"Scored Leads ({len(scored)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan", max_width=25)
    table.add_column("NB", justify="right", style="bold")
    table.add_column("Q", justify="right")
    table.add_column("I", justify="right")
    table.add_column("C", justify="right")
    table.add_column("Classification", justify="center")
    table.add_column("Priority", justify="center")
    table.add_column("Top Risk", max_width=35)

    for lead, result in ranked:
        table.add_row(
            lead.id or "",
            (lead.name or "-")[:25],
            str(result.nb_score),
            str(result.quality_score.total),
            str(result.intent_score.total),
            str(result.confidence_score.total),
            _styled_classification(result.classification),
            result.priority.priority.value,
            (result.risk_flags[0] if result.risk_flags else "")[:35],
        )

    console.print(table)

    counts = {}
    for _, result in scored:
        counts[result.classification] = counts.get(result.classification, 0) + 1
    breakdown = "  ".join(
        f"{_styled_classification(c)}: {counts[c]}" for c in Classification if c in counts
    )
    if breakdown:
        console.print(breakdown)


@cli.command("nb")
@click.argument("quality", type=float)
@click.argument("intent", type=float)
@click.argument("confidence", type=float)
@click.option("--config", "config_path", help="Custom scoring config path")
def nb_score(quality: float, intent: float, confidence: float, config_path: Optional[str]):
    """Compute the NB Score from QUALITY (0-100), INTENT (0-100) and CONFIDENCE (0-10)."""
    scorer = get_scorer(config_path)
    value = scorer.calculate_nb_score(quality, intent, confidence)
    band = get_nb_score_band(value, scorer.config.nb_score)
    style = BAND_COLORS[band]
    console.print(
        f"NB Score: [{style}]{value}[/{style}] ({band.value}, {scorer.get_nb_score_color(value)})"
    )


@cli.command()
@click.argument("confidence", type=float)
@click.argument("status")
@click.option("--reason", help="Failure reason reported by the provider")
@click.option("--flag", "flags", multiple=True, help="Existing risk flag (repeatable)")
@click.option("--config", "config_path", help="Custom scoring config path")
def verify(confidence: float, status: str, reason: Optional[str], flags: tuple, config_path: Optional[str]):
    """Apply an identity verification STATUS to a stored CONFIDENCE score."""
    config = get_manager(config_path).config
    outcome = outcome_from_status(status)
    update = apply_verification(confidence, outcome, list(flags), reason, config.verification)

    style = {VerificationOutcome.PASSED: "green", VerificationOutcome.FAILED: "red"}.get(outcome, "yellow")
    lines = [
        f"[bold]Outcome:[/bold] [{style}]{outcome.value}[/{style}]",
        f"[bold]Confidence:[/bold] {confidence} → {update.confidence}",
    ]
    if update.risk_flags:
        lines.extend(["", "[bold]Risk Flags:[/bold]"])
        lines.extend(f"  • {flag}" for flag in update.risk_flags)
    console.print(Panel.fit("\n".join(lines), title="Verification"))


# ============================================================================
# CONFIGURATION
# ============================================================================

@cli.group()
def config():
    """View and tune scoring thresholds."""
    pass


@config.command("show")
@click.option("--config", "config_path", help="Custom scoring config path")
def config_show(config_path: Optional[str]):
    """Show the three threshold sets and spam rule."""
    manager = get_manager(config_path)
    cfg = manager.config

    table = Table(title="Scoring Thresholds")
    table.add_column("Set", style="cyan")
    table.add_column("Setting")
    table.add_column("Value", justify="right", style="bold")

    c = cfg.classifier
    table.add_row("Classifier", "Disqualify below", str(c.disqualify_below))
    table.add_row("Classifier", "Hot (quality and intent)", str(c.hot))
    table.add_row("Classifier", "Warm", str(c.warm))
    table.add_row("Classifier", "Nurture range", f"{c.nurture_min}-{c.nurture_max}")
    table.add_row("NB Score bands", "Hot", f"≥ {cfg.nb_score.hot_band}")
    table.add_row("NB Score bands", "Warm", f"≥ {cfg.nb_score.warm_band}")
    table.add_row("Quick temperature", "Hot (mean of Q and I)", f"≥ {cfg.quick_temperature.hot}")
    table.add_row("Quick temperature", "Warm", f"≥ {cfg.quick_temperature.warm}")
    table.add_row("Spam", "Flags to mark fake", str(cfg.fraud.min_flags))
    table.add_row("Intent floor", "Budget", f"£{cfg.intent.high_value_budget:,.0f}")
    table.add_row("Intent floor", "Floor", str(cfg.intent.high_value_floor))

    console.print(table)
    console.print(f"[dim]Config file: {manager.config_path}[/dim]")


@config.command("set-thresholds")
@click.option("--hot", type=int, help="Hot threshold for quality and intent")
@click.option("--warm", type=int, help="Warm threshold")
@click.option("--nurture-min", type=int, help="Lower bound of the nurture range")
@click.option("--disqualify-below", type=int, help="Disqualify when either score is below this")
@click.option("--config", "config_path", help="Custom scoring config path")
def config_set_thresholds(
    hot: Optional[int],
    warm: Optional[int],
    nurture_min: Optional[int],
    disqualify_below: Optional[int],
    config_path: Optional[str],
):
    """Update the classifier thresholds."""
    manager = get_manager(config_path)
    manager.update_classifier_thresholds(hot, warm, nurture_min, disqualify_below)
    console.print("[green]✓ Classifier thresholds updated[/green]")


@config.command("set-bands")
@click.option("--hot", type=int, required=True, help="NB Score hot band lower bound")
@click.option("--warm", type=int, required=True, help="NB Score warm band lower bound")
@click.option("--config", "config_path", help="Custom scoring config path")
def config_set_bands(hot: int, warm: int, config_path: Optional[str]):
    """Update the NB Score color bands."""
    manager = get_manager(config_path)
    try:
        manager.update_nb_bands(hot, warm)
    except ValueError as e:
        raise click.BadParameter(str(e))
    console.print("[green]✓ NB Score bands updated[/green]")


@config.command("set-spam-flags")
@click.argument("min_flags", type=int)
@click.option("--config", "config_path", help="Custom scoring config path")
def config_set_spam_flags(min_flags: int, config_path: Optional[str]):
    """Set how many spam flags mark a lead as fake."""
    manager = get_manager(config_path)
    try:
        manager.set_fraud_min_flags(min_flags)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="MIN_FLAGS")
    console.print(f"[green]✓ Leads with {min_flags}+ spam flags are now marked fake[/green]")


@config.command("set-floor")
@click.option("--budget", type=float, required=True, help="Budget that triggers the intent floor")
@click.option("--floor", type=int, required=True, help="Minimum intent score for those leads")
@click.option("--config", "config_path", help="Custom scoring config path")
def config_set_floor(budget: float, floor: int, config_path: Optional[str]):
    """Set the high-value intent floor."""
    manager = get_manager(config_path)
    try:
        manager.set_high_value_floor(budget, floor)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--floor")
    console.print(f"[green]✓ Budgets from £{budget:,.0f} now floor intent at {floor}[/green]")


if __name__ == "__main__":
    cli()
