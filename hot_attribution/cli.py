#!/usr/bin/env python3
"""
Command-line interface for the HoT attribution engine.
"""

import json
import click
import logging
from pathlib import Path
from datetime import datetime
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.logging import RichHandler

from .attribution import HotTracker, build_catalog
from .config.loader import load_and_apply_config
from .config.settings import AttributionSettings
from .config.spells import get_spell_name
from .models.combatant import CombatantRegistry
from .parser.reader import CombatLogReader


# Set up rich console for pretty output
console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose):
    """HoT Attribution - credit Restoration Druid HoTs to the mechanics that procced them"""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.argument("log_file", type=click.Path(exists=True))
@click.option("--player", "-p", required=True, help="GUID of the druid to analyze")
@click.option("--config", "config_path", type=click.Path(), help="YAML config file")
@click.option("--output", "-o", help="Output file for results")
@click.option("--format", type=click.Choice(["json", "summary"]), default="summary")
def analyze(log_file, player, config_path, output, format):
    """Attribute a player's HoTs in a combat log."""
    log_path = Path(log_file)
    console.print(f"[bold green]Analyzing combat log:[/bold green] {log_path.name}")

    settings = AttributionSettings.from_env()
    registry = CombatantRegistry()
    durations = load_and_apply_config(config_path, settings=settings, registry=registry)
    try:
        settings.validate()
    except ValueError as e:
        raise click.ClickException(str(e))
    settings.log_configuration()

    start_time = datetime.now()
    reader = CombatLogReader(player, registry=registry)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("[cyan]Reading events...", total=None)
        # gear and traits come from COMBATANT_INFO, so read everything before attributing
        events = list(reader.read_file(log_path))

        progress.update(task, description=f"[cyan]Attributing {len(events):,} events...")
        tracker = HotTracker(
            registry=registry,
            settings=settings,
            catalog=build_catalog(registry, durations),
        )
        tracker.process(events)
        progress.update(task, description="[green]Attribution complete!")

    processing_time = (datetime.now() - start_time).total_seconds()
    summary = tracker.summary()
    summary["stats"]["processing_time"] = processing_time
    summary["stats"]["parse_errors"] = len(reader.parse_errors)

    if format == "summary":
        display_summary(summary)
    else:
        export_json(summary, output or "attribution.json")


@cli.command()
@click.option("--config", "config_path", type=click.Path(), help="YAML config file")
def catalog(config_path):
    """Show HoT durations and tick periods for the configured traits."""
    registry = CombatantRegistry()
    durations = load_and_apply_config(config_path, registry=registry)
    hots = build_catalog(registry, durations)

    table = Table(title="HoT Catalog")
    table.add_column("Spell ID", style="dim")
    table.add_column("Name", style="green")
    table.add_column("Duration", style="cyan")
    table.add_column("Tick Period", style="cyan")

    for spell_id in hots:
        info = hots[spell_id]
        table.add_row(
            str(spell_id),
            get_spell_name(spell_id),
            f"{info.duration / 1000:.1f}s",
            f"{info.tick_period / 1000:.1f}s",
        )

    console.print(table)


def display_summary(summary):
    """Display attribution totals."""
    console.print("\n[bold cyan]═══ Attribution Complete ═══[/bold cyan]")

    stats = summary["stats"]
    stats_table = Table(title="Processing Statistics", show_header=False)
    stats_table.add_column("Metric", style="cyan")
    stats_table.add_column("Value", style="white")

    stats_table.add_row("Events Processed", f"{stats['events_processed']:,}")
    stats_table.add_row("Processing Time", f"{stats['processing_time']:.2f}s")
    stats_table.add_row("Parse Errors", str(stats["parse_errors"]))
    stats_table.add_row("Missing HoT Records", str(stats["data_gaps"]))
    stats_table.add_row("Unattributed Applications", str(stats["unattributed"]))
    stats_table.add_row("Handler Errors", str(stats["errors"]))

    console.print(stats_table)

    source_table = Table(title="\n[bold]Proc Sources[/bold]")
    source_table.add_column("Source", style="green")
    source_table.add_column("Procs", style="yellow")
    source_table.add_column("Healing", style="blue")
    source_table.add_column("Mastery Healing", style="magenta")

    for source in summary["sources"].values():
        source_table.add_row(
            source["name"],
            str(source["procs"]) if source["procs"] else "-",
            f"{source['healing']:,.0f}",
            f"{source['mastery_healing']:,.0f}",
        )

    console.print(source_table)


def export_json(summary, output_file):
    """Export attribution totals to JSON format."""
    with open(output_file, "w") as f:
        json.dump(summary, f, indent=2, default=str)

    console.print(f"[green]Exported attribution to {output_file}[/green]")


def main():
    """Entry point for the hot-attribution command."""
    cli()


if __name__ == "__main__":
    main()
