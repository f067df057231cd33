"""MissionMatch CLI - candidate matching for the freelance marketplace."""

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from missionmatch.config import DATABASE_URL, DB_PATH, DEFAULT_LIMIT, REDIS_URL
from missionmatch.db.connection import init_tables
from missionmatch.schemas.application import ApplicationStatus
from missionmatch.schemas.match import FreelancerMatch, MissionMatch
from missionmatch.services.application_service import (
    apply_to_mission,
    change_application_status,
    score_application,
    shortlist_freelancer,
    unshortlist_freelancer,
)
from missionmatch.services.match_service import (
    get_result_cache,
    get_top_matching_freelancers,
    get_top_matching_missions,
)
from missionmatch.services.seed_service import load_seed_file
from missionmatch.utils import ApplicationExistsError, MissionNotAvailableError, SubjectNotFoundError

app = typer.Typer(help="MissionMatch - rank missions for freelancers and freelancers for missions")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command(name="init-db")
def init_db() -> None:
    """Create database tables if they don't exist."""
    try:
        init_tables()
    except Exception as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)

    target = "PostgreSQL" if DATABASE_URL else str(DB_PATH)
    console.print(f"[bold green]Database ready:[/bold green] {target}")


@app.command()
def seed(
    seed_file: Path = typer.Option(..., "--file", "-f", help="Path to seed JSON file"),
) -> None:
    """Load freelancers, missions, applications and shortlists from a JSON file.

    The file should contain an object such as:
    {"freelancers": [...], "missions": [...], "applications": [...], "shortlists": [...]}
    """
    if not seed_file.exists():
        console.print(f"[red]Error: File not found: {seed_file}[/red]")
        raise typer.Exit(1)

    try:
        stats = load_seed_file(seed_file)
    except Exception as e:
        console.print(f"[red]Error loading seed file: {e}[/red]")
        raise typer.Exit(1)

    console.print("[bold green]Seed loaded![/bold green]")
    for kind, count in stats.items():
        console.print(f"  {kind.capitalize()}: {count}")


@app.command()
def missions(
    freelancer: str = typer.Option(..., "--freelancer", "-f", help="Freelancer profile ID"),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", "-n", help="Number of missions to return"),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Show the best-matching published missions for a freelancer."""
    try:
        matches = get_top_matching_missions(freelancer, limit)
    except SubjectNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(matches)
    else:
        _output_missions(matches)


@app.command()
def freelancers(
    mission: str = typer.Option(..., "--mission", "-m", help="Mission ID"),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", "-n", help="Number of freelancers to return"),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Show the best-matching available freelancers for a mission."""
    try:
        matches = get_top_matching_freelancers(mission, limit)
    except SubjectNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(matches)
    else:
        _output_freelancers(matches)


@app.command()
def apply(
    freelancer: str = typer.Option(..., "--freelancer", "-f", help="Freelancer profile ID"),
    mission: str = typer.Option(..., "--mission", "-m", help="Mission ID"),
) -> None:
    """Record an application (and drop the mission from the freelancer's matches)."""
    try:
        application = apply_to_mission(freelancer, mission)
    except (SubjectNotFoundError, MissionNotAvailableError, ApplicationExistsError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold green]Application created:[/bold green] {application.id}")


@app.command(name="set-status")
def set_status(
    application: str = typer.Option(..., "--application", "-a", help="Application ID"),
    status: ApplicationStatus = typer.Option(..., "--status", "-s", help="New status"),
) -> None:
    """Change an application's status."""
    try:
        change_application_status(application, status)
    except SubjectNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold green]Application {application} is now {status.value}[/bold green]")


@app.command()
def shortlist(
    company: str = typer.Option(..., "--company", "-c", help="Company ID"),
    mission: str = typer.Option(..., "--mission", "-m", help="Mission ID"),
    freelancer: str = typer.Option(..., "--freelancer", "-f", help="Freelancer profile ID"),
    remove: bool = typer.Option(False, "--remove", help="Remove from the shortlist instead"),
) -> None:
    """Shortlist a freelancer for a mission (or remove them with --remove)."""
    if remove:
        changed = unshortlist_freelancer(company, mission, freelancer)
        message = "removed from" if changed else "was not on"
    else:
        changed = shortlist_freelancer(company, mission, freelancer)
        message = "added to" if changed else "already on"

    style = "bold green" if changed else "yellow"
    console.print(f"[{style}]Freelancer {freelancer} {message} the shortlist for {mission}[/{style}]")


@app.command(name="score-application")
def score_application_command(
    application: str = typer.Option(..., "--application", "-a", help="Application ID"),
) -> None:
    """Compute and store the fit score of an application."""
    try:
        score = score_application(application)
    except SubjectNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[cyan]Application fit score:[/cyan] {score:.1%}")


@app.command(name="clear-cache")
def clear_cache() -> None:
    """Delete every cached ranking."""
    if not REDIS_URL:
        console.print("[yellow]REDIS_URL is not set, nothing to clear.[/yellow]")
        raise typer.Exit(0)

    deleted = get_result_cache().purge()
    console.print(f"[bold green]Deleted {deleted} cache keys[/bold green]")


def _output_json(matches: list[MissionMatch] | list[FreelancerMatch]) -> None:
    """Output matches as JSON to stdout."""
    output = [match.model_dump(mode="json") for match in matches]
    json.dump(obj=output, fp=sys.stdout, indent=2)
    sys.stdout.write("\n")


def _output_missions(matches: list[MissionMatch]) -> None:
    """Output mission matches in pretty console format."""
    if not matches:
        console.print("[yellow]No matching missions found.[/yellow]")
        return

    console.print(f"\n[bold green]Found {len(matches)} matching missions![/bold green]\n")

    for i, match in enumerate(iterable=matches, start=1):
        mission = match.mission

        content = [f"[cyan]Match Score:[/cyan] {match.match_score:.0%}"]
        if mission.required_skills:
            content.append(f"[cyan]Required skills:[/cyan] {', '.join(mission.required_skills)}")
        if mission.budget_max:
            content.append(f"[cyan]Budget:[/cyan] up to {mission.budget_max:g}/day")
        content.append(f"[cyan]Modality:[/cyan] {mission.modality.value}")

        content.append("\n[cyan]Why it's a match:[/cyan]")
        for reason in match.match_reasons:
            content.append(f"  • {reason}")

        panel = Panel(
            renderable="\n".join(content),
            title=f"[bold]#{i} {mission.title or mission.id}[/bold]",
            border_style="green" if i == 1 else "blue",
        )
        console.print(panel)


def _output_freelancers(matches: list[FreelancerMatch]) -> None:
    """Output freelancer matches as a table."""
    if not matches:
        console.print("[yellow]No matching freelancers found.[/yellow]")
        return

    table = Table(title=f"Top {len(matches)} freelancers")
    table.add_column("#", style="dim")
    table.add_column("Freelancer", style="cyan")
    table.add_column("Score", style="green")
    table.add_column("Skills")
    table.add_column("Why")

    for i, match in enumerate(iterable=matches, start=1):
        freelancer = match.freelancer
        table.add_row(
            str(i),
            freelancer.name or freelancer.id,
            f"{match.match_score:.0%}",
            ", ".join(skill.name for skill in freelancer.skills[:5]),
            "; ".join(match.match_reasons),
        )

    console.print(table)


if __name__ == "__main__":
    app()
