"""CLI commands for inspecting audits."""

import json
import logging
from pathlib import Path

import click

from config.settings import settings
from isoaudit.models import FindingScore, QuestionCatalog
from isoaudit.registry import get_catalog_registry
from isoaudit.store import AuditStore, create_initial_state
from isoaudit.tracing import setup_tracing


def _get_catalog(standard: str) -> QuestionCatalog:
    """Look up a catalog from the default registry."""
    try:
        return get_catalog_registry().get_or_raise(standard)
    except KeyError as e:
        raise click.ClickException(f"Unknown standard: {standard}") from e


@click.group()
@click.option("--verbose", is_flag=True, help="Log store events")
def cli(verbose: bool):
    """Inspect ISO audit catalogs and exported audit progress."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    )
    setup_tracing(
        "INFO" if verbose else "WARNING",
        enabled=settings.tracing_enabled,
        max_events=settings.trace_buffer_size,
    )


@cli.command()
@click.argument("audit_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--standard",
    default=settings.default_standard,
    show_default=True,
    help="Catalog the audit was performed against"
)
@click.option("--as-json", is_flag=True, help="Print the raw progress dictionary")
def progress(audit_file: Path, standard: str, as_json: bool):
    """Show progress for an exported AUDIT_FILE."""
    catalog = _get_catalog(standard)
    store = AuditStore(create_initial_state(catalog), catalog=catalog)
    if not store.import_audit_data(audit_file.read_text(encoding="utf-8")):
        raise click.ClickException(f"{audit_file} is not valid audit data")

    result = store.get_progress()
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    title = store.state.audit_info.audit_title or audit_file.stem
    click.echo(f"{title} ({catalog.name})")
    click.echo(
        f"Questions: {result.total_questions} in scope, "
        f"{result.active_questions} active, {result.assessed_questions} assessed"
    )
    click.echo(f"Completion: {result.completion_percentage:.1f}%")
    click.echo(f"Overall score: {result.overall_score:.1f}%")
    for score in FindingScore:
        click.echo(f"  {score.value:<13} {result.score_breakdown[score]}")

    for section in result.section_progress:
        info = catalog.get_section(section.section_id)
        label = f"{section.section_id} {info.title}" if info else section.section_id
        click.echo(
            f"{label}: {section.assessed_questions}/{section.total_questions} assessed, "
            f"score {section.section_score:.1f}%"
        )


@cli.command()
@click.option("--standard", default=settings.default_standard, show_default=True)
def sections(standard: str):
    """List the sections of a catalog."""
    catalog = _get_catalog(standard)
    for section in catalog.sections:
        click.echo(f"{section.id:<12} {section.title} [{section.risk_level.value}]")


@cli.command()
@click.option("--standard", default=settings.default_standard, show_default=True)
def templates(standard: str):
    """List the scope templates of a catalog."""
    catalog = _get_catalog(standard)
    for template in catalog.templates:
        click.echo(f"{template.id}: {template.name} ({', '.join(template.sections)})")


if __name__ == "__main__":
    cli()
