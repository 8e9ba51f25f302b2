"""CLI adapter to export and clean up bills and expenses CSV files."""

from pathlib import Path

import click

from src.application.use_cases.records_csv import (
    RECORD_KINDS,
    ExportRecordsCsvUseCase,
    ImportRecordsCsvUseCase,
    records_to_csv,
)
from src.infrastructure.container import build_financial_records_repository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ForecastSettings


def _write(content: str, out_path: str | None, logger) -> None:
    if out_path:
        Path(out_path).write_text(content, encoding="utf-8")
        logger.info(f"Wrote {out_path}")
    else:
        click.echo(content, nl=False)


@click.group()
def main() -> None:
    """Bills and expenses CSV utilities."""


@main.command("export")
@click.argument("kind", type=click.Choice(RECORD_KINDS))
@click.option("--user", "user_id", default=None,
              help="User id, defaults to FORECAST_USER_ID")
@click.option("--out", "out_path", default=None,
              type=click.Path(dir_okay=False),
              help="Output file (stdout when omitted)")
def export_command(
    kind: str,
    user_id: str | None,
    out_path: str | None,
) -> None:
    """Export the stored bills or expenses of a user."""
    logger = get_app_logger()
    resolved_user = user_id or ForecastSettings.from_env().user_id
    if not resolved_user:
        logger.warning("FORECAST_USER_ID is required to export records.")
        return
    use_case = ExportRecordsCsvUseCase(
        records_repository=build_financial_records_repository(),
        logger=logger,
    )
    _write(use_case.execute(resolved_user, kind), out_path, logger)


@main.command("import")
@click.argument("kind", type=click.Choice(RECORD_KINDS))
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--out", "out_path", default=None,
              type=click.Path(dir_okay=False),
              help="Normalized output file (stdout when omitted)")
def import_command(kind: str, csv_path: str, out_path: str | None) -> None:
    """Normalize a bills or expenses CSV and report the rejected rows."""
    logger = get_app_logger()
    content = Path(csv_path).read_text(encoding="utf-8")
    try:
        result = ImportRecordsCsvUseCase(logger=logger).execute(content, kind)
    except ValueError as exc:
        logger.error(str(exc))
        return
    _write(records_to_csv(kind, result.records), out_path, logger)


if __name__ == "__main__":  # pragma: no cover
    main()
