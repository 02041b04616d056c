# pyright: reportMissingImports=false, reportMissingModuleSource=false
from typing import Optional

import typer
from dotenv import load_dotenv

from .config import load_config
from .logging_setup import configure_logging

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.callback()
def main() -> None:
    load_dotenv()
    configure_logging()


@app.command()
def ops(
    config: Optional[str] = typer.Option(None, help="Path to statline YAML config"),
    surname: Optional[str] = typer.Option(None, help="Override the configured surname"),
    no_validate: bool = typer.Option(False, help="Skip schema validation"),
) -> None:
    """Compute the labeled OPS season series and write it to the output root."""
    cfg = load_config(config)
    if surname:
        cfg.surname = surname
    # Lazy import to avoid heavy deps during --help
    from .orchestration import run_ops
    from .reports import label_summary

    result = run_ops(cfg, no_validate=no_validate)
    typer.echo(f"rows={result.frame.height} output={result.output_path}")
    if result.frame.height:
        for row in label_summary(result.frame).iter_rows(named=True):
            typer.echo(
                f"{row['name_label']}: seasons={row['seasons']} "
                f"{row['first_season']}-{row['last_season']} ops_mean={row['ops_mean']}"
            )


@app.command()
def sql(
    surname: str = typer.Option(..., help="Surname to filter on"),
    config: Optional[str] = typer.Option(None, help="Path to statline YAML config"),
    show: bool = typer.Option(False, help="Only print the SQL, do not run it"),
) -> None:
    """Run the SQL form of the surname join against the configured duckdb source."""
    cfg = load_config(config)
    from .sources import DuckDBSource, source_from_config, surname_sql

    if show:
        typer.echo(surname_sql(cfg.source.people_table, cfg.source.batting_table))
        return
    src = source_from_config(cfg.source)
    if not isinstance(src, DuckDBSource):
        raise typer.BadParameter("sql needs a duckdb source in the config")
    typer.echo(str(src.query_by_surname(surname)))


@app.command()
def profile(
    path: str = typer.Argument(..., help="Written OPS output (parquet directory or csv)"),
) -> None:
    """Print quality metrics for a previously written output."""
    import json

    from .io import read_table
    from .profiling import compute_metrics
    from .transforms import SEASON_KEY

    metrics = compute_metrics(read_table(path), SEASON_KEY)
    typer.echo(json.dumps(metrics, indent=2, default=str))


if __name__ == "__main__":
    app()
