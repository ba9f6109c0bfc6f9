import logging
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables BEFORE typer resolves envvar-backed options
load_dotenv()

from .config.settings import Config, ConfigurationError
from .config_loader import load_admin_mapping
from .domain.enums import AdminTier
from .domain.models import ExtractOptions
from .ids import normalize_region_id, to_region_platform_id
from .pipeline.extract import ExtractionPipeline
from .pipeline.source import BoundarySource
from .types import ExtractError
from .utils import setup_logging

app = typer.Typer(help="Extract OSM boundary GeoJSON and convert it for RapidPro")


def _format_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'options'}: {item['msg']}"
        for item in error.errors()
    )


@app.command("extract")
def extract(
    api_key: Annotated[str, typer.Option("--api-key", envvar="OSM_BOUNDARY_API_KEY", help="API key for osm-boundaries.com")],
    osm_id: Annotated[str, typer.Option("--osm-id", "--id", help="OSM relation ID of the country to extract")],
    admin_mapping_file: Annotated[Path, typer.Option("--admin-mapping-file", help="Admin mapping file path")],
    output_dir: Annotated[Path, typer.Option("--output-dir", "-o", help="Directory to save geojson")],
    database: Annotated[str, typer.Option("--database", "--db", help="OSM database")] = "osm20211227",
    srid: Annotated[str, typer.Option("--srid", help="Spatial reference identifier")] = "4326",
    simplify: Annotated[str, typer.Option("--simplify", help="Simplification level")] = "0.01",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")] = False,
    log_to_file: Annotated[bool, typer.Option("--log-to-file", help="Create timestamped log files")] = False,
):
    """
    Download country, state and district boundaries and write RapidPro GeoJSON.

    Writes {country}admin0_simplified.json, {country}admin1_simplified.json and
    {country}admin2_simplified.json into the output directory.

    Examples:
        osm2rp extract --id 192798 --admin-mapping-file configs/admin_mapping.yml -o out/
        osm2rp extract --id R192798 --db osm20211227 --simplify 0.001 --admin-mapping-file map.yml -o out/
    """
    try:
        options = ExtractOptions(
            api_key=api_key,
            database=database,
            region_id=osm_id,
            srid=srid,
            simplify=simplify,
            admin_mapping_file=admin_mapping_file,
            output_dir=output_dir,
        )
    except ValidationError as e:
        typer.echo(f"ERROR: invalid options: {_format_validation_error(e)}", err=True)
        raise typer.Exit(1)

    log_file = setup_logging(verbose, options.platform_id, log_to_file)
    if log_file:
        typer.echo(f"Logging to: {log_file}")

    try:
        config = Config()
    except ConfigurationError as e:
        logging.error(f"Configuration error: {e}")
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    logging.info(f"Extracting {options.platform_id} from {options.database} (srid={options.srid}, simplify={options.simplify})")

    source = BoundarySource(options, config.endpoint)
    try:
        result = ExtractionPipeline(options, source=source).run()
    except ExtractError as e:
        logging.error(f"Extraction failed: {e}")
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)
    finally:
        source.close()

    for path in result.written:
        typer.echo(f"Exported to: {path}")


@app.command("levels")
def levels(
    osm_id: Annotated[str, typer.Option("--osm-id", "--id", help="OSM relation ID of the country")],
    admin_mapping_file: Annotated[Path, typer.Option("--admin-mapping-file", help="Admin mapping file path")],
):
    """Show which OSM admin levels would be requested for a country."""
    try:
        platform_id = to_region_platform_id(normalize_region_id(osm_id))
        mapping = load_admin_mapping(admin_mapping_file)
    except (ValueError, ExtractError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    resolved = mapping.resolve(platform_id)
    source = "override" if platform_id in mapping.per_country else "default"
    typer.echo(f"{platform_id} ({source})")
    for tier in AdminTier:
        typer.echo(f"  {tier.file_tag} {tier.value:<9} admin_level={resolved.for_tier(tier)}")


@app.command("list-countries")
def list_countries(
    admin_mapping_file: Annotated[Path, typer.Option("--admin-mapping-file", help="Admin mapping file path")],
):
    """List the per-country overrides in a mapping file."""
    try:
        mapping = load_admin_mapping(admin_mapping_file)
    except ExtractError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    default = mapping.default
    typer.echo(
        f"default: admin_level_0={default.admin_level_0} "
        f"admin_level_1={default.admin_level_1} admin_level_2={default.admin_level_2}"
    )
    if not mapping.per_country:
        typer.echo("No per-country overrides.")
        return

    for platform_id in sorted(mapping.per_country):
        override = mapping.per_country[platform_id]
        name = override.meta.name or "-"
        typer.echo(
            f"{platform_id:<12} {name:<30} "
            f"admin_level_1={override.admin_level_1} admin_level_2={override.admin_level_2}"
        )


@app.command("version")
def version():
    """Display version information."""
    from . import __version__
    typer.echo(f"osm2rp version: {__version__}")


if __name__ == "__main__":
    app()
