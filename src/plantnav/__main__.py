"""CLI entry point for plantnav - Plant Navigator."""

from pathlib import Path

import click

from plantnav.config import load_config
from plantnav.core.errors import InvalidFilterError
from plantnav.core.filter import NO_GROW_ZONE, GrowZone
from plantnav.logging_config import configure_logging
from plantnav.plants import SAMPLE_PLANTS, load_plants
from plantnav.repository import InMemoryPlantRepository


@click.command()
@click.option(
    "--zone",
    "-z",
    type=int,
    default=None,
    help="Initial grow zone filter (all zones if omitted)",
)
@click.option(
    "--plants",
    "-p",
    "plants_file",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="JSON file with the plant list (bundled samples if omitted)",
)
@click.option(
    "--latency",
    type=float,
    default=None,
    help="Simulated repository latency in seconds",
)
@click.option(
    "--fail-zone",
    "fail_zones",
    type=int,
    multiple=True,
    help="Make loading this grow zone fail (repeatable)",
)
@click.option(
    "--fail-refresh",
    is_flag=True,
    help="Make cache refreshes fail",
)
@click.option(
    "--export",
    "-e",
    "export_file",
    default=None,
    type=click.Path(path_type=Path),
    help="Export the loaded plant list to file (headless mode)",
)
@click.option(
    "--format",
    "export_format",
    type=click.Choice(["json", "ndjson"], case_sensitive=False),
    default="json",
    help="Export format",
    show_default=True,
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Give up loading after this many seconds (headless mode)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level",
)
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(path_type=Path),
    help="Config file (default: ~/.config/plantnav/config.toml)",
)
def main(
    zone: int | None,
    plants_file: Path | None,
    latency: float | None,
    fail_zones: tuple[int, ...],
    fail_refresh: bool,
    export_file: Path | None,
    export_format: str,
    timeout: float | None,
    log_level: str | None,
    config_file: Path | None,
) -> None:
    """plantnav - Plant Navigator.

    Browses a plant list filtered by grow zone. Changing the zone cancels the
    previous load; failures show up as a one-shot message.

    Headless mode (no TUI):
      plantnav -z 9 -e zone9.json
      plantnav -z 9 --fail-zone 9 -e zone9.json   # exits with status 1
    """
    config = load_config(config_file)
    headless = export_file is not None

    configure_logging(
        log_level or config.logging.level,
        log_file=config.logging.file,
        console=headless,
    )

    try:
        initial_zone = GrowZone(zone) if zone is not None else None
    except InvalidFilterError as e:
        raise click.BadParameter(str(e), param_hint="--zone") from e

    plants_path = plants_file or (
        Path(config.repository.plants_file).expanduser()
        if config.repository.plants_file
        else None
    )
    plants = load_plants(plants_path) if plants_path else SAMPLE_PLANTS

    repository = InMemoryPlantRepository(
        plants,
        latency=latency if latency is not None else config.repository.latency,
        failing_zones=fail_zones or config.repository.failing_zones,
        fail_refresh=fail_refresh or config.repository.fail_refresh,
    )

    # Headless mode: load + export
    if export_file:
        from plantnav.headless import run_headless

        ok = run_headless(
            repository,
            initial_zone or NO_GROW_ZONE,
            export_file=export_file,
            export_format=export_format,
            refresh_on_repeat=config.behavior.refresh_on_repeat,
            timeout=timeout,
        )
        if not ok:
            raise SystemExit(1)
        return

    from plantnav.app import PlantNavApp

    app = PlantNavApp(
        repository,
        initial_zone=initial_zone,
        textual_theme=config.appearance.theme,
        fullscreen=config.appearance.fullscreen,
        refresh_on_repeat=config.behavior.refresh_on_repeat,
    )
    app.run()


if __name__ == "__main__":
    main()
