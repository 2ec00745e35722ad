# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import asyncio
import json
import random
import uuid
from pathlib import Path

import click

from wildtrails.generation import StrategyKind, get_strategy
from wildtrails.hints import HintSynthesizer, LLMHintOracle
from wildtrails.logging import configure_logging, get_logger
from wildtrails.models import BoundingBox, Difficulty, Game, LatLng
from wildtrails.orchestrator import JobOrchestrator, fetch_features_or_empty
from wildtrails.osm import OverpassGeometrySource
from wildtrails.paths import default_store_file
from wildtrails.proximity import ProximityEngine
from wildtrails.settings import Settings
from wildtrails.store import FileGameStore


def _parse_point(value: str) -> LatLng:
    try:
        lat, lng = (float(part) for part in value.split(","))
    except ValueError as e:
        raise click.BadParameter(f"expected LAT,LNG, got {value!r}") from e
    return LatLng(lat=lat, lng=lng)


def _store(settings: Settings, store_file: Path | None) -> FileGameStore:
    return FileGameStore(store_file=store_file or default_store_file(settings.data_dir))


def _oracle(settings: Settings, no_llm: bool) -> LLMHintOracle | None:
    if no_llm or not settings.llm.enabled:
        return None
    return LLMHintOracle(settings.llm, timeout_seconds=settings.generation.hint_timeout_seconds)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--log-level", default=None, help="Override WILDTRAILS_LOG_LEVEL.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """wildtrails command line interface."""
    settings = Settings()
    if log_level:
        settings.log_level = log_level
    configure_logging(settings)
    ctx.obj = settings


@cli.command("preview")
@click.option("--north-west", "north_west", required=True, help="LAT,LNG of the north-west corner.")
@click.option("--south-east", "south_east", required=True, help="LAT,LNG of the south-east corner.")
@click.option("--max-radius", type=float, default=None, help="Goal radius around the box centre (km).")
@click.option("--start", default=None, help="Fixed starting point LAT,LNG.")
@click.option("--difficulty", type=click.Choice([d.value for d in Difficulty]), default="easy", show_default=True)
@click.option("--strategy", type=click.Choice([k.value for k in StrategyKind]), default="osm", show_default=True)
@click.option("--seed", type=int, default=None, help="Seed for reproducible trails.")
@click.option("--osm/--no-osm", default=True, show_default=True, help="Query Overpass for map features.")
@click.option("--no-llm", is_flag=True, help="Use mathematical hints only.")
@click.pass_obj
def preview(
    settings: Settings,
    north_west: str,
    south_east: str,
    max_radius: float | None,
    start: str | None,
    difficulty: str,
    strategy: str,
    seed: int | None,
    osm: bool,
    no_llm: bool,
) -> None:
    """Generate a trail without storing it and print it as JSON."""
    game = Game(
        id=str(uuid.uuid4()),
        bounding_box=BoundingBox(north_west=_parse_point(north_west), south_east=_parse_point(south_east)),
        max_radius=max_radius,
        starting_point=_parse_point(start) if start else None,
        difficulty=Difficulty(difficulty),
    )

    async def _run() -> list[dict]:
        oracle = _oracle(settings, no_llm)
        source = OverpassGeometrySource(settings.overpass) if osm else None
        try:
            features = await fetch_features_or_empty(source, game.bounding_box, get_logger(__name__))
            generator = get_strategy(
                strategy,
                config=settings.generation,
                synthesizer=HintSynthesizer(
                    oracle,
                    temperature=settings.generation.hint_temperature,
                    max_retries=settings.generation.hint_max_retries,
                ),
                rng=random.Random(seed),
            )
            waypoints = await generator.generate(game, features)
        finally:
            if oracle:
                await oracle.close()
            if source:
                await source.close()
        return [p.model_dump(mode="json") for p in waypoints]

    click.echo(json.dumps(asyncio.run(_run()), indent=2))


@cli.command("process")
@click.option("--store-file", type=click.Path(path_type=Path), default=None)
@click.option("--osm/--no-osm", default=True, show_default=True)
@click.option("--no-llm", is_flag=True, help="Use mathematical hints only.")
@click.pass_obj
def process(settings: Settings, store_file: Path | None, osm: bool, no_llm: bool) -> None:
    """Run one generation sweep over games waiting in setup."""
    store = _store(settings, store_file)

    async def _run():
        oracle = _oracle(settings, no_llm)
        source = OverpassGeometrySource(settings.overpass) if osm else None
        synthesizer = HintSynthesizer(
            oracle,
            temperature=settings.generation.hint_temperature,
            max_retries=settings.generation.hint_max_retries,
        )
        orchestrator = JobOrchestrator(
            store,
            get_strategy(StrategyKind.OSM, config=settings.generation, synthesizer=synthesizer),
            geometry_source=source,
            config=settings.generation,
        )
        try:
            return await orchestrator.process_pending()
        finally:
            if oracle:
                await oracle.close()
            if source:
                await source.close()

    summary = asyncio.run(_run())
    get_logger(__name__).info("sweep_finished", total=summary.total)
    click.echo(
        json.dumps(
            {
                "total": summary.total,
                "successful": summary.successful,
                "failed": summary.failed,
                "skipped": summary.skipped,
            }
        )
    )


@cli.command("check")
@click.argument("game_id")
@click.argument("position")
@click.option("--store-file", type=click.Path(path_type=Path), default=None)
@click.pass_obj
def check(settings: Settings, game_id: str, position: str, store_file: Path | None) -> None:
    """Evaluate a player POSITION (LAT,LNG) against GAME_ID's waypoints."""
    player = _parse_point(position)
    engine = ProximityEngine(_store(settings, store_file), settings.proximity.trigger_distance_m)
    events = asyncio.run(engine.evaluate_for_game(game_id, player.lat, player.lng))
    click.echo(
        json.dumps(
            [
                {"point_id": e.point_id, "point_type": e.point_type.value, "hint": e.hint, "distance": e.distance}
                for e in events
            ],
            indent=2,
        )
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
