import json
from pathlib import Path

import click

from elma_core.errors import ElmaError
from elma_core.text import format_time, parse_time

from .model import Level

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _load(path: Path) -> Level:
    try:
        return Level.load(path)
    except ElmaError as e:
        # Fail closed with a single-line reason.
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)


def level_summary(level: Level) -> dict:
    return {
        "version": level.version.value,
        "link": level.link,
        "name": level.name,
        "lgr": level.lgr,
        "ground": level.ground,
        "sky": level.sky,
        "polygons": len(level.polygons),
        "objects": len(level.objects),
        "apples": level.apple_count(),
        "pictures": len(level.pictures),
    }


@click.group()
def main():
    pass


@main.command("info")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def info_cmd(path: Path):
    level = _load(path)
    click.echo(json.dumps(level_summary(level), **CANONICAL_JSON_KW))


@main.command("top10")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--multi", is_flag=True, help="Show the multi-player table")
@click.option("--max-time", default=None, help="Only show times up to MM:SS,HH")
def top10_cmd(path: Path, multi: bool, max_time: str):
    level = _load(path)
    entries = level.top10_multi if multi else level.top10_single
    if max_time is not None:
        try:
            limit = parse_time(max_time)
        except ElmaError as e:
            click.echo(f"FATAL: {e}")
            raise SystemExit(1)
        entries = [entry for entry in entries if entry.time <= limit]
    if not entries:
        click.echo("No times.")
        return
    for rank, entry in enumerate(entries, start=1):
        try:
            shown = format_time(entry.time)
        except ElmaError:
            shown = str(entry.time)
        players = entry.player1_name if not multi else f"{entry.player1_name} & {entry.player2_name}"
        click.echo(f"{rank:2d}. {shown}  {players}")


if __name__ == "__main__":
    main()
