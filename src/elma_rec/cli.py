"""Elma Rec - Replay inspection and frame export."""
from __future__ import annotations

import json
from pathlib import Path

import click

from elma_core.errors import ElmaError
from elma_core.text import format_time

from .frames import write_frames_parquet
from .model import Replay

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def replay_summary(replay: Replay) -> dict:
    hs, finished = replay.time_hs()
    try:
        shown = format_time(hs)
    except ElmaError:
        shown = None
    return {
        "multi": replay.multi,
        "flag_tag": replay.flag_tag,
        "link": replay.link,
        "level": replay.level,
        "frames": len(replay.frames),
        "events": len(replay.events),
        "frames_2": len(replay.frames_2),
        "events_2": len(replay.events_2),
        "time_hs": hs,
        "time": shown,
        "finished": finished,
    }


@click.group()
def main():
    pass


@main.command("info")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def info_cmd(path: Path):
    try:
        replay = Replay.load(path)
    except ElmaError as e:
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)
    click.echo(json.dumps(replay_summary(replay), **CANONICAL_JSON_KW))


@main.command("export")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(path_type=Path))
def export_cmd(path: Path, out: Path):
    """Export frames of both players to a parquet file."""
    try:
        replay = Replay.load(path)
    except ElmaError as e:
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)
    rows = write_frames_parquet(replay, out)
    click.echo(f"PASS: {rows} frames written to {out}")


if __name__ == "__main__":
    main()
