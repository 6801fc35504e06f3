"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from hitsound_merger.config import MergerSettings
from hitsound_merger.errors import HitSoundMergerError
from hitsound_merger.merger.models import ProgressEvent
from hitsound_merger.merger.service import HitSoundMerger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hitsound-merger", description="Render hit-sound WAV tracks.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    export_cmd = commands.add_parser("export", help="Mix a hit sound at every note time.")
    export_cmd.add_argument("hit_sound", type=Path, help="Short PCM WAV sample to place at each note.")
    export_cmd.add_argument("output", type=Path, help="Destination WAV path.")
    times = export_cmd.add_mutually_exclusive_group(required=True)
    times.add_argument("--times", type=float, nargs="+", metavar="MS", help="Note times in milliseconds.")
    times.add_argument(
        "--times-file",
        type=Path,
        metavar="FILE",
        help="Text file of note times in milliseconds, separated by whitespace or commas.",
    )

    silent_cmd = commands.add_parser("silent", help="Write a silent WAV file.")
    silent_cmd.add_argument("output", type=Path, help="Destination WAV path.")
    silent_cmd.add_argument("--duration", type=float, required=True, metavar="SEC", help="Length in seconds.")
    return parser


def read_times_file(path: Path) -> list[float]:
    text = path.read_text(encoding="utf-8")
    return [float(token) for token in text.replace(",", " ").split()]


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "export":
            note_times = args.times if args.times is not None else read_times_file(args.times_file)
            merger = HitSoundMerger(settings=MergerSettings.from_env(), progress_callback=_ProgressPrinter())
            result = merger.export(args.hit_sound, note_times, args.output)
            print(f"wrote {result.output_path} ({result.insert_count} hits, {result.duration_sec:.3f}s)")
        else:
            merger = HitSoundMerger(settings=MergerSettings.from_env())
            path = merger.create_silent_wav(args.output, args.duration)
            print(f"wrote {path}")
    except (HitSoundMergerError, OSError, ValueError) as exc:
        print(f"hitsound-merger: {exc}")
        return 1
    return 0


class _ProgressPrinter:
    def __init__(self) -> None:
        self._last_percent = -1

    def __call__(self, event: ProgressEvent) -> None:
        percent = int(event.percentage)
        if percent == self._last_percent:
            return
        self._last_percent = percent
        print(f"[{percent:3d}%] {event.message}")


if __name__ == "__main__":
    raise SystemExit(main())
