"""speakable command-line entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from speakable.config import load_config
from speakable.models.tts_coqui import Synthesizer
from speakable.textnorm.pipeline import filter_string_input
from speakable.textnorm.quotes import BoundaryPolicy


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="speakable")
    p.add_argument("--config", type=str, default=None, help="Path to a YAML config file.")
    sub = p.add_subparsers(dest="command", required=True)

    f = sub.add_parser("filter", help="Print the sanitized form of TEXT.")
    f.add_argument("text", type=str)
    f.add_argument("--policy", choices=[policy.value for policy in BoundaryPolicy], default=None)

    s = sub.add_parser("synth", help="Synthesize TEXT into a WAV file.")
    s.add_argument("text", type=str)
    s.add_argument("--out", type=str, default=None, help="Output WAV path.")
    s.add_argument("--model", type=str, default=None)
    s.add_argument("--no-filter", action="store_true", help="Skip input sanitization.")
    s.add_argument("--cpu", action="store_true", help="Run the model on CPU.")
    return p


def _run(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except (ValueError, RuntimeError) as exc:
        print(f"speakable: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        force=True,
    )

    if args.command == "filter":
        policy = BoundaryPolicy(args.policy) if args.policy else config.filter.boundary_policy
        print(filter_string_input(args.text, policy=policy))
        return 0

    out_path = Path(args.out) if args.out else Path(config.output.dir) / "speech.wav"
    try:
        synth = Synthesizer(
            model_name=args.model or config.models.tts_id,
            gpu=config.tts.gpu and not args.cpu,
            filter_input=config.filter.enabled and not args.no_filter,
            boundary_policy=config.filter.boundary_policy,
        )
        result = synth.generate(args.text, out_path)
    except RuntimeError as exc:
        print(f"speakable: {exc}", file=sys.stderr)
        return 2

    if result.skipped:
        print("[speakable] Nothing speakable in input; skipped.")
    else:
        print(f"[speakable] Wrote: {result.wav_path}")
    return 0


def main(argv: List[str] | None = None) -> int:
    """Parse arguments, load configuration, and run the requested command."""
    args = _build_parser().parse_args(argv)
    try:
        return _run(args)
    except KeyboardInterrupt:
        print("\n[speakable] Cancelled.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
