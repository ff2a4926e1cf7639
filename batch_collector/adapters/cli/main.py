"""CLI JSON-lines adapter — pushes stdin lines, prints each flushed batch as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Iterable, TextIO

from batch_collector import BATCH_FLUSH_EVENT, AsyncioScheduler, create_collector


async def run_cli(
    lines: Iterable[str],
    *,
    out: TextIO = sys.stdout,
    **options,
) -> int:
    """Push every non-blank line; return the number of batches printed."""
    collector = create_collector(scheduler=AsyncioScheduler(), **options)
    batches = 0

    def _print(items: list) -> None:
        nonlocal batches
        batches += 1
        print(json.dumps(items, default=str), file=out, flush=True)

    collector.subscribe(BATCH_FLUSH_EVENT, _print)

    for line in lines:
        text = line.rstrip("\n")
        if text.strip():
            collector.push(text)
        await asyncio.sleep(0)

    # Wait out the pending flush before returning.
    if collector.pending:
        await asyncio.sleep(collector.config.delay_ms / 1000 + 0.05)
    return batches


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batch-collector",
        description="Batch stdin lines and print each flushed batch as a JSON array.",
    )
    parser.add_argument("words", nargs="*", help="items to push instead of reading stdin")
    parser.add_argument("--delay-ms", type=int, default=None)
    parser.add_argument("--no-reset", action="store_true", help="flush delay-ms after the first push")
    parser.add_argument("--storage", choices=["memory", "local", "session"], default=None)
    parser.add_argument("--storage-key", default=None)
    return parser


def main() -> None:
    args = build_parser().parse_args()
    lines = args.words or sys.stdin.readlines()
    if not lines:
        print("Usage: batch-collector <item> ...  OR  cat app.log | batch-collector", file=sys.stderr)
        sys.exit(1)

    asyncio.run(run_cli(
        lines,
        delay_ms=args.delay_ms,
        reset_timer_on_push=False if args.no_reset else None,
        storage_type=args.storage,
        storage_key=args.storage_key,
    ))


if __name__ == "__main__":
    main()
