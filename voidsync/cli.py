from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from .config import settings
from .utils.logging_utils import configure_logging

logger = logging.getLogger("voidsync.cli")


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("voidsync.main:app", host=args.host or settings.void_host,
                port=args.port or settings.void_port, log_level=settings.log_level.lower())
    return 0


def _parse_line(line: str) -> tuple[str, str | None] | None:
    parts = line.strip().split(None, 1)
    if not parts:
        return None
    return parts[0], (parts[1] if len(parts) > 1 else None)


def run_mind(args: argparse.Namespace, stream: TextIO) -> int:
    from .mind import LocalMemory, Mind, MindRole

    if args.state_dir is not None:
        settings.mind_state_dir = args.state_dir
    memory = LocalMemory(settings.mind_state_dir or None)
    if args.role:
        try:
            mind = Mind(args.role, memory=memory, endpoint=args.endpoint)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    else:
        mind = Mind.resume(memory=memory, endpoint=args.endpoint)

    mind.awaken()
    try:
        for line in stream:
            parsed = _parse_line(line)
            if parsed is None:
                continue
            event_type, data = parsed
            mind.sense(event_type, data)
    except KeyboardInterrupt:
        pass
    finally:
        mind.sleep()
        # Input may end before the first sync interval; flush what was observed.
        if mind.role is MindRole.SENDER:
            mind.push_state()
    return 0


def _clear(args: argparse.Namespace) -> int:
    from .mind import VoidClient

    ok = VoidClient(args.endpoint or settings.mind_sync_endpoint).clear()
    print("Void cleared" if ok else "Void unreachable")
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="voidsync", description="VoidSync: Mind agent and shared Void store")
    sub = p.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the Void HTTP endpoint")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    mind = sub.add_parser("mind", help="run a Mind reading '<type> [data]' events from stdin")
    mind.add_argument("--role", default=None,
                      help="solitary | sender | receiver (default: last used role)")
    mind.add_argument("--endpoint", default=None, help="Void URL")
    mind.add_argument("--state-dir", default=None, help="local state directory ('' = memory only)")

    clear = sub.add_parser("clear", help="empty the Void")
    clear.add_argument("--endpoint", default=None, help="Void URL")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level)
    if args.command == "serve":
        return _serve(args)
    if args.command == "mind":
        return run_mind(args, sys.stdin)
    return _clear(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
