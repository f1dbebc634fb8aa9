#!/usr/bin/env python3
"""
Nexus Ledger management CLI.

Usage:
    python manage.py serve       Start the API server
    python manage.py dev         Start the API server with auto-reload
    python manage.py verify      Replay every account and compare with stored balances
    python manage.py aging       Print overdue receivables by aging bucket
"""

import argparse
import asyncio
import subprocess
import sys
from datetime import date
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


def _uvicorn_cmd(host: str, port: int, reload: bool = False) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn",
        "nexus_ledger.api.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the API server in the foreground."""
    print(f"Starting server on {args.host}:{args.port}...")
    sys.exit(subprocess.call(_uvicorn_cmd(args.host, args.port), cwd=str(ROOT_DIR)))


def cmd_dev(args: argparse.Namespace) -> None:
    """Start the API server with --reload."""
    sys.exit(subprocess.call(_uvicorn_cmd(args.host, args.port, reload=True), cwd=str(ROOT_DIR)))


async def verify_balances() -> list[str]:
    """Return one line per account whose stored balance disagrees with its history."""
    from nexus_ledger.application.services import close_ledger_store, get_ledger_store
    from nexus_ledger.core.entities import EntityType

    store = await get_ledger_store()
    try:
        mismatches = []
        accounts = [(EntityType.VENDOR, v) for v in store.tracker.list_vendors()] + [
            (EntityType.CLIENT, c) for c in store.tracker.list_clients()
        ]
        for entity_type, account in accounts:
            if not store.tracker.verify_balance(entity_type, account.id):
                replayed = store.tracker.replay_balance(entity_type, account.id)
                mismatches.append(
                    f"{entity_type.value} {account.id}: stored {account.current_balance}, "
                    f"replayed {replayed}"
                )
        return mismatches
    finally:
        await close_ledger_store()


def cmd_verify(args: argparse.Namespace) -> None:
    """Replay balances; exit 1 on any mismatch."""
    mismatches = asyncio.run(verify_balances())
    if mismatches:
        for line in mismatches:
            print(line)
        sys.exit(1)
    print("All balances consistent.")


async def aging_lines(as_of: date | None) -> list[str]:
    from nexus_ledger.application.services import close_ledger_store, get_ledger_store

    store = await get_ledger_store()
    try:
        report = store.analyzer.aging_report(as_of)
        return [
            f"0-30:  {report.bucket_0_30}",
            f"31-60: {report.bucket_31_60}",
            f"61+:   {report.bucket_61_plus}",
            f"Total: {report.total}",
        ]
    finally:
        await close_ledger_store()


def cmd_aging(args: argparse.Namespace) -> None:
    as_of = date.fromisoformat(args.as_of) if args.as_of else None
    for line in asyncio.run(aging_lines(as_of)):
        print(line)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Nexus Ledger management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.set_defaults(func=cmd_serve)

    # dev
    p_dev = sub.add_parser("dev", help="Start the API server with auto-reload")
    p_dev.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    p_dev.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_dev.set_defaults(func=cmd_dev)

    # verify
    p_verify = sub.add_parser("verify", help="Check stored balances against history")
    p_verify.set_defaults(func=cmd_verify)

    # aging
    p_aging = sub.add_parser("aging", help="Print the receivables aging report")
    p_aging.add_argument("--as-of", default=None, help="Evaluation date (YYYY-MM-DD)")
    p_aging.set_defaults(func=cmd_aging)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
