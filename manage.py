#!/usr/bin/env python3
"""
Operations CLI for the billing service.

Commands:
    migrate [--status | --verify]   Apply, list or check schema migrations
    reconcile [INVOICE_ID ...]      Recompute amount paid from payment rows
    start | stop | status           Manage a background API server
"""

import argparse
import asyncio
import os
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".billing.pid"
RECONCILE_PAGE = 500


def _alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except OSError:
        return False
    return True


def _server_pid() -> int | None:
    """PID recorded by ``start`` if that process still exists."""
    try:
        pid = int(PID_FILE.read_text().strip())
    except (FileNotFoundError, ValueError):
        return None
    if not _alive(pid):
        PID_FILE.unlink(missing_ok=True)
        return None
    return pid


def _port_taken(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind(("127.0.0.1", port))
        except OSError:
            return True
    return False


def cmd_migrate(args: argparse.Namespace) -> int:
    from src.infrastructure.storage.sqlite.migrations import (
        get_migration_status,
        initialize_database,
        verify_schema_integrity,
    )

    if args.status:
        status = asyncio.run(get_migration_status(args.db_path))
        print(f"database exists:  {status['exists']}")
        print(f"applied:          {', '.join(status['applied_migrations']) or '-'}")
        print(f"pending:          {', '.join(status['pending_migrations']) or '-'}")
        return 0

    if args.verify:
        checks = asyncio.run(verify_schema_integrity(args.db_path))
        for check in checks:
            print(f"{check['status']:<5} {check['check']}")
        return 0 if all(c["status"] == "PASS" for c in checks) else 1

    results = asyncio.run(
        initialize_database(args.db_path, create_backup_before=not args.no_backup)
    )
    if not results:
        print("schema is up to date")
    for r in results:
        outcome = "ok" if r.success else f"FAILED: {r.error}"
        print(f"v{r.version} {r.name} [{r.execution_time_ms}ms] {outcome}")
    return 0 if all(r.success for r in results) else 1


async def _reconcile(invoice_ids: list[int]) -> None:
    from src.infrastructure.storage.sqlite import (
        close_pool,
        get_invoice_store,
        get_payment_store,
    )

    try:
        if not invoice_ids:
            invoices = await get_invoice_store()
            offset = 0
            while page := await invoices.list_invoices(limit=RECONCILE_PAGE, offset=offset):
                invoice_ids.extend(inv.id for inv in page if inv.id is not None)
                offset += RECONCILE_PAGE

        payments = await get_payment_store()
        for invoice_id in invoice_ids:
            paid = await payments.reconcile_amount_paid(invoice_id)
            print(f"{invoice_id}\t{paid:.2f}")
    finally:
        await close_pool()


def cmd_reconcile(args: argparse.Namespace) -> int:
    asyncio.run(_reconcile(list(args.invoice_ids)))
    return 0


def cmd_start(args: argparse.Namespace) -> int:
    if (pid := _server_pid()) is not None:
        print(f"already running as PID {pid}")
        return 1
    if _port_taken(args.port):
        print(f"port {args.port} is taken")
        return 1

    command = [
        sys.executable, "-m", "uvicorn", "src.api.main:app",
        "--host", args.host, "--port", str(args.port),
    ]
    if args.reload:
        command.append("--reload")

    proc = subprocess.Popen(command, cwd=ROOT_DIR)
    PID_FILE.write_text(str(proc.pid))
    print(f"started PID {proc.pid}, API at http://{args.host}:{args.port}/api")
    return 0


def cmd_stop(args: argparse.Namespace) -> int:
    pid = _server_pid()
    if pid is None:
        print("not running")
        return 0

    os.kill(pid, signal.SIGTERM)
    deadline = time.monotonic() + args.timeout
    while _alive(pid) and time.monotonic() < deadline:
        time.sleep(0.1)

    if _alive(pid):
        print(f"PID {pid} still alive after {args.timeout}s")
        return 1
    PID_FILE.unlink(missing_ok=True)
    print(f"stopped PID {pid}")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    pid = _server_pid()
    if pid is not None:
        print(f"running as PID {pid}")
    elif _port_taken(args.port):
        print(f"not started here, but port {args.port} is taken")
    else:
        print("not running")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="manage.py", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    sub = parser.add_subparsers(dest="command", required=True)

    migrate = sub.add_parser("migrate", help="schema migrations")
    migrate.add_argument("--db-path", type=Path, help="defaults to the configured database")
    migrate.add_argument("--no-backup", action="store_true", help="do not copy the database first")
    mode = migrate.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="list applied and pending versions")
    mode.add_argument("--verify", action="store_true", help="run integrity checks")
    migrate.set_defaults(func=cmd_migrate)

    reconcile = sub.add_parser("reconcile", help="recompute amount paid")
    reconcile.add_argument("invoice_ids", nargs="*", type=int, help="all invoices when omitted")
    reconcile.set_defaults(func=cmd_reconcile)

    start = sub.add_parser("start", help="start the API server in the background")
    start.add_argument("--host", default="0.0.0.0")
    start.add_argument("--port", type=int, default=8000)
    start.add_argument("--reload", action="store_true")
    start.set_defaults(func=cmd_start)

    stop = sub.add_parser("stop", help="send SIGTERM to the API server")
    stop.add_argument("--timeout", type=float, default=3.0)
    stop.set_defaults(func=cmd_stop)

    status = sub.add_parser("status", help="report whether the API server runs")
    status.add_argument("--port", type=int, default=8000)
    status.set_defaults(func=cmd_status)

    return parser


def main() -> None:
    args = build_parser().parse_args()
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
