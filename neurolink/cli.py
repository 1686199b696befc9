"""NeuroLink command-line interface."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from neurolink.interface import ConnectionConfig, DelayProfile, format_rate
from neurolink.legacy import LegacyInterfaceLookup
from neurolink.metrics import ConnectionLog
from neurolink.models import ComponentKind, ConnectionState
from neurolink.runner import run_demo

DEFAULT_COMMAND = "connect"


def _wait_for_key() -> None:
	if not sys.stdin or not sys.stdin.isatty():
		return
	try:
		input()
	except EOFError:
		pass


def _open_log(path: str) -> ConnectionLog:
	try:
		return ConnectionLog(Path(path))
	except OSError as exc:
		raise ValueError(f"cannot open log {path}: {exc}") from exc


def _cmd_connect(args: argparse.Namespace) -> int:
	delays = DelayProfile().scaled(0.0 if args.no_delay else args.delay_scale)
	log = _open_log(args.log) if args.log else None
	config = ConnectionConfig(delays=delays, log=log)

	records = run_demo(args.kind or None, config=config, plain=args.plain)

	if args.json:
		json.dump([record.to_dict() for record in records], sys.stdout, indent=2)
		sys.stdout.write("\n")
	if not args.no_wait:
		_wait_for_key()
	return 0


def _cmd_lookup(args: argparse.Namespace) -> int:
	legacy = LegacyInterfaceLookup()
	state = ConnectionState.parse(args.state)
	rows: List[Dict[str, Any]] = [legacy.describe(kind, state) for kind in ComponentKind]
	if args.json:
		json.dump(rows, sys.stdout, indent=2)
		sys.stdout.write("\n")
		return 0
	console = Console()
	table = Table(title=f"Legacy Neural Interface ({state})", show_lines=False)
	for column in ("patch", "label", "transfer rate", "avg packets", "header"):
		table.add_column(column.upper())
	for row in rows:
		table.add_row(
			row["kind"],
			row["label"],
			format_rate(row["transfer_rate"]),
			format_rate(row["avg_packets_sent"]),
			row["message_header"],
		)
	console.print(table)
	return 0


def _build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description="Adapted neural interface demo")
	parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
	sub = parser.add_subparsers(dest="command")

	connect = sub.add_parser("connect", help="Connect Data through the adapted Tholian interface")
	connect.add_argument(
		"--kind",
		action="append",
		type=ComponentKind.parse,
		help="Interface patch to use (repeatable; default: all three)",
	)
	connect.add_argument("--plain", action="store_true", help="Run the unadapted interface first")
	connect.add_argument("--delay-scale", type=float, default=1.0, help="Multiplier for the scripted pauses")
	connect.add_argument("--no-delay", action="store_true", help="Skip the scripted pauses")
	connect.add_argument("--log", help="Path to a connection log CSV")
	connect.add_argument("--json", action="store_true", help="Print the connection records as JSON")
	connect.add_argument("--no-wait", action="store_true", help="Exit without waiting for a key press")
	connect.set_defaults(handler=_cmd_connect)

	lookup = sub.add_parser("lookup", help="Show the legacy interface tables")
	lookup.add_argument("--state", default=ConnectionState.ENABLED.value, help="Connection state to query")
	lookup.add_argument("--json", action="store_true", help="Output JSON")
	lookup.set_defaults(handler=_cmd_lookup)

	return parser


def main(argv: Optional[List[str]] = None) -> int:
	argv = list(sys.argv[1:] if argv is None else argv)
	parser = _build_parser()
	args = parser.parse_args(argv)
	if args.command is None:
		args = parser.parse_args([*argv, DEFAULT_COMMAND])
	if args.verbose:
		logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
	try:
		return args.handler(args)
	except ValueError as exc:
		parser.error(str(exc))


if __name__ == "__main__":
	sys.exit(main())
