from __future__ import annotations

import argparse
import json
import os
import sys

from otim_settle.config import load_env_file, load_settings
from otim_settle.domain import SettleError
from otim_settle.infra import get_logger
from otim_settle.runtime import SettlementApp, fetch_details


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="otim-settle",
        description="Build, sign and submit a cross-chain settlement orchestration.",
    )
    p.add_argument("--env-file", default=".env", help="key=value file loaded before reading the environment")
    sub = p.add_subparsers(dest="command")
    sub.add_parser("create", help="create a new settlement orchestration (default)")
    details = sub.add_parser("details", help="show an existing orchestration")
    details.add_argument("request_id")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    log = get_logger("otim-settle", os.environ.get("LOG_LEVEL", "INFO"))
    load_env_file(args.env_file, log)

    command = args.command or "create"
    try:
        settings = load_settings()
        log = get_logger("otim-settle", settings.log_level)
        if command == "details":
            print(json.dumps(fetch_details(settings, args.request_id), indent=2, sort_keys=True))
            return 0
        request_id = SettlementApp(settings, log=log).run()
    except SettleError as exc:
        log.critical("Failed to %s settlement: %s", "fetch" if command == "details" else "create", exc)
        return 1

    print(request_id, flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
