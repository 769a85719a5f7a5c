#!/usr/bin/env python3
"""
pysamp command line

Usage:
    pysamp query 127.0.0.1
    pysamp query 127.0.0.1 --port 7777 --timeout 1
    pysamp connect 127.0.0.1 your_username --password secret
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import ClientConfig, ConfigValidationError
from .config.validation import validate_host, validate_port
from .connection import SAMPConnection
from .protocol.constants import DEFAULT_PORT
from .query import ServerQuery


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pysamp", description="SA-MP server query and handshake tool")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    query = subparsers.add_parser("query", help="Fetch server name, players and game mode")
    query.add_argument("host", help="Server IPv4 address")
    query.add_argument("--port", type=int, default=DEFAULT_PORT, help="Server port")
    query.add_argument("--timeout", type=float, help="Receive timeout in seconds")

    connect = subparsers.add_parser("connect", help="Attempt the login handshake")
    connect.add_argument("host", help="Server hostname or IP")
    connect.add_argument("username", help="Username to login with")
    connect.add_argument("--password", default="", help="Server password")
    connect.add_argument("--port", type=int, default=DEFAULT_PORT, help="Server port")
    connect.add_argument("--timeout", type=float, help="Connect/read timeout in seconds")

    return parser


def run_query(args, config: ClientConfig) -> int:
    host, port = validate_host(args.host), validate_port(args.port)
    if args.timeout is not None:
        config.query_timeout = args.timeout

    info = ServerQuery(config.validate()).get_server_info(host, port)
    if info is None:
        print("server unreachable")
        return 1

    print(f"Server:    {info.hostname}")
    print(f"Address:   {info.address_string}")
    print(f"Players:   {info.player_count_string}")
    print(f"Game mode: {info.game_mode}")
    print(f"Language:  {info.language}")
    print(f"Password:  {'yes' if info.is_passworded else 'no'}")
    return 0


def run_connect(args, config: ClientConfig) -> int:
    host, port = validate_host(args.host), validate_port(args.port)
    if args.timeout is not None:
        config.connect_timeout = args.timeout

    with SAMPConnection(host, port, config.validate()) as conn:
        outcome = conn.connect(args.username, args.password)

    if outcome.is_success:
        print("connected")
        return 0
    print(f"connection failed: {outcome.reason}")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = ClientConfig(log_level="DEBUG" if args.debug else "WARNING")
    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        if args.command == "query":
            return run_query(args, config)
        return run_connect(args, config)
    except ConfigValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
