#!/usr/bin/env python3
"""
Async/Await Example
===================

Queries several SA-MP servers at once and prints a small server browser,
then tries the login handshake on the first server that answered.

Usage:
    python async_example.py 127.0.0.1:7777 192.168.1.10:7778 --username Player
"""

import sys
import asyncio
import argparse
import logging

# Add parent directory to path
sys.path.insert(0, '..')

from pysamp import AsyncSAMPConnection, AsyncServerQuery, ClientConfig

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')


def parse_address(text):
    host, _, port = text.partition(':')
    return host, int(port or 7777)


async def browse(addresses, config):
    """Query every address concurrently"""
    async with AsyncServerQuery(config) as query:
        results = await asyncio.gather(*(query.get_server_info(h, p) for h, p in addresses))

    print(f"{'Server Name':<30} {'Players':<10} {'Mode':<15} {'Address':<22}")
    print("=" * 80)
    for (host, port), info in zip(addresses, results):
        if info is None:
            print(f"{'(unreachable)':<30} {'-':<10} {'-':<15} {host}:{port}")
        else:
            lock = "*" if info.is_passworded else ""
            print(f"{(lock + info.hostname)[:29]:<30} {info.player_count_string:<10} "
                  f"{info.game_mode[:14]:<15} {info.address_string:<22}")
    return [info for info in results if info is not None]


async def main():
    parser = argparse.ArgumentParser(description="Async pysamp server browser")
    parser.add_argument("servers", nargs="+", help="host:port pairs")
    parser.add_argument("--username", default="Player", help="Name for the handshake")
    parser.add_argument("--password", default="", help="Server password")
    args = parser.parse_args()

    config = ClientConfig(query_timeout=2.0)
    online = await browse([parse_address(s) for s in args.servers], config)
    if not online:
        print("No servers answered.")
        return 1

    target = online[0]
    print(f"\nConnecting to {target.hostname}...")
    async with AsyncSAMPConnection(target.ip, target.port, config) as conn:
        outcome = await conn.connect(args.username, args.password)
        if outcome.is_success:
            print("Connected!")
        else:
            print(f"Connection failed: {outcome.reason}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nStopped by user")
