"""Protean Engine runner for the MiniWorld domain.

Starts the Engine workers that process events asynchronously in
production (outbox publishing and the order email handler).

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine

from miniworld.bootstrap import install_services
from miniworld.domain import miniworld
from miniworld.utils.logging import configure_logging


async def run():
    configure_logging(log_file_prefix="miniworld_engine")
    miniworld.init()
    install_services()
    await Engine(miniworld).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
