import argparse
import asyncio
import logging

from drawpoker.models import TableConfig

from .server import HostServer

logging.basicConfig(level=logging.INFO)


def main() -> None:
    parser = argparse.ArgumentParser(description="Five-card draw dealer host")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument("--seats", type=int, default=6, help="Players per table (2-10)")
    parser.add_argument("--starting-chips", type=int, default=1_000)
    parser.add_argument("--tables", type=int, default=1, help="Number of games listed in the lobby")
    args = parser.parse_args()

    config = TableConfig(seats=args.seats, starting_chips=args.starting_chips)

    server = HostServer(config, tables=args.tables)
    asyncio.run(server.start(host=args.host, port=args.port))


if __name__ == "__main__":
    main()
