import argparse
import asyncio
import logging

from cardtable.models import TableConfig
from .server import TableServer


def main() -> None:
    parser = argparse.ArgumentParser(description="Card table demo host server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument("--seats", type=int, default=6)
    parser.add_argument("--starting-stack", type=int, default=200)
    parser.add_argument("--bet-size", type=int, default=25)
    parser.add_argument("--seed", type=int, default=42, help="Seed of the first deal")
    parser.add_argument(
        "--hole-cards",
        type=int,
        choices=(1, 2),
        default=1,
        help="Cards per seat (2 deals in two passes around the table)",
    )
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = TableConfig(
        seats=args.seats,
        starting_stack=args.starting_stack,
        bet_size=args.bet_size,
        initial_seed=args.seed,
        hole_cards=args.hole_cards,
    )
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))

    server = TableServer(config)
    asyncio.run(server.start(host=args.host, port=args.port))


if __name__ == "__main__":
    main()
