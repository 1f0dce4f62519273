#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import websockets
from websockets.asyncio.client import ClientConnection

logging.basicConfig(level=logging.INFO)

# ManualClient drives the table host from a terminal prompt the way a renderer
# would drive it from buttons: redeal, bet per seat, chip demo.

HELP = """Commands:
  r            redeal (new seed, new cards, bets and pot reset)
  b SEAT [N]   bet from SEAT (1-based), N chips or the table bet size
  c            chip movement demo
  s            request the current table state
  q            quit"""


@dataclass
class SeatState:
    label: str
    cards: List[str] = field(default_factory=list)
    stack: int = 0
    bet: int = 0


@dataclass
class TableView:
    round: int = 0
    seed: int = 0
    pot: int = 0
    seats: List[SeatState] = field(default_factory=list)


class ManualClient:
    def __init__(self, url: str, spectator: bool = False) -> None:
        self.url = url
        self.spectator = spectator
        self.websocket: Optional[ClientConnection] = None
        self.view = TableView()
        self.recent_events: deque[str] = deque(maxlen=6)

    async def run(self) -> None:
        async with websockets.connect(self.url) as ws:
            self.websocket = ws
            await self._send({"type": "hello", "v": 1, "role": "spectator" if self.spectator else "player"})
            reader = asyncio.create_task(self._loop())
            try:
                await self._prompt_loop()
            finally:
                reader.cancel()

    async def _loop(self) -> None:
        assert self.websocket is not None
        async for raw in self.websocket:
            self._print_message(json.loads(raw))

    async def _prompt_loop(self) -> None:
        print(HELP)
        while True:
            line = await asyncio.to_thread(input, "> ")
            payload = self._parse_command(line.strip())
            if payload is None:
                continue
            if payload.get("type") == "quit":
                return
            await self._send(payload)

    def _parse_command(self, line: str) -> Optional[Dict[str, Any]]:
        if not line:
            return None
        parts = line.split()
        command = parts[0].lower()
        if command == "q":
            return {"type": "quit"}
        if command == "r":
            return {"type": "redeal"}
        if command == "c":
            return {"type": "chips_demo"}
        if command == "s":
            return {"type": "state"}
        if command == "b":
            try:
                seat = int(parts[1]) - 1
                amount = int(parts[2]) if len(parts) > 2 else None
            except (IndexError, ValueError):
                print("Usage: b SEAT [AMOUNT]")
                return None
            payload: Dict[str, Any] = {"type": "bet", "seat": seat}
            if amount is not None:
                payload["amount"] = amount
            return payload
        print(HELP)
        return None

    def _print_message(self, msg: Dict[str, Any]) -> None:
        msg_type = msg.get("type", "?")
        print(f"\n>>> {msg_type.upper()}")
        if msg_type == "welcome":
            print(f"Table {msg['table_id']} as {msg['role']}, config: {json.dumps(msg['config'])}")
            self._apply_state(msg.get("state", {}))
            self._render_table()
        elif msg_type == "table":
            self._apply_state(msg)
            self._render_table()
        elif msg_type == "deal":
            order = ", ".join(f"{target['id']}" for target in msg.get("targets", []))
            self.recent_events.append(f"Round {msg['round']} dealt (seed {msg['seed']})")
            print(f"Deal order: {order}")
        elif msg_type == "chips":
            counts = ", ".join(f"seat {t['seat'] + 1}x{t['chip_count']}" for t in msg.get("targets", []))
            self.recent_events.append(f"Chips ({msg.get('reason')}): {counts}")
            print(f"Chips: {counts}")
        elif msg_type == "bet_rejected":
            print(f"Seat {msg['seat'] + 1} cannot bet {msg['amount']} (stack {msg['stack']})")
        elif msg_type == "error":
            print(f"Error {msg.get('code')}: {msg.get('msg')}")
        else:
            print(json.dumps(msg, indent=2))

    def _apply_state(self, state: Dict[str, Any]) -> None:
        if not state:
            return
        self.view = TableView(
            round=state.get("round", 0),
            seed=state.get("seed", 0),
            pot=state.get("pot", 0),
            seats=[
                SeatState(
                    label=entry["label"],
                    cards=list(entry.get("cards", [])),
                    stack=entry.get("stack", 0),
                    bet=entry.get("bet", 0),
                )
                for entry in state.get("seats", [])
            ],
        )

    def _render_table(self) -> None:
        view = self.view
        print(f"Round {view.round} | seed={view.seed} | Pot={view.pot}")
        for seat in view.seats:
            cards = " ".join(seat.cards) or "--"
            print(f"  {seat.label:<8} cards={cards:<6} stack={seat.stack:>5} bet={seat.bet:>5}")
        if self.recent_events:
            print("Recent:")
            for entry in reversed(self.recent_events):
                print(f"  {entry}")

    async def _send(self, payload: Dict[str, Any]) -> None:
        assert self.websocket is not None
        await self.websocket.send(json.dumps(payload))


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Card table demo manual client")
    parser.add_argument("--url", default="ws://127.0.0.1:8765")
    parser.add_argument("--spectator", action="store_true", help="Connect read-only")
    return parser.parse_args(argv)


def main(argv: list[str]) -> None:
    args = parse_args(argv)
    client = ManualClient(url=args.url, spectator=args.spectator)
    try:
        asyncio.run(client.run())
    except KeyboardInterrupt:
        print("\nSession closed")


if __name__ == "__main__":
    main(sys.argv[1:])
