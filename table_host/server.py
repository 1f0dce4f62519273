from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Set

import websockets
from websockets.asyncio.server import ServerConnection

from cardtable.models import TableConfig
from cardtable.table import TableEngine

LOGGER = logging.getLogger("table_host")

# TableServer glues the table engine to WebSocket clients (renderers, the
# manual client). Every network concern lives here; TableEngine stays pure.


class TableServer:
    def __init__(self, config: Optional[TableConfig] = None) -> None:
        self.engine = TableEngine(config)
        self.table_id = "T-1"
        self.clients: Set[ServerConnection] = set()
        self.read_only: Set[ServerConnection] = set()
        # Commands are not commutative (a bet after a redeal lands on the new
        # round), so every engine mutation runs under this lock in arrival order.
        self.lock = asyncio.Lock()
        self.chip_sequence = 0

    async def start(self, host: str = "0.0.0.0", port: int = 8765) -> None:
        await self.ensure_dealt()
        async with websockets.serve(self._handle_connection, host, port):
            LOGGER.info("Table host listening on %s:%s", host, port)
            await asyncio.Future()

    async def ensure_dealt(self) -> None:
        async with self.lock:
            if self.engine.round is not None:
                return
            ctx = self.engine.start_round()
        LOGGER.info("Initial deal: round=%s seed=%s", ctx.round_id, ctx.seed)

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        async with self.lock:
            self.clients.add(websocket)
            welcome = self._welcome_payload_locked(role="player")
        LOGGER.info("Client connected (%s total)", len(self.clients))
        await self._send_json(websocket, "welcome", welcome)

        try:
            async for raw in websocket:
                await self._handle_message(websocket, self._decode(raw))
        except websockets.ConnectionClosed:
            pass
        finally:
            async with self.lock:
                self.clients.discard(websocket)
                self.read_only.discard(websocket)
            LOGGER.info("Client disconnected (%s remaining)", len(self.clients))

    async def _handle_message(self, websocket: ServerConnection, message: Dict[str, object]) -> None:
        msg_type = message.get("type")
        if not isinstance(msg_type, str):
            LOGGER.warning("Dropping message without type: %r", message)
            await self._send_error(websocket, code="BAD_SCHEMA", msg="type required")
            return

        if msg_type == "hello":
            await self._handle_hello(websocket, message)
            return
        if msg_type == "state":
            async with self.lock:
                state = self.engine.table_state()
            await self._send_json(websocket, "table", state)
            return
        if msg_type not in ("redeal", "bet", "chips_demo"):
            LOGGER.warning("Unsupported message type %s", msg_type)
            await self._send_error(websocket, code="UNKNOWN_TYPE", msg="Unsupported message type")
            return

        if websocket in self.read_only:
            await self._send_error(websocket, code="READ_ONLY", msg="Spectators cannot issue commands")
            return

        if msg_type == "redeal":
            await self._command_redeal()
        elif msg_type == "bet":
            await self._command_bet(websocket, message)
        else:
            await self._command_chips_demo()

    async def _handle_hello(self, websocket: ServerConnection, message: Dict[str, object]) -> None:
        role_raw = message.get("role") or "player"
        role = role_raw.strip().casefold() if isinstance(role_raw, str) else "player"
        async with self.lock:
            if role == "spectator":
                self.read_only.add(websocket)
            else:
                role = "player"
                self.read_only.discard(websocket)
            welcome = self._welcome_payload_locked(role=role)
        await self._send_json(websocket, "welcome", welcome)

    async def _command_redeal(self) -> None:
        async with self.lock:
            ctx = self.engine.start_round()
            state = self.engine.table_state()
            deal_payload = {
                "round": ctx.round_id,
                "seed": ctx.seed,
                "targets": self.engine.deal_targets(),
            }
        LOGGER.info("Redealt: round=%s seed=%s", ctx.round_id, ctx.seed)
        await self._broadcast("table", state)
        await self._broadcast("deal", deal_payload)

    async def _command_bet(self, websocket: ServerConnection, message: Dict[str, object]) -> None:
        seat_idx = message.get("seat")
        amount = message.get("amount")
        if not isinstance(seat_idx, int) or isinstance(seat_idx, bool):
            await self._send_error(websocket, code="BAD_SCHEMA", msg="seat required")
            return
        if amount is not None and (not isinstance(amount, int) or isinstance(amount, bool) or amount < 0):
            await self._send_error(websocket, code="BAD_SCHEMA", msg="amount must be a non-negative integer")
            return

        async with self.lock:
            try:
                accepted = self.engine.place_bet(seat_idx, amount)
            except ValueError as exc:
                LOGGER.warning("Rejected bet seat=%s amount=%s reason=%s", seat_idx, amount, exc)
                await self._send_error(websocket, code="INVALID_SEAT", msg=str(exc))
                return
            except RuntimeError as exc:
                await self._send_error(websocket, code="NO_ROUND", msg=str(exc))
                return
            seat = self.engine.seats[seat_idx]
            size = self.engine.config.bet_size if amount is None else amount
            if not accepted:
                rejected = {"seat": seat_idx, "amount": size, "stack": seat.stack}
            else:
                self.chip_sequence += 1
                chips_payload = {
                    "reason": "bet",
                    "targets": self.engine.chip_targets_for_bet(seat_idx, self.chip_sequence, size),
                }
                state = self.engine.table_state()

        if not accepted:
            LOGGER.debug("Bet declined seat=%s amount=%s stack=%s", seat_idx, size, rejected["stack"])
            await self._send_json(websocket, "bet_rejected", rejected)
            return

        LOGGER.info("Bet seat=%s amount=%s pot=%s", seat_idx, size, state["pot"])
        await self._broadcast("table", state)
        await self._broadcast("chips", chips_payload)

    async def _command_chips_demo(self) -> None:
        async with self.lock:
            self.chip_sequence += 1
            payload = {"reason": "demo", "targets": self.engine.chip_demo_targets(self.chip_sequence)}
        await self._broadcast("chips", payload)

    def _welcome_payload_locked(self, role: str) -> Dict[str, object]:
        config = self.engine.config
        return {
            "table_id": self.table_id,
            "role": role,
            "config": {
                "seats": config.seats,
                "starting_stack": config.starting_stack,
                "bet_size": config.bet_size,
                "hole_cards": config.hole_cards,
            },
            "state": self.engine.table_state(),
        }

    async def _broadcast(self, msg_type: str, payload: Dict[str, object]) -> None:
        async with self.lock:
            targets = list(self.clients)
        if not targets:
            return
        message = self._envelope(msg_type, payload)
        await asyncio.gather(*(socket.send(message) for socket in targets), return_exceptions=True)

    async def _send_json(self, websocket: ServerConnection, msg_type: str, payload: Dict[str, object]) -> None:
        try:
            await websocket.send(self._envelope(msg_type, payload))
        except websockets.ConnectionClosed:
            pass

    async def _send_error(self, websocket: ServerConnection, code: str, msg: str) -> None:
        await self._send_json(websocket, "error", {"code": code, "msg": msg})

    def _envelope(self, msg_type: str, payload: Dict[str, object]) -> str:
        body = {"type": msg_type, "v": 1, "ts": datetime.now(timezone.utc).isoformat()}
        body.update(payload)
        return json.dumps(body)

    def _decode(self, raw: str) -> Dict[str, object]:
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return decoded if isinstance(decoded, dict) else {}
