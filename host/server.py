from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

import websockets
from websockets.asyncio.server import ServerConnection, serve

from drawpoker.dealer import FiveDrawDealer
from drawpoker.errors import DealerError
from drawpoker.models import Player, TableConfig
from drawpoker.session import GameSession

LOGGER = logging.getLogger("draw_host")

# HostServer glues game sessions to WebSocket clients. Every network concern
# lives here; the dealer stays synchronous and never sees a socket.


@dataclass
class ClientSession:
    player: Player
    websocket: ServerConnection
    game_id: Optional[int] = None


class HostServer:
    def __init__(self, config: TableConfig, tables: int = 1) -> None:
        self.config = config
        self.games: Dict[int, GameSession] = {
            idx: GameSession(idx, FiveDrawDealer(config)) for idx in range(tables)
        }
        self.sessions: Dict[int, ClientSession] = {}
        # Single writer: every dealer call happens under this lock.
        self.lock = asyncio.Lock()
        self.next_player_id = 1

    async def start(self, host: str = "0.0.0.0", port: int = 8765) -> None:
        async with serve(self._handle_connection, host, port):
            LOGGER.info("Dealer host listening on %s:%s", host, port)
            await asyncio.Future()

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        # First message must be "hello" so we know who we are talking to.
        hello = await self._read_message(websocket)
        if hello is None or hello.get("type") != "hello":
            await self._send_error(websocket, code="BAD_HELLO", msg="Expected hello")
            await websocket.close()
            return
        name_raw = hello.get("name")
        name = name_raw.strip() if isinstance(name_raw, str) else ""
        if not name:
            await self._send_error(websocket, code="BAD_SCHEMA", msg="name required")
            await websocket.close()
            return

        session = self._register(name, websocket)
        LOGGER.info("Player %s connected as %s", session.player.id, name)
        await self._send_json(websocket, "welcome", {
            "player_id": session.player.id,
            "config": {
                "variant": self.config.variant,
                "seats": self.config.seats,
                "starting_chips": self.config.starting_chips,
            },
        })

        try:
            async for raw in websocket:
                await self.dispatch(session, self._decode(raw))
        except websockets.ConnectionClosed:
            pass
        finally:
            if session.game_id is not None:
                await self._handle_leave(session, {})
            self.sessions.pop(session.player.id, None)
            LOGGER.info("Player %s (%s) disconnected", session.player.id, name)

    def _register(self, name: str, websocket: ServerConnection) -> ClientSession:
        player = Player(id=self.next_player_id, name=name, chips=self.config.starting_chips)
        self.next_player_id += 1
        session = ClientSession(player=player, websocket=websocket)
        self.sessions[player.id] = session
        return session

    async def dispatch(self, session: ClientSession, message: Dict[str, object]) -> None:
        handlers = {
            "list_games": self._handle_list_games,
            "join": self._handle_join,
            "leave": self._handle_leave,
            "start": self._handle_start,
            "showdown": self._handle_showdown,
        }
        msg_type = message.get("type")
        handler = handlers.get(msg_type) if isinstance(msg_type, str) else None
        if handler is None:
            await self._send_error(session.websocket, code="UNKNOWN_TYPE", msg="Unsupported message type")
            return
        try:
            await handler(session, message)
        except DealerError as exc:
            LOGGER.warning("Rejected %s from player %s: %s", message.get("type"), session.player.id, exc)
            await self._send_error(session.websocket, code=exc.code, msg=str(exc))

    async def _handle_list_games(self, session: ClientSession, message: Dict[str, object]) -> None:
        async with self.lock:
            games = [game.summary() for game in self.games.values()]
        await self._send_json(session.websocket, "games", {"games": games})

    async def _handle_join(self, session: ClientSession, message: Dict[str, object]) -> None:
        game_id = message.get("game_id")
        game = self.games.get(game_id) if isinstance(game_id, int) else None
        if game is None:
            await self._send_error(session.websocket, code="UNKNOWN_GAME", msg="No such game")
            return
        if session.game_id is not None:
            await self._send_error(session.websocket, code="ALREADY_SEATED", msg="Leave your current game first")
            return
        async with self.lock:
            pending = [other.session_id for other in self.games.values() if other.is_departing(session.player)]
            if pending:
                await self._send_error(
                    session.websocket,
                    code="LEAVE_PENDING",
                    msg=f"Still seated in game {pending[0]} until its showdown",
                )
                return
            seat = game.join(session.player)
        session.game_id = game.session_id
        LOGGER.info("Player %s took seat %s in game %s", session.player.id, seat, game.session_id)
        await self._publish_lobby(game)

    async def _handle_leave(self, session: ClientSession, message: Dict[str, object]) -> None:
        game = self._game_for(session)
        if game is None:
            await self._send_error(session.websocket, code="NOT_SEATED", msg="Not in a game")
            return
        async with self.lock:
            showdown = game.leave(session.player)
        session.game_id = None
        if showdown is not None:
            await self._broadcast(game, "showdown", showdown)
        await self._publish_lobby(game)

    async def _handle_start(self, session: ClientSession, message: Dict[str, object]) -> None:
        game = self._game_for(session)
        if game is None:
            await self._send_error(session.websocket, code="NOT_SEATED", msg="Not in a game")
            return
        async with self.lock:
            if game.dealer.in_round:
                await self._send_error(session.websocket, code="ROUND_IN_PROGRESS", msg="Round already running")
                return
            game.start_game()
            start_payload = game.dealer.start_game_payload()
            hands = {player.id: game.dealer.hand_payload(player) for player in game.dealer.players}

        await self._broadcast(game, "start_game", start_payload)
        for player_id, payload in hands.items():
            target = self.sessions.get(player_id)
            if target:
                await self._send_json(target.websocket, "hand", payload)

    async def _handle_showdown(self, session: ClientSession, message: Dict[str, object]) -> None:
        game = self._game_for(session)
        if game is None:
            await self._send_error(session.websocket, code="NOT_SEATED", msg="Not in a game")
            return
        async with self.lock:
            if not game.dealer.in_round:
                await self._send_error(session.websocket, code="NO_ROUND", msg="No round in progress")
                return
            payload = game.end_game()
        await self._broadcast(game, "showdown", payload)
        await self._publish_lobby(game)

    def _game_for(self, session: ClientSession) -> Optional[GameSession]:
        if session.game_id is None:
            return None
        return self.games.get(session.game_id)

    async def _publish_lobby(self, game: GameSession) -> None:
        async with self.lock:
            lobby = game.dealer.lobby_state()
        lobby["game_id"] = game.session_id
        await self._broadcast(game, "lobby", lobby)

    async def _broadcast(self, game: GameSession, msg_type: str, payload: Dict[str, object]) -> None:
        targets = [
            session.websocket
            for session in self.sessions.values()
            if session.game_id == game.session_id
        ]
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

    async def _read_message(self, websocket: ServerConnection) -> Optional[Dict[str, object]]:
        try:
            raw = await asyncio.wait_for(websocket.recv(), timeout=5)
        except (asyncio.TimeoutError, websockets.ConnectionClosed):
            return None
        return self._decode(raw)

    def _decode(self, raw) -> Dict[str, object]:
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return message if isinstance(message, dict) else {}
