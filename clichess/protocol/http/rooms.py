"""Websocket rooms: two seated players share one game, spectators watch."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from ...engine.errors import ChessError
from ...engine.game import GameState
from ...engine.move import move_to_str
from ...engine.notation import parse_move
from ...engine.piece import Color
from .schemas import RoomMessage, state_view


logger = logging.getLogger(__name__)


@dataclass
class Room:
    room_id: str
    state: GameState = field(default_factory=GameState.new)
    members: Dict[str, WebSocket] = field(default_factory=dict)
    seats: Dict[Color, str] = field(default_factory=dict)

    def seat_of(self, member_id: str) -> Optional[Color]:
        for color, holder in self.seats.items():
            if holder == member_id:
                return color
        return None


class RoomRelay:
    """Registry of rooms; membership and moves are serialized by one lock.

    The first two members to join a room are seated as White then Black.
    Later members are spectators and may only chat. A room is dropped once
    its last member leaves.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._rooms: Dict[str, Room] = {}

    def room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    async def join(self, room_id: str, websocket: WebSocket) -> str:
        member_id = str(uuid.uuid4())
        async with self._lock:
            room = self._rooms.setdefault(room_id, Room(room_id=room_id))
            room.members[member_id] = websocket
            seat = None
            for color in (Color.WHITE, Color.BLACK):
                if color not in room.seats:
                    room.seats[color] = member_id
                    seat = color
                    break
            logger.info(
                "room join",
                extra={
                    "room_id": room_id,
                    "member_id": member_id,
                    "seat": seat.value if seat else None,
                    "members": len(room.members),
                },
            )
            await websocket.send_json(
                {
                    "type": "joined",
                    "member_id": member_id,
                    "seat": seat.value if seat else None,
                    "state": state_view(room.state).model_dump(),
                }
            )
        return member_id

    async def leave(self, room_id: str, member_id: str) -> None:
        async with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return
            room.members.pop(member_id, None)
            seat = room.seat_of(member_id)
            if seat is not None:
                del room.seats[seat]
            logger.info(
                "room leave",
                extra={"room_id": room_id, "member_id": member_id, "members": len(room.members)},
            )
            if not room.members:
                del self._rooms[room_id]

    async def handle(self, room_id: str, member_id: str, raw: str) -> None:
        """Decode one frame from ``member_id`` and act on it."""
        async with self._lock:
            room = self._rooms.get(room_id)
            if room is None or member_id not in room.members:
                return
            try:
                message = RoomMessage.model_validate_json(raw)
            except ValidationError:
                await self._send(room, member_id, {"type": "error", "message": "invalid message"})
                return

            if message.type == "chat":
                await self._broadcast(
                    room, {"type": "chat", "member_id": member_id, "text": message.text or ""}
                )
                return

            reason = self._try_move(room, member_id, message.move or "")
            if reason is not None:
                logger.info(
                    "room move rejected",
                    extra={"room_id": room_id, "member_id": member_id, "reason": reason},
                )
                await self._send(room, member_id, {"type": "error", "message": reason})
                return
            await self._broadcast(
                room, {"type": "state", "state": state_view(room.state).model_dump()}
            )

    def _try_move(self, room: Room, member_id: str, text: str) -> Optional[str]:
        """Play ``text`` for ``member_id``; return a rejection reason or None."""
        state = room.state
        seat = room.seat_of(member_id)
        if seat is None:
            return "spectators cannot move"
        if seat is not state.turn:
            return "not your turn"
        try:
            move = parse_move(text, state.board)
        except ChessError as e:
            return str(e)
        piece = state.board.piece_at(move.from_square)
        if piece is None or piece.color is not seat:
            return "not your piece"
        if not state.is_move_valid(move):
            return "illegal move"
        state.execute_move(move)
        logger.info(
            "room move",
            extra={"room_id": room.room_id, "member_id": member_id, "move": move_to_str(move)},
        )
        return None

    async def _send(self, room: Room, member_id: str, message: Dict[str, Any]) -> bool:
        """Send to one member; a member whose socket is gone is dropped."""
        websocket = room.members.get(member_id)
        if websocket is None:
            return False
        try:
            await websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError) as e:
            self._drop(room, member_id, reason=str(e) or type(e).__name__)
            return False
        return True

    async def _broadcast(self, room: Room, message: Dict[str, Any]) -> None:
        for member_id in list(room.members):
            await self._send(room, member_id, message)

    def _drop(self, room: Room, member_id: str, reason: str) -> None:
        room.members.pop(member_id, None)
        seat = room.seat_of(member_id)
        if seat is not None:
            del room.seats[seat]
        logger.info(
            "room member dropped",
            extra={"room_id": room.room_id, "member_id": member_id, "reason": reason},
        )
        if not room.members and self._rooms.get(room.room_id) is room:
            del self._rooms[room.room_id]


def create_room_router(relay: RoomRelay) -> APIRouter:
    router = APIRouter()

    @router.websocket("/ws/rooms/{room_id}")
    async def room_websocket(websocket: WebSocket, room_id: str) -> None:
        await websocket.accept()
        member_id = await relay.join(room_id, websocket)
        try:
            while True:
                raw = await websocket.receive_text()
                await relay.handle(room_id, member_id, raw)
        except WebSocketDisconnect:
            return
        finally:
            await relay.leave(room_id, member_id)

    return router
