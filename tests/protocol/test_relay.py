from __future__ import annotations

import asyncio
from typing import Any, Dict, List

from clichess.engine.piece import Color
from clichess.protocol.http.rooms import RoomRelay


class _Peer:
    """Stands in for an accepted websocket; records what the relay sends."""

    def __init__(self) -> None:
        self.sent: List[Dict[str, Any]] = []
        self.closed = False

    async def send_json(self, data: Dict[str, Any]) -> None:
        if self.closed:
            raise RuntimeError('Cannot call "send" once a close message has been sent.')
        self.sent.append(data)


def test_move_survives_a_closed_opponent() -> None:
    async def scenario() -> None:
        relay = RoomRelay()
        white, black = _Peer(), _Peer()
        ma = await relay.join("r", white)
        mb = await relay.join("r", black)
        black.closed = True

        await relay.handle("r", ma, '{"type":"move","move":"e2e4"}')

        assert white.sent[-1]["type"] == "state"
        assert white.sent[-1]["state"]["last_move"] == "e2e4"
        room = relay.room("r")
        assert room is not None
        assert mb not in room.members
        assert Color.BLACK not in room.seats
        assert room.seats[Color.WHITE] == ma

        # The freed seat goes to the next joiner.
        late = _Peer()
        await relay.join("r", late)
        assert late.sent[0]["seat"] == "b"

        # A later leave for the dropped member is harmless.
        await relay.leave("r", mb)
        assert relay.room("r") is room

    asyncio.run(scenario())


def test_room_is_removed_when_its_last_member_is_dropped() -> None:
    async def scenario() -> None:
        relay = RoomRelay()
        peer = _Peer()
        member = await relay.join("solo", peer)
        peer.closed = True

        await relay.handle("solo", member, '{"type":"chat","text":"hi"}')

        assert relay.room("solo") is None

    asyncio.run(scenario())
