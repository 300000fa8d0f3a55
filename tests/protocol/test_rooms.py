from __future__ import annotations

from fastapi.testclient import TestClient

from clichess.protocol.http.app import create_app


def test_join_receives_seat_and_state() -> None:
    with TestClient(create_app()) as client:
        with client.websocket_connect("/ws/rooms/r1") as ws:
            msg = ws.receive_json()
            assert msg["type"] == "joined"
            assert msg["seat"] == "w"
            assert msg["member_id"]
            assert msg["state"]["turn"] == "w"
            assert len(msg["state"]["legal_moves"]) == 20


def test_accepted_move_is_broadcast_to_every_member() -> None:
    with TestClient(create_app()) as client:
        with client.websocket_connect("/ws/rooms/r1") as white:
            assert white.receive_json()["seat"] == "w"
            with client.websocket_connect("/ws/rooms/r1") as black:
                assert black.receive_json()["seat"] == "b"

                white.send_json({"type": "move", "move": "e2e4"})
                for ws in (white, black):
                    msg = ws.receive_json()
                    assert msg["type"] == "state"
                    assert msg["state"]["turn"] == "b"
                    assert msg["state"]["last_move"] == "e2e4"

                black.send_json({"type": "move", "move": "e7e5"})
                for ws in (white, black):
                    assert ws.receive_json()["state"]["move_history"] == ["e2e4", "e7e5"]


def test_rejections_go_to_the_sender_only() -> None:
    with TestClient(create_app()) as client:
        with client.websocket_connect("/ws/rooms/r2") as white:
            white.receive_json()
            with client.websocket_connect("/ws/rooms/r2") as black:
                black.receive_json()

                black.send_json({"type": "move", "move": "e7e5"})
                assert black.receive_json() == {"type": "error", "message": "not your turn"}

                white.send_json({"type": "move", "move": "e2e5"})
                assert white.receive_json() == {"type": "error", "message": "illegal move"}

                white.send_json({"type": "move", "move": "e7e5"})
                assert white.receive_json() == {"type": "error", "message": "not your piece"}

                white.send_json({"type": "move", "move": "e3e4"})
                assert white.receive_json()["message"] == "no piece at e3"

                white.send_json({"type": "move", "move": "d2d4"})
                # Black's next frame is the broadcast, not any of White's errors.
                assert black.receive_json()["type"] == "state"
                assert white.receive_json()["type"] == "state"


def test_spectators_chat_but_cannot_move() -> None:
    with TestClient(create_app()) as client:
        with client.websocket_connect("/ws/rooms/r3") as white:
            white.receive_json()
            with client.websocket_connect("/ws/rooms/r3") as black:
                black.receive_json()
                with client.websocket_connect("/ws/rooms/r3") as watcher:
                    joined = watcher.receive_json()
                    assert joined["seat"] is None

                    watcher.send_json({"type": "move", "move": "e2e4"})
                    assert watcher.receive_json() == {
                        "type": "error",
                        "message": "spectators cannot move",
                    }

                    watcher.send_json({"type": "chat", "text": "good luck"})
                    for ws in (white, black, watcher):
                        msg = ws.receive_json()
                        assert msg["type"] == "chat"
                        assert msg["text"] == "good luck"
                        assert msg["member_id"] == joined["member_id"]


def test_malformed_frame_is_rejected() -> None:
    with TestClient(create_app()) as client:
        with client.websocket_connect("/ws/rooms/r4") as ws:
            ws.receive_json()
            ws.send_text("not json")
            assert ws.receive_json() == {"type": "error", "message": "invalid message"}
            ws.send_json({"type": "resign"})
            assert ws.receive_json() == {"type": "error", "message": "invalid message"}


def test_seat_is_freed_when_a_player_leaves() -> None:
    with TestClient(create_app()) as client:
        with client.websocket_connect("/ws/rooms/r5") as white:
            white.receive_json()
            with client.websocket_connect("/ws/rooms/r5") as black:
                assert black.receive_json()["seat"] == "b"
            with client.websocket_connect("/ws/rooms/r5") as again:
                assert again.receive_json()["seat"] == "b"
