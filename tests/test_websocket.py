"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json
import time

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from classic_snake.config import GameConfig
from classic_snake.server.app import create_app


@pytest.fixture()
def tc(tmp_path):
    """Starlette TestClient running the app lifespan on one event loop."""
    config = GameConfig(scores_path=str(tmp_path / "scores.json"))
    with TestClient(create_app(config)) as client:
        yield client


def _create_session(tc, tick_ms=2000, grid_size=10):
    resp = tc.post(
        "/sessions", json={"tick_ms": tick_ms, "grid_size": grid_size},
    )
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        sid = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["grid_size"] == 10
            assert state["snake"] == [[5, 5], [4, 5], [3, 5]]
            assert state["status"] == "running"

    def test_send_direction_accepted(self, tc):
        sid = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "up"}))
            ws.send_text(json.dumps({"action": "pause"}))
            state = json.loads(ws.receive_text())
            assert state["queued_direction"] == "up"
            assert state["paused"] is True

    def test_key_messages(self, tc):
        sid = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"key": "ArrowDown"}))
            state = json.loads(ws.receive_text())
            assert state["queued_direction"] == "down"
            ws.send_text(json.dumps({"key": " "}))
            state = json.loads(ws.receive_text())
            assert state["paused"] is True

    def test_restart_action(self, tc):
        sid = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "down"}))
            ws.send_text(json.dumps({"action": "restart"}))
            state = json.loads(ws.receive_text())
            assert state["queued_direction"] == "right"

    def test_malformed_messages_ignored(self, tc):
        sid = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            ws.receive_text()
            ws.send_text("not json")
            ws.send_text(json.dumps([1, 2, 3]))
            ws.send_text(json.dumps({"direction": 5}))
            ws.send_text(json.dumps({"action": "explode"}))
            ws.send_text(json.dumps({"action": "pause"}))
            state = json.loads(ws.receive_text())
            assert state["paused"] is True
            assert state["queued_direction"] == "right"

    def test_clock_broadcasts_ticks(self, tc):
        sid = _create_session(tc, tick_ms=50, grid_size=20)
        with tc.websocket_connect(f"/sessions/{sid}/play") as ws:
            first = json.loads(ws.receive_text())
            second = json.loads(ws.receive_text())
            assert second["snake"][0][0] > first["snake"][0][0]

    def test_clock_reaches_game_over_and_records(self, tc):
        sid = _create_session(tc, tick_ms=50, grid_size=4)
        state = tc.get(f"/sessions/{sid}").json()["state"]
        for _ in range(100):
            if state["game_over"]:
                break
            time.sleep(0.05)
            state = tc.get(f"/sessions/{sid}").json()["state"]
        assert state["game_over"]
        rows = tc.get("/leaderboard").json()
        assert len(rows) == 1
        assert rows[0]["score"] == state["score"]

    def test_unknown_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect):
            with tc.websocket_connect("/sessions/nope/play") as ws:
                ws.receive_text()
