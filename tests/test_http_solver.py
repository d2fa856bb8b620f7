import asyncio
from typing import Any

import pytest
import requests

from gridpath.grid.contracts import PathfindRequest
from gridpath.grid.grid_model import GridModel
from gridpath.solver.base import (
    SolverConfig,
    SolverFormatError,
    SolverResponseError,
    SolverTransportError,
)
from gridpath.solver.http_solver import HttpSolverClient


class FakeResponse:
    def __init__(self, status_code: int, body: Any = None, *, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, *, json: Any, timeout: float) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response

    def close(self) -> None:
        self.closed = True


def _client(session: FakeSession) -> HttpSolverClient:
    return HttpSolverClient(
        SolverConfig(base_url="http://solver.test/", timeout=2.5), session=session
    )


def _request() -> PathfindRequest:
    return PathfindRequest(grid=GridModel(6).snapshot(), heuristic="manhattan")


def test_posts_snapshot_and_parses_result() -> None:
    body = {
        "success": True,
        "path": [{"x": 1, "y": 1}, {"x": 2, "y": 1}],
        "explored_nodes": None,
        "path_length": 1.0,
        "nodes_explored": 2,
        "steps": [
            {
                "current_node": {"x": 1, "y": 1},
                "open_set": None,
                "closed_set": [{"x": 1, "y": 1}],
                "is_complete": False,
            }
        ],
    }
    session = FakeSession(FakeResponse(200, body))

    result = _client(session).solve_sync(_request())

    call = session.calls[0]
    assert call["url"] == "http://solver.test/api/pathfind"
    assert call["timeout"] == 2.5
    assert call["json"]["grid"]["width"] == 6
    assert call["json"]["grid"]["start"] == {"x": 1, "y": 1}
    assert call["json"]["grid"]["nodes"][1][1]["is_start"] is True
    assert call["json"]["animate"] is True
    assert result.success
    assert result.explored_nodes == []
    assert result.steps is not None and result.steps[0].open_set == []


def test_error_status_uses_error_body() -> None:
    session = FakeSession(FakeResponse(400, {"error": "Invalid start point"}))

    with pytest.raises(SolverResponseError) as excinfo:
        _client(session).solve_sync(_request())
    assert str(excinfo.value) == "Invalid start point"
    assert excinfo.value.status_code == 400


def test_error_status_without_body_reports_code() -> None:
    session = FakeSession(FakeResponse(502, text="Bad gateway"))

    with pytest.raises(SolverResponseError, match="HTTP 502"):
        _client(session).solve_sync(_request())


def test_non_json_body_is_format_error() -> None:
    session = FakeSession(FakeResponse(200, text="<html>"))

    with pytest.raises(SolverFormatError):
        _client(session).solve_sync(_request())


def test_malformed_result_is_format_error() -> None:
    session = FakeSession(FakeResponse(200, {"path": []}))

    with pytest.raises(SolverFormatError):
        _client(session).solve_sync(_request())


def test_timeout_maps_to_transport_error() -> None:
    session = FakeSession(error=requests.exceptions.Timeout("read timed out"))

    with pytest.raises(SolverTransportError, match="Request timed out"):
        _client(session).solve_sync(_request())


def test_connection_error_maps_to_transport_error() -> None:
    session = FakeSession(error=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(SolverTransportError, match="Network error: refused"):
        _client(session).solve_sync(_request())


def test_async_solve_runs_in_thread() -> None:
    session = FakeSession(FakeResponse(200, {"success": False, "nodes_explored": 4}))

    result = asyncio.run(_client(session).solve(_request()))

    assert not result.success
    assert result.nodes_explored == 4


def test_close_closes_session() -> None:
    session = FakeSession()
    _client(session).close()
    assert session.closed
