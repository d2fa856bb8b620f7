"""HTTP client for the remote pathfinding service."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests
from pydantic import ValidationError

from gridpath.grid.contracts import ErrorResponse, PathfindRequest, SolverResult
from gridpath.solver.base import (
    SolverClient,
    SolverConfig,
    SolverFormatError,
    SolverResponseError,
    SolverTransportError,
)

logger = logging.getLogger(__name__)

PATHFIND_ENDPOINT = "/api/pathfind"


class HttpSolverClient(SolverClient):
    def __init__(
        self,
        config: SolverConfig,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.config.base_url.rstrip("/") + PATHFIND_ENDPOINT

    async def solve(self, request: PathfindRequest) -> SolverResult:
        # requests blocks; keep the event loop free for the editor.
        return await asyncio.to_thread(self.solve_sync, request)

    def solve_sync(self, request: PathfindRequest) -> SolverResult:
        payload = request.model_dump(mode="json")
        logger.info(
            "POST %s grid=%dx%d heuristic=%s animate=%s",
            self.url,
            request.grid.width,
            request.grid.height,
            request.heuristic,
            request.animate,
        )
        try:
            response = self._session.post(
                self.url, json=payload, timeout=self.config.timeout
            )
        except requests.exceptions.Timeout as exc:
            logger.warning("Solver request timed out: %s", exc)
            raise SolverTransportError("Request timed out") from exc
        except requests.exceptions.RequestException as exc:
            logger.warning("Solver request failed: %s", exc)
            raise SolverTransportError(f"Network error: {exc}") from exc

        if not response.ok:
            message = _error_message(response)
            logger.warning("Solver returned %s: %s", response.status_code, message)
            raise SolverResponseError(message, status_code=response.status_code)

        body = _json_body(response)
        try:
            result = SolverResult.model_validate(body)
        except ValidationError as exc:
            raise SolverFormatError(f"Malformed solver response: {exc}") from exc
        logger.info(
            "Solver result: success=%s length=%.2f explored=%d steps=%d",
            result.success,
            result.path_length,
            result.nodes_explored,
            len(result.steps or []),
        )
        return result

    def close(self) -> None:
        self._session.close()


def _json_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise SolverFormatError("Solver response is not JSON") from exc


def _error_message(response: requests.Response) -> str:
    try:
        return ErrorResponse.model_validate(response.json()).error
    except (ValueError, ValidationError):
        return f"HTTP {response.status_code}"
