"""Solver client interface and error types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from gridpath.grid.contracts import PathfindRequest, SolverResult


class SolverError(Exception):
    """Base class for failures reaching or using the pathfinding solver."""


class SolverTransportError(SolverError):
    """The solver could not be reached or did not answer in time."""


class SolverResponseError(SolverError):
    """The solver answered with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SolverFormatError(SolverError):
    """The solver answered with a body that is not a valid result."""


class SolverClient(Protocol):
    async def solve(self, request: PathfindRequest) -> SolverResult:
        """Return the search result for one grid snapshot."""

    def close(self) -> None:
        """Release any connection held by the client."""


@dataclass(frozen=True)
class SolverConfig:
    base_url: str
    timeout: float = 10.0
