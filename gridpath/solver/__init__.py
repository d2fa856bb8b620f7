"""Pathfinding solver backends."""

from gridpath.solver.base import (
    SolverClient,
    SolverConfig,
    SolverError,
    SolverFormatError,
    SolverResponseError,
    SolverTransportError,
)
from gridpath.solver.http_solver import HttpSolverClient
from gridpath.solver.local_solver import LocalSolver

__all__ = [
    "HttpSolverClient",
    "LocalSolver",
    "SolverClient",
    "SolverConfig",
    "SolverError",
    "SolverFormatError",
    "SolverResponseError",
    "SolverTransportError",
]
