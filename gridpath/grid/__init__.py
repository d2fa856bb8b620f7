"""Grid state and step playback for the pathfinding editor."""

from gridpath.grid.animation import (
    AnimationPlayer,
    ManualScheduler,
    PlaybackState,
    Scheduler,
    tick_delay_ms,
)
from gridpath.grid.contracts import (
    ErrorResponse,
    GridSnapshot,
    Heuristic,
    NodeSnapshot,
    PathfindRequest,
    Point,
    SolverResult,
    Step,
)
from gridpath.grid.grid_model import GridModel, Node

__all__ = [
    "AnimationPlayer",
    "ErrorResponse",
    "GridModel",
    "GridSnapshot",
    "Heuristic",
    "ManualScheduler",
    "Node",
    "NodeSnapshot",
    "PathfindRequest",
    "PlaybackState",
    "Point",
    "Scheduler",
    "SolverResult",
    "Step",
    "tick_delay_ms",
]
