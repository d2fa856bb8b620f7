"""Textual application hosting the grid editor."""

from __future__ import annotations

import logging

from textual.app import App

from gridpath.config import AppConfig
from gridpath.render.editor_screen import EditorScreen
from gridpath.solver.base import SolverClient

logger = logging.getLogger(__name__)


class GridpathApp(App):
    """Own the solver client for the app's lifetime and host the editor."""

    TITLE = "A* Pathfinding Visualizer"

    BINDINGS = [("q", "quit", "Quit")]

    def __init__(self, *, config: AppConfig, solver: SolverClient) -> None:
        super().__init__()
        self.config = config
        self.solver = solver

    def on_mount(self) -> None:
        self.sub_title = f"{self.config.solver} solver"
        self.push_screen(EditorScreen(config=self.config, solver=self.solver))

    def on_unmount(self) -> None:
        logger.debug("Closing %s solver", self.config.solver)
        self.solver.close()


def run_editor(config: AppConfig, solver: SolverClient) -> None:
    logger.info("Starting editor with %s", config)
    GridpathApp(config=config, solver=solver).run()
