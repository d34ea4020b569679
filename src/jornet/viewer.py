"""LeaderboardApp - terminal viewer that drives the client like a game loop.

The app never awaits a request. It starts background fetches and calls
``Leaderboard.check_for_updates()`` once per frame, re-rendering only when
a new snapshot is published.
"""

from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Static

from jornet.client import Leaderboard
from jornet.config import LeaderboardConfig
from jornet.models import Score

POLL_INTERVAL = 1 / 30


class LeaderboardApp(App[None]):
    """Shows the leaderboard in server order. Press 'r' to refresh."""

    TITLE = "Jornet Leaderboard"
    ENABLE_COMMAND_PALETTE = False

    DEFAULT_CSS = """
    #status {
        height: 1;
        padding: 0 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("r", "refresh", "Refresh"),
        Binding("escape", "quit", "Quit", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, leaderboard: Leaderboard) -> None:
        super().__init__()
        self.leaderboard = leaderboard
        self._waiting = False
        self.status_message = "Loading leaderboard..."

    def compose(self) -> ComposeResult:
        yield Static(self.status_message, id="status")
        yield DataTable(id="scores-table")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#scores-table", DataTable)
        table.add_column("#", key="rank", width=4)
        table.add_column("Player", key="player", width=24)
        table.add_column("Score", key="score", width=10)
        table.add_column("Meta", key="meta", width=24)
        table.add_column("When", key="timestamp", width=26)
        table.cursor_type = "row"
        table.zebra_stripes = True

        self.set_interval(POLL_INTERVAL, self.poll_leaderboard)
        self._start_refresh()

    def poll_leaderboard(self) -> None:
        if self.leaderboard.check_for_updates():
            self._waiting = False
            self._show_scores(self.leaderboard.scores)
        elif self._waiting and not self.leaderboard.has_pending_work:
            self._waiting = False
            self._set_status("Could not load the leaderboard. Press 'r' to retry.")

    def _start_refresh(self) -> None:
        self._waiting = True
        self.leaderboard.refresh_leaderboard()

    def _show_scores(self, scores: list[Score]) -> None:
        table = self.query_one("#scores-table", DataTable)
        table.clear()
        for rank, score in enumerate(scores, start=1):
            table.add_row(
                str(rank),
                score.player,
                f"{score.score:g}",
                score.meta or "--",
                score.timestamp,
            )
        self._set_status(f"{len(scores)} scores" if scores else "No scores yet")

    def _set_status(self, message: str) -> None:
        self.status_message = message
        self.query_one("#status", Static).update(message)

    def action_refresh(self) -> None:
        self._set_status("Refreshing...")
        self._start_refresh()

    async def on_unmount(self) -> None:
        await self.leaderboard.aclose()


def main() -> None:
    """Entry point for the viewer."""
    leaderboard = LeaderboardConfig.from_env().build()
    LeaderboardApp(leaderboard).run()
