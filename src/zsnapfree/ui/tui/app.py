"""Full-screen interactive session.

Where: src/zsnapfree/ui/tui/app.py
What: Run the key/render loop around an ``InteractionController``.
Why: Tie terminal I/O to the pure state machine without leaking it into tests.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import final

from rich.console import Console
from rich.live import Live

from zsnapfree.config.settings import KEY_POLL_INTERVAL
from zsnapfree.features.snapshots import DestroyOutcome
from zsnapfree.platform.logging import console_for, logger

from . import state as st
from .controller import InteractionController, ReclaimServiceLike
from .keys import KeyReader
from .view import render, visible_rows


@final
class TerminalSession:
    """Interactive snapshot picker bound to a terminal."""

    def __init__(
        self,
        service: ReclaimServiceLike,
        *,
        initial_selection: Collection[str] = (),
        target: str | None = None,
        console: Console | None = None,
    ) -> None:
        self.console = console or console_for(logger) or Console()
        self.target = target
        self.error: str | None = None
        self.controller = InteractionController(
            service,
            initial_selection=initial_selection,
            logger=logger,
        )

    @property
    def outcomes(self) -> tuple[DestroyOutcome, ...]:
        return self.controller.outcomes

    def run(self) -> st.Ready | None:
        """Run until the operator quits and return the last table shown."""

        controller = self.controller
        controller.start()
        height = self.console.size.height
        controller.page_size = visible_rows(height)
        shown: st.State | None = None
        self.error = None

        try:
            with KeyReader() as keys, Live(
                console=self.console,
                screen=True,
                auto_refresh=False,
                transient=True,
            ) as live:
                while not controller.finished:
                    state = controller.state
                    if isinstance(state, st.ErrorState):
                        self.error = state.message
                    elif isinstance(state, st.Ready):
                        self.error = None
                    current_height = self.console.size.height
                    if state is not shown or current_height != height:
                        height = current_height
                        controller.page_size = visible_rows(height)
                        shown = state
                        live.update(render(shown, height=height, target=self.target), refresh=True)

                    key = keys.read_key(timeout=KEY_POLL_INTERVAL)
                    if key is not None:
                        controller.handle_key(key)
                    _ = controller.process_pending()
        finally:
            controller.shutdown()

        return st.last_ready(controller.state)


__all__ = ["TerminalSession"]
