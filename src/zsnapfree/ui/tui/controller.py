"""Interaction controller driving the snapshot selection state machine.

Where: src/zsnapfree/ui/tui/controller.py
What: Map key presses to state transitions and run zfs calls off the UI thread.
Why: The render loop stays responsive while listing, dry-runs, and destroys run.
"""

from __future__ import annotations

import queue
from collections.abc import Callable, Collection
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from logging import Logger, getLogger
from typing import Any, Protocol

from zsnapfree.application.services import LoadedSnapshots
from zsnapfree.config.settings import DEFAULT_PAGE_SIZE
from zsnapfree.features.snapshots import DestroyOutcome, ReclaimReport, Snapshot

from . import state as st
from .keys import Key


class ReclaimServiceLike(Protocol):
    """Subset of the reclaim service used by the controller."""

    def load(self, requested: Collection[str] = ()) -> LoadedSnapshots:
        ...

    def recompute(self, snapshots: Any, selection: Collection[str]) -> ReclaimReport:
        ...

    def destroy(self, snapshots: Any, selection: Collection[str]) -> list[DestroyOutcome]:
        ...


class JobKind(str, Enum):
    LOAD = "load"
    RECOMPUTE = "recompute"
    DELETE = "delete"


@dataclass(slots=True, frozen=True)
class Completion:
    """Result of a background job posted back to the controller."""

    generation: int
    kind: JobKind
    payload: Any = None
    error: BaseException | None = None


@dataclass(slots=True, frozen=True)
class DeletionResult:
    outcomes: tuple[DestroyOutcome, ...]
    loaded: LoadedSnapshots | None
    error: BaseException | None = None


class InteractionController:
    """Own the interaction state and apply transitions one at a time.

    Only the thread calling :meth:`handle_key` and :meth:`process_pending`
    touches the state. Background jobs receive immutable inputs and post a
    :class:`Completion` onto a queue; completions from superseded jobs are
    dropped using a generation counter.
    """

    _service: ReclaimServiceLike
    _executor: ThreadPoolExecutor
    _completions: "queue.Queue[Completion]"
    _generation: int
    _state: st.State
    _initial_selection: tuple[str, ...]
    _outcomes: list[DestroyOutcome]
    _logger: Logger

    page_size: int

    def __init__(
        self,
        service: ReclaimServiceLike,
        *,
        initial_selection: Collection[str] = (),
        executor_factory: Callable[[], ThreadPoolExecutor] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._service = service
        self._executor = (
            executor_factory()
            if executor_factory
            else ThreadPoolExecutor(max_workers=1, thread_name_prefix="zfs-worker")
        )
        self._completions = queue.Queue()
        self._generation = 0
        self._state = st.Loading()
        self._initial_selection = tuple(initial_selection)
        self._outcomes = []
        self._logger = logger or getLogger(__name__)
        self.page_size = DEFAULT_PAGE_SIZE

    @property
    def state(self) -> st.State:
        return self._state

    @property
    def finished(self) -> bool:
        return isinstance(self._state, st.Finished)

    @property
    def outcomes(self) -> tuple[DestroyOutcome, ...]:
        """Destroy outcomes applied during this session, oldest first."""

        return tuple(self._outcomes)

    @property
    def busy(self) -> bool:
        state = self._state
        if isinstance(state, (st.Loading, st.Deleting)):
            return True
        return isinstance(state, st.Ready) and state.busy

    # Transitions -----------------------------------------------------------

    def start(self) -> None:
        """Enter ``Loading`` and request the initial listing."""

        self._state = st.Loading()
        self._dispatch_load(self._initial_selection)

    def handle_key(self, key: str) -> None:
        """Dispatch one key press according to the current state."""

        state = self._state
        if key in {"q", "Q"}:
            self.quit()
            return

        if isinstance(state, st.Ready):
            self._handle_ready_key(state, key)
        elif isinstance(state, st.ConfirmingDeletion):
            if key in {"y", "Y"}:
                self._begin_delete(state)
            elif key in {"n", "N", Key.ESCAPE}:
                self._state = st.cancel(state)
        elif isinstance(state, st.ErrorState):
            if key in {"r", "R", Key.ENTER}:
                self._retry(state)
            elif key == Key.ESCAPE:
                self._acknowledge(state)

    def quit(self) -> None:
        self._state = st.finish(self._state)
        # Invalidate whatever is still running.
        self._generation += 1

    def process_pending(self, timeout: float | None = 0.0) -> bool:
        """Apply queued completions.

        Args:
            timeout: Seconds to wait for the first completion; ``None`` blocks
                until one arrives and ``0`` only drains what is queued.

        Returns:
            True when at least one completion was applied.
        """
        try:
            if timeout == 0:
                completion = self._completions.get_nowait()
            else:
                completion = self._completions.get(timeout=timeout)
        except queue.Empty:
            return False

        applied = self._apply(completion)
        while True:
            try:
                completion = self._completions.get_nowait()
            except queue.Empty:
                return applied
            applied = self._apply(completion) or applied

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _handle_ready_key(self, ready: st.Ready, key: str) -> None:
        if key == Key.ESCAPE:
            self.quit()
        elif key in {"k", Key.UP}:
            self._state = st.move_cursor(ready, -1)
        elif key in {"j", Key.DOWN}:
            self._state = st.move_cursor(ready, 1)
        elif key in {"g", Key.HOME}:
            self._state = st.cursor_to(ready, 0)
        elif key in {"G", Key.END}:
            self._state = st.cursor_to(ready, len(ready.snapshots) - 1)
        elif key == Key.PAGE_UP:
            self._state = st.move_cursor(ready, -self.page_size)
        elif key == Key.PAGE_DOWN:
            self._state = st.move_cursor(ready, self.page_size)
        elif key in {Key.SPACE, Key.ENTER}:
            self._update_selection(st.toggle_current(ready))
        elif key == "c":
            self._update_selection(st.clear_selection(ready))
        elif key == "d":
            self._state = st.request_delete(ready)

    def _update_selection(self, ready: st.Ready) -> None:
        self._state = ready
        if ready.busy:
            self._dispatch(
                JobKind.RECOMPUTE,
                self._service.recompute,
                ready.snapshots,
                ready.selection,
            )

    def _begin_delete(self, confirming: st.ConfirmingDeletion) -> None:
        deleting = st.confirm(confirming)
        self._state = deleting
        ready = deleting.ready
        self._dispatch(JobKind.DELETE, self._delete_and_reload, ready.snapshots, ready.selection)

    def _retry(self, error: st.ErrorState) -> None:
        self._state = st.retry(error)
        self._dispatch_load(())

    def _acknowledge(self, error: st.ErrorState) -> None:
        next_state = st.acknowledge(error)
        if isinstance(next_state, st.Loading):
            self._state = next_state
            self._dispatch_load(())
        else:
            self._update_selection(next_state)

    # Background jobs -------------------------------------------------------

    def _dispatch_load(self, requested: Collection[str]) -> None:
        self._dispatch(JobKind.LOAD, self._service.load, tuple(requested))

    def _delete_and_reload(
        self,
        snapshots: tuple[Snapshot, ...],
        selection: Collection[str],
    ) -> DeletionResult:
        outcomes = tuple(self._service.destroy(snapshots, selection))
        try:
            reloaded = self._service.load(())
        except Exception as exc:
            return DeletionResult(outcomes=outcomes, loaded=None, error=exc)
        return DeletionResult(outcomes=outcomes, loaded=reloaded)

    def _dispatch(self, kind: JobKind, fn: Callable[..., Any], *args: Any) -> None:
        self._generation += 1
        generation = self._generation

        def _job() -> None:
            try:
                payload = fn(*args)
            except Exception as exc:
                self._completions.put(Completion(generation, kind, error=exc))
                return
            self._completions.put(Completion(generation, kind, payload=payload))

        _ = self._executor.submit(_job)

    def _apply(self, completion: Completion) -> bool:
        if completion.generation != self._generation or self.finished:
            self._logger.debug("Dropping stale %s completion", completion.kind.value)
            return False

        state = self._state
        if completion.error is not None:
            self._state = st.failed(self._describe(completion.error), st.last_ready(state))
            return True

        if completion.kind is JobKind.LOAD:
            loaded: LoadedSnapshots = completion.payload
            self._state = st.loaded(loaded.snapshots, loaded.report, previous=st.last_ready(state))
        elif completion.kind is JobKind.RECOMPUTE:
            if isinstance(state, st.Ready):
                self._state = st.recomputed(state, completion.payload)
        else:
            result: DeletionResult = completion.payload
            self._outcomes.extend(result.outcomes)
            previous = st.last_ready(state)
            if result.loaded is None:
                message = self._describe(result.error) if result.error else "Reload failed"
                failures = sum(1 for outcome in result.outcomes if not outcome.succeeded)
                if failures:
                    message = f"{message} ({failures} destroy failure(s))"
                self._state = st.failed(message, None)
            else:
                self._state = st.loaded(
                    result.loaded.snapshots,
                    result.loaded.report,
                    previous=previous,
                    outcomes=result.outcomes,
                )
        return True

    @staticmethod
    def _describe(error: BaseException) -> str:
        return str(error) or error.__class__.__name__


__all__ = ["Completion", "DeletionResult", "InteractionController", "JobKind"]
