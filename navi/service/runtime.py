"""Owner loop: runs the reducer and executes its effects.

Purpose
-------
``ChatRuntime`` is the single writer of application state. Input layers post
actions from any thread; the owner thread (whoever calls ``step``/``run``)
drains them, pulls session-tagged deltas from the controller's bounded
queue, drops stale ones at the boundary (``SessionController.admit``) and
feeds the rest to the pure reducer. Effects returned by the reducer are
executed here and only here.

Threading
---------
- ``post`` is thread-safe (unbounded ``queue.Queue``).
- ``step``, ``dispatch``, ``run`` and ``shutdown`` must be called from the
  owner thread.
- Listeners run on the owner thread after every state change.
"""
from __future__ import annotations

import logging
import queue
import time
from typing import Any, Callable, List, Optional

from ..base.factory import ProviderFactory
from ..base.logging import get_logger, log_event
from ..base.streaming import SessionController
from ..config.defaults import DEFAULT_EVENT_QUEUE_SIZE
from ..config.settings import AppSettings
from ..core import effects
from ..core.actions import SessionStarted
from ..core.reducer import update
from ..core.state import AppState

Listener = Callable[[AppState, object], None]

DEFAULT_POLL_SECONDS = 0.05
DEFAULT_MAX_BATCH = 64


class ChatRuntime:
    """Wires a provider adapter, a session controller and the reducer together.

    Parameters:
        adapter: Provider adapter used for every session.
        state: Initial state; defaults to ``AppState.initial`` with the
            adapter's model name.
        controller: Pre-built controller (tests); otherwise one is created.
        queue_size: Capacity of the controller's event queue.
        max_batch: Upper bound of deltas applied per ``step`` so queued UI
            actions (cancel, quit) are not starved by a fast stream.
    """

    def __init__(
        self,
        adapter: Any,
        *,
        state: Optional[AppState] = None,
        controller: Optional[SessionController] = None,
        queue_size: int = DEFAULT_EVENT_QUEUE_SIZE,
        max_batch: int = DEFAULT_MAX_BATCH,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._adapter = adapter
        default_model = getattr(adapter, "default_model", None)
        model_name = (default_model() if callable(default_model) else None) or ""
        self.state: AppState = state or AppState.initial(
            model_name=model_name,
            effort=getattr(adapter, "effort", AppState().effort),
        )
        self.controller = controller or SessionController(adapter, queue_size=queue_size)
        self._actions: "queue.Queue[object]" = queue.Queue()
        self._listeners: List[Listener] = []
        self._max_batch = max(1, max_batch)
        self._running = True
        self._logger = logger or get_logger("navi.runtime")

    @classmethod
    def from_settings(cls, settings: AppSettings, *, adapter: Any = None) -> "ChatRuntime":
        """Build the adapter chosen in ``settings`` (once, for the whole run)."""
        if adapter is None:
            kwargs = {"model": settings.model, "effort": settings.reasoning_effort}
            if settings.provider != "mock":
                kwargs["max_output_tokens"] = settings.max_output_tokens
            adapter = ProviderFactory.create(settings.provider, **kwargs)
        default_model = getattr(adapter, "default_model", None)
        state = AppState.initial(
            system_prompt=settings.system_prompt,
            model_name=(default_model() if callable(default_model) else None) or settings.model or "",
            effort=settings.reasoning_effort,
        )
        return cls(adapter, state=state, queue_size=settings.queue_size)

    # ----- Public API -----
    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def running(self) -> bool:
        return self._running

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener(state, event)`` after every dispatched event."""
        self._listeners.append(listener)

    def post(self, action: object) -> None:
        """Queue a UI action; safe from any thread."""
        self._actions.put(action)

    def dispatch(self, event: object) -> Optional[effects.Effect]:
        """Apply ``event`` now (owner thread) and execute the resulting effect."""
        self.state, effect = update(self.state, event)
        log_event(
            self._logger,
            "reducer.event",
            level=logging.DEBUG,
            event_type=type(event).__name__,
            session_id=getattr(event, "session_id", None),
            effect=type(effect).__name__ if effect is not None else None,
        )
        for listener in list(self._listeners):
            listener(self.state, event)
        if effect is not None:
            self._execute(effect)
        return effect

    def step(self, timeout: float = 0.0) -> bool:
        """Process queued actions, then up to ``max_batch`` deltas.

        Blocks up to ``timeout`` seconds waiting for the first delta. Returns
        True when anything was processed.
        """
        progressed = self._drain_actions()
        if not self._running:
            return progressed
        events = self.controller.events
        try:
            event = events.get(timeout=timeout) if timeout > 0 else events.get_nowait()
        except queue.Empty:
            return progressed
        self._deliver(event)
        for _ in range(self._max_batch - 1):
            if not self._actions.empty():
                break
            try:
                event = events.get_nowait()
            except queue.Empty:
                break
            self._deliver(event)
        return True

    def run(self, poll_interval: float = DEFAULT_POLL_SECONDS) -> None:
        """Loop until a ``Quit`` effect stops the runtime."""
        try:
            while self._running:
                self.step(poll_interval)
        finally:
            self.shutdown()

    def run_until_idle(self, timeout: float = 30.0, poll_interval: float = DEFAULT_POLL_SECONDS) -> bool:
        """Step until no request is in flight; False when ``timeout`` elapsed first."""
        deadline = time.monotonic() + timeout
        while self._running:
            self.step(poll_interval)
            if not self.state.in_flight and self._actions.empty():
                return True
            if time.monotonic() > deadline:
                return False
        return True

    def shutdown(self) -> None:
        self._running = False
        self.controller.shutdown()

    def __enter__(self) -> "ChatRuntime":
        return self

    def __exit__(self, *exc: object) -> None:
        self.shutdown()

    # ----- Internals -----
    def _drain_actions(self) -> bool:
        progressed = False
        while True:
            try:
                action = self._actions.get_nowait()
            except queue.Empty:
                return progressed
            progressed = True
            self.dispatch(action)

    def _deliver(self, event: Any) -> None:
        if self.controller.admit(event):
            self.dispatch(event)

    def _execute(self, effect: effects.Effect) -> None:
        if isinstance(effect, effects.StartSession):
            session_id = self.controller.start(effect.segments, effort=effect.effort, model=effect.model)
            self.dispatch(SessionStarted(session_id))
            if self.state.live_session_id != session_id:
                self.controller.cancel(session_id, reason="not accepted")
        elif isinstance(effect, effects.CancelSession):
            self.controller.cancel(effect.session_id)
        elif isinstance(effect, effects.Quit):
            log_event(self._logger, "runtime.quit")
            self.shutdown()


__all__ = ["ChatRuntime", "Listener"]
