"""Session controller: owns the lifecycle of streaming requests.

Purpose:
    Start at most one live streaming session at a time, run its network task
    on a thread pool, and hand session-tagged deltas to the owner loop over a
    bounded queue.

Threading model:
    ``start``, ``cancel``, ``admit`` and ``shutdown`` are called from the
    owner thread only; the id counter and the session table are never touched
    by network tasks. A network task touches its own cancellation token and
    the event queue, nothing else.

Cancellation:
    Cooperative. ``cancel`` flips the session token and unlinks it from the
    controller's root token. The network task observes it between raw events
    (``CancelledError``) and while waiting on a full queue, then stops
    producing without a terminal event. Events already queued are discarded
    by ``admit`` because their session is no longer live.

Per-session options:
    ``start`` captures the reasoning effort and model for one request and
    passes them to ``open_stream``; the adapter itself is never mutated, so a
    superseded task still winding down keeps the options it started with.
"""
from __future__ import annotations

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, Optional, Sequence

from ..cancellation import CancellationToken, CancelledError
from ..errors import StreamErrorKind
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import Effort, Segment
from ..timeouts import get_timeout_config, iter_with_deadline
from .decoder import StreamDecoder
from .deltas import AnswerChunk, DeltaEvent, ReasoningChunk, StreamEnded, StreamFailed, is_terminal
from .session import Session
from .streaming_metrics import StreamMetrics

if TYPE_CHECKING:  # pragma: no cover
    from ..interfaces import ProviderAdapter

DEFAULT_QUEUE_SIZE = 256
DEFAULT_PUT_POLL_SECONDS = 0.05
_SESSION_HISTORY = 64


class SessionController:
    """Starts, cancels and filters streaming sessions for one provider.

    Parameters:
        adapter: Provider adapter used for every session.
        queue_size: Capacity of the bounded event queue.
        event_queue: Pre-built queue (tests); overrides ``queue_size``.
        overall_timeout: Ceiling in seconds for one session; defaults to
            ``TimeoutConfig.overall_timeout_seconds``. ``0`` disables it.
        put_poll_interval: How often a producer blocked on a full queue
            re-checks its cancellation token.
        max_workers: Network task threads. Two lets a new session connect
            while a superseded task is still winding down.
    """

    def __init__(
        self,
        adapter: "ProviderAdapter",
        *,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        event_queue: Optional["queue.Queue[DeltaEvent]"] = None,
        overall_timeout: Optional[float] = None,
        put_poll_interval: float = DEFAULT_PUT_POLL_SECONDS,
        max_workers: int = 2,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if event_queue is None and queue_size <= 0:
            raise ValueError("queue_size must be positive")
        self._adapter = adapter
        self.events: "queue.Queue[DeltaEvent]" = event_queue if event_queue is not None else queue.Queue(maxsize=queue_size)
        self._overall_timeout = (
            get_timeout_config().overall_timeout_seconds if overall_timeout is None else overall_timeout
        )
        self._put_poll_interval = put_poll_interval
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="navi-stream")
        self._root = CancellationToken()
        self._logger = logger or get_logger("navi.session")
        self._last_id = 0
        self._live_id: Optional[int] = None
        self._sessions: Dict[int, Session] = {}
        self._closed = False

    # Owner-thread API ----------------------------------------------------
    @property
    def live_session_id(self) -> Optional[int]:
        return self._live_id

    def is_live(self, session_id: int) -> bool:
        return self._live_id is not None and session_id == self._live_id

    @property
    def sessions(self) -> Dict[int, Session]:
        """Snapshot of recent sessions keyed by id (diagnostics)."""
        return dict(self._sessions)

    @property
    def provider_name(self) -> str:
        return getattr(self._adapter, "provider_name", type(self._adapter).__name__)

    def start(
        self,
        segments: Sequence[Segment],
        *,
        effort: Optional[Effort] = None,
        model: Optional[str] = None,
    ) -> int:
        """Cancel the live session (if any) and start a new one.

        Returns immediately with the new session id; the request itself runs
        on the thread pool. ``effort`` and ``model`` apply to this request
        only; ``None`` leaves the adapter's configured value in effect.

        Raises:
            RuntimeError: When the controller has been shut down.
        """
        if self._closed:
            raise RuntimeError("session controller is shut down")
        if self._live_id is not None:
            self.cancel(self._live_id, reason="superseded")
        self._last_id += 1
        session = Session(id=self._last_id, token=self._root.child())
        self._sessions[session.id] = session
        self._live_id = session.id
        self._prune()
        options: Dict[str, Any] = {k: v for k, v in (("effort", effort), ("model", model)) if v is not None}
        log_event(
            self._logger,
            "session.start",
            self._ctx(session.id),
            segments=len(segments),
            effort=effort.value if effort is not None else None,
            requested_model=model,
        )
        session.future = self._executor.submit(self._run, session, tuple(segments), options)
        return session.id

    def cancel(self, session_id: Optional[int], reason: str = "cancelled") -> None:
        """Mark ``session_id`` cancelled. Unknown, finished or stale ids are a no-op."""
        if session_id is None:
            return
        session = self._sessions.get(session_id)
        if session is None or not session.live:
            return
        session.token.cancel(reason)
        self._root.unlink_child(session.token)
        if self._live_id == session_id:
            self._live_id = None
        log_event(self._logger, "session.cancel", self._ctx(session_id), reason=reason)

    def admit(self, event: DeltaEvent) -> bool:
        """Return True when ``event`` belongs to the live session.

        Events of any other session are dropped. Admitting a terminal event
        finishes the session.
        """
        sid = event.session_id
        if not self.is_live(sid):
            log_event(
                self._logger,
                "session.drop_stale",
                self._ctx(sid),
                level=logging.DEBUG,
                live_session_id=self._live_id,
                event_type=type(event).__name__,
            )
            return False
        if is_terminal(event):
            session = self._sessions[sid]
            session.finished = True
            self._live_id = None
            self._root.unlink_child(session.token)
            normalized_log_event(
                self._logger,
                "session.finalize",
                self._ctx(sid),
                phase="finalize",
                error_code=event.kind.value if isinstance(event, StreamFailed) else None,
                tokens=getattr(event, "usage", None),
            )
        return True

    def shutdown(self) -> None:
        """Cancel every outstanding session and stop the pool without waiting."""
        if self._closed:
            return
        self._closed = True
        self.cancel(self._live_id, reason="shutdown")
        self._root.cancel("shutdown")
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "SessionController":
        return self

    def __exit__(self, *exc: object) -> None:
        self.shutdown()

    # Network task --------------------------------------------------------
    def _run(self, session: Session, segments: Sequence[Segment], options: Dict[str, Any]) -> None:
        token = session.token
        ctx = self._ctx(session.id)
        metrics = StreamMetrics()
        terminal: Optional[DeltaEvent] = None
        if token.cancelled:
            return
        metrics.start()
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", attempt=1, emitted=False)
        raw = self._open(segments, options)
        deltas = iter(StreamDecoder(session.id, self._guarded(raw, token), ctx=ctx))
        try:
            for delta in deltas:
                token.raise_if_cancelled()
                if isinstance(delta, (AnswerChunk, ReasoningChunk)):
                    metrics.record_fragment(delta.text)
                elif isinstance(delta, StreamEnded):
                    metrics.finish()
                    delta = replace(delta, usage=metrics.apply_to(delta.usage))
                if not self._put(delta, token):
                    break
                if is_terminal(delta):
                    terminal = delta
                    break
        except CancelledError as exc:
            log_event(self._logger, "stream.cancelled", ctx, level=logging.DEBUG, reason=str(exc))
        except Exception as exc:  # pragma: no cover - decoder already converts source errors
            terminal = StreamFailed(session.id, StreamErrorKind.NETWORK, str(exc))
            self._put(terminal, token)
        finally:
            deltas.close()
            raw.close()
            normalized_log_event(
                self._logger,
                "stream.finalize",
                ctx,
                phase="finalize",
                attempt=1,
                error_code=terminal.kind.value if isinstance(terminal, StreamFailed) else None,
                emitted=metrics.emitted > 0,
                tokens=terminal.usage if isinstance(terminal, StreamEnded) else None,
                cancelled=token.cancelled or None,
            )

    def _open(self, segments: Sequence[Segment], options: Dict[str, Any]) -> Iterator[object]:
        # adapter errors (including synchronous ones) surface on first next()
        yield from iter_with_deadline(self._adapter.open_stream(segments, **options), self._overall_timeout)

    @staticmethod
    def _guarded(raw: Iterable[object], token: CancellationToken) -> Iterator[object]:
        for item in raw:
            token.raise_if_cancelled()
            yield item

    def _put(self, event: DeltaEvent, token: CancellationToken) -> bool:
        """Block on the bounded queue until there is room or the session is cancelled."""
        while not token.cancelled:
            try:
                self.events.put(event, timeout=self._put_poll_interval)
                return True
            except queue.Full:
                continue
        return False

    # Internals -----------------------------------------------------------
    def _ctx(self, session_id: int) -> LogContext:
        model = None
        default_model = getattr(self._adapter, "default_model", None)
        if callable(default_model):
            model = default_model()
        return LogContext(provider=self.provider_name, model=model, session_id=session_id)

    def _prune(self) -> None:
        if len(self._sessions) <= _SESSION_HISTORY:
            return
        for sid in sorted(self._sessions)[: len(self._sessions) - _SESSION_HISTORY]:
            if not self._sessions[sid].live:
                self._sessions.pop(sid)


__all__ = ["SessionController", "DEFAULT_QUEUE_SIZE"]
