"""Stream decoder: raw provider events in, session-tagged deltas out.

Rules:
- ``AnswerFragment`` / ``ReasoningFragment`` become ``AnswerChunk`` /
  ``ReasoningChunk`` carrying the literal text.
- ``End`` (or clean exhaustion of the source) yields exactly one
  ``StreamEnded`` and stops.
- Any other value is an unrecognized shape: one ``StreamFailed(PROTOCOL)``.
- An exception raised by the source becomes one classified ``StreamFailed``,
  except ``CancelledError``, which propagates: a cancelled session ends
  without a terminal event.

A decoder is bound to one session and can be iterated once.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from ..cancellation import CancelledError
from ..errors import StreamErrorKind, classify_exception
from ..logging import LogContext, get_logger, log_event
from .deltas import AnswerChunk, DeltaEvent, ReasoningChunk, StreamEnded, StreamFailed
from .raw_events import AnswerFragment, End, ReasoningFragment


class StreamDecoder:
    """Single-use iterable converting a raw event stream into deltas."""

    def __init__(
        self,
        session_id: int,
        raw_events: Iterable[object],
        *,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.session_id = session_id
        self._raw_events = raw_events
        self._ctx = ctx or LogContext(session_id=session_id)
        self._logger = logger or get_logger("navi.stream.decoder")
        self._consumed = False

    def __iter__(self) -> Iterator[DeltaEvent]:
        if self._consumed:
            raise RuntimeError(f"decoder for session {self.session_id} already consumed")
        self._consumed = True
        return self._decode()

    def _decode(self) -> Iterator[DeltaEvent]:
        sid = self.session_id
        try:
            for raw in self._raw_events:
                if isinstance(raw, AnswerFragment):
                    yield AnswerChunk(sid, raw.text)
                elif isinstance(raw, ReasoningFragment):
                    yield ReasoningChunk(sid, raw.text)
                elif isinstance(raw, End):
                    yield StreamEnded(sid, raw.usage)
                    return
                else:
                    log_event(
                        self._logger,
                        "stream.decode_error",
                        self._ctx,
                        level=logging.WARNING,
                        payload_type=type(raw).__name__,
                    )
                    yield StreamFailed(sid, StreamErrorKind.PROTOCOL, f"unrecognized event: {type(raw).__name__}")
                    return
        except (GeneratorExit, CancelledError):
            raise
        except Exception as exc:  # converted to a terminal event, never propagated
            kind = classify_exception(exc)
            log_event(
                self._logger,
                "stream.source_error",
                self._ctx,
                level=logging.WARNING,
                error_code=kind.value,
                error=str(exc),
            )
            yield StreamFailed(sid, kind, str(exc))
            return
        yield StreamEnded(sid)


def decode(session_id: int, raw_events: Iterable[object]) -> Iterator[DeltaEvent]:
    """Convenience wrapper returning an iterator over ``StreamDecoder``."""
    return iter(StreamDecoder(session_id, raw_events))


__all__ = ["StreamDecoder", "decode"]
