"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs used by the session engine via the
canonical ``navi.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` backs the monotonic ``cancelled`` flag of a streaming
  session. The network task polls it between provider events; the owner loop
  reads it when deciding whether an event is still relevant.
- ``CancelledError`` is raised inside the network task once its token is
  cancelled; the decoder lets it through and the controller ends the task
  without emitting a terminal event.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
