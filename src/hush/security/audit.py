"""Security audit events for URL decryption.

The crypto mapper reports requests it refuses or cannot decrypt:

    crypto.reject.plaintext_url        unencrypted namespace URL sent by the client
    crypto.reject.plaintext_parameter  unencrypted page info sent by the client
    crypto.expired                     marked URL that no longer decrypts

Nothing is delivered until a sink is registered, which makes this a
cheap hook for forwarding to logs or metrics::

    set_security_event_sink(lambda event: audit_log.info("%s %s", event.name, event.path))
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import TypeAlias

from hush.http.request import Request


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """One security-relevant outcome of mapping a request.

    ``path`` is the path the reporting mapper saw (already decrypted by
    earlier mappers in a chain); ``sent_url`` is the URL as the client
    sent it.
    """

    name: str
    path: str | None = None
    method: str | None = None
    sent_url: str | None = None
    details: dict[str, str] = field(default_factory=dict)
    timestamp: float = field(default_factory=time)

    @classmethod
    def for_request(
        cls, name: str, request: Request | None, details: dict[str, str]
    ) -> SecurityEvent:
        if request is None:
            return cls(name=name, details=details)
        return cls(
            name=name,
            path=request.path,
            method=request.method,
            sent_url=str(request.original),
            details=details,
        )


SecurityEventSink: TypeAlias = Callable[[SecurityEvent], None]


_sink_lock = threading.Lock()
_sink: SecurityEventSink | None = None


def set_security_event_sink(sink: SecurityEventSink | None) -> None:
    """Install the process-wide sink; ``None`` turns delivery off."""
    global _sink
    with _sink_lock:
        _sink = sink


def emit_security_event(name: str, request: Request | None = None, /, **details: str) -> None:
    """Deliver *name* for *request* to the sink, if one is installed."""
    with _sink_lock:
        sink = _sink
    if sink is not None:
        sink(SecurityEvent.for_request(name, request, details))
