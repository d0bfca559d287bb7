"""In-process notification fan-out.

Subscribers register per topic (``global``, ``warehouse-<id>``,
``delivery-<id>``) or on ``*`` for everything.  A subscriber that raises
is logged and skipped; the others still receive the event.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Any, Callable

import structlog

from scm.application.notifications import GLOBAL_TOPIC, NotificationSink

logger = structlog.get_logger(__name__)

Subscriber = Callable[[str, dict[str, Any], str], None]

WILDCARD = "*"


class NotificationHub(NotificationSink):

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscriber]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, topic: str, subscriber: Subscriber) -> Callable[[], None]:
        """Register *subscriber* on *topic*; returns a function that unsubscribes it."""
        with self._lock:
            self._subscribers[topic].append(subscriber)

        def unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers.get(topic, []):
                    self._subscribers[topic].remove(subscriber)

        return unsubscribe

    def publish(self, event: str, payload: dict[str, Any], topic: str = GLOBAL_TOPIC) -> None:
        with self._lock:
            targets = list(self._subscribers.get(topic, ()))
            if topic != WILDCARD:
                targets += self._subscribers.get(WILDCARD, ())

        for subscriber in targets:
            try:
                subscriber(event, payload, topic)
            except Exception:
                logger.warning(
                    "Notification subscriber failed", notification=event, topic=topic, exc_info=True
                )


def log_notification(event: str, payload: dict[str, Any], topic: str) -> None:
    logger.info("Notification published", notification=event, topic=topic)
