"""
Small-talk detection and per-session conversation state.

State lives in a ``SessionStore`` keyed by the caller's session id and is
handed to the pipeline explicitly for each request. Requests without a
session id get a fresh state that is dropped after the response.
"""

import re
import threading
import time
from collections import OrderedDict

from logger import get_logger
from schema import ConversationState
from settings import settings
from system_messages import (
    greeting_again_response,
    greeting_response,
    thanks_response,
    thanks_with_subject_response,
)

GREETING = "greeting"
THANKS = "thanks"

logger = get_logger(__name__)

_RE_GREETING = re.compile(
    r"^(hi|hello|hey|hiya|howdy|greetings|good (morning|afternoon|evening))( there)?[\s!.,?]*$",
    re.IGNORECASE,
)
_RE_THANKS = re.compile(
    r"^(thanks|thank you|thx|ty|cheers)( (so|very) much)?( a lot)?[\s!.,]*$",
    re.IGNORECASE,
)


def detect_smalltalk(text: str) -> str | None:
    cleaned = " ".join(text.split())
    if _RE_GREETING.match(cleaned):
        return GREETING
    if _RE_THANKS.match(cleaned):
        return THANKS
    return None


def smalltalk_reply(kind: str, state: ConversationState) -> str:
    if kind == GREETING:
        reply = greeting_again_response if state.greeted else greeting_response
        state.greeted = True
        return reply

    if kind == THANKS:
        if state.last_subject:
            return thanks_with_subject_response.format(subject = state.last_subject)
        return thanks_response

    raise ValueError(f"Unknown small-talk kind: {kind}")


class SessionStore:
    """
    In-memory ``session_id -> ConversationState`` map.

    Holds at most ``max_sessions`` entries, evicting the least recently used
    one, and drops sessions idle for longer than ``ttl_seconds``.
    """

    def __init__(self, max_sessions: int = settings.MAX_SESSIONS, ttl_seconds: float = settings.SESSION_TTL_SECONDS, clock = time.monotonic):
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._states: OrderedDict[str, tuple[ConversationState, float]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str | None) -> ConversationState:
        if not session_id:
            return ConversationState()

        with self._lock:
            now = self._clock()
            self._expire(now)

            entry = self._states.pop(session_id, None)
            state = entry[0] if entry is not None else ConversationState()
            self._states[session_id] = (state, now)

            while len(self._states) > self.max_sessions:
                evicted, _ = self._states.popitem(last = False)
                logger.debug("Evicted session %s", evicted)

            return state

    def _expire(self, now: float) -> None:
        # entries are ordered by last use, so stale ones sit at the front
        while self._states:
            session_id, (_, last_used) = next(iter(self._states.items()))
            if now - last_used <= self.ttl_seconds:
                break
            del self._states[session_id]

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._states.pop(session_id, None)

    def __len__(self):
        with self._lock:
            return len(self._states)
