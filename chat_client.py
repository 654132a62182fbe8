"""
Client-side conversation controller for the chat endpoint.

Mirrors what the chat widget does in the browser: the user's message is shown
immediately, a placeholder assistant message is filled in as text streams
back, and a failed exchange turns the placeholder into a fixed apology.
Only one exchange may be in flight per ``ChatSession``.

    session = ChatSession("http://localhost:8000")
    session.send("Who teaches database systems well?")
    print(session.messages[-1].content)
"""

from enum import Enum
from typing import Callable, Literal

import httpx
from pydantic import BaseModel

from logger import get_logger
from system_messages import chat_error_message, welcome_message

logger = get_logger(__name__)

CHAT_PATH = "/api/chat"


class ExchangeStatus(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    FAILED = "failed"


class MessageStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class DisplayMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    status: MessageStatus = MessageStatus.CONFIRMED


class ExchangeInProgressError(RuntimeError):
    pass


class ChatSession:

    def __init__(self, base_url: str = "http://localhost:8000", http_client: httpx.Client | None = None, session_id: str | None = None):
        self.http_client = http_client if http_client is not None else httpx.Client(base_url = base_url, timeout = None)
        self.session_id = session_id
        self.messages: list[DisplayMessage] = [
            DisplayMessage(role = "assistant", content = welcome_message)
        ]
        self.status = ExchangeStatus.IDLE
        self._listeners: list[Callable[[ExchangeStatus], None]] = []

    @property
    def can_send(self) -> bool:
        return self.status == ExchangeStatus.IDLE

    def subscribe(self, listener: Callable[[ExchangeStatus], None]) -> None:
        self._listeners.append(listener)

    def _set_status(self, status: ExchangeStatus) -> None:
        self.status = status
        for listener in self._listeners:
            listener(status)

    def history_payload(self) -> list[dict]:
        return [
            {"role": m.role, "content": m.content}
            for m in self.messages
            if m.status != MessageStatus.FAILED and not (m.role == "assistant" and m.status == MessageStatus.PENDING)
        ]

    def send(self, text: str, on_chunk: Callable[[str], None] | None = None) -> DisplayMessage | None:
        """
        Send one message and block until the reply has fully streamed in.

        Returns the assistant message, or None when ``text`` is blank.
        """
        if not text.strip():
            return None
        if not self.can_send:
            raise ExchangeInProgressError("a message is already being sent")

        user_message = DisplayMessage(role = "user", content = text, status = MessageStatus.PENDING)
        self.messages.append(user_message)
        self._set_status(ExchangeStatus.SENDING)

        payload = self.history_payload()
        placeholder = DisplayMessage(role = "assistant", content = "", status = MessageStatus.PENDING)
        self.messages.append(placeholder)

        headers = {"X-Session-Id": self.session_id} if self.session_id else None

        try:
            with self.http_client.stream("POST", CHAT_PATH, json = payload, headers = headers) as response:
                response.raise_for_status()
                self._set_status(ExchangeStatus.STREAMING)

                for chunk in response.iter_text():
                    if not chunk:
                        continue
                    placeholder.content += chunk
                    if on_chunk is not None:
                        on_chunk(chunk)
        except Exception:
            # a stream cut off by the server lands here too; no partial text is kept
            logger.exception("Chat exchange failed")
            placeholder.content = chat_error_message
            placeholder.status = MessageStatus.FAILED
            self._set_status(ExchangeStatus.FAILED)
        else:
            placeholder.status = MessageStatus.CONFIRMED
        finally:
            user_message.status = MessageStatus.CONFIRMED
            if placeholder.status == MessageStatus.PENDING:
                placeholder.content = chat_error_message
                placeholder.status = MessageStatus.FAILED
            self._set_status(ExchangeStatus.IDLE)

        return placeholder

    def close(self) -> None:
        self.http_client.close()
