from typing import Annotated, Literal
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Annotated[
        Literal["user", "assistant"],
        Field(..., description = "Who wrote the message", examples = ["user"])
    ]

    content: Annotated[
        str,
        Field(..., description = "Message text", examples = ["Who teaches database systems well?"])
    ]


class RetrievedMatch(BaseModel):
    id: Annotated[
        str,
        Field(..., description = "Professor identifier", examples = ["Dr. Emily Carter"])
    ]

    review: str = ""
    subject: str = ""
    stars: float | None = None
    score: float | None = None


class ProfessorReview(BaseModel):
    professor: str
    review: str
    subject: str

    stars: Annotated[
        float,
        Field(..., ge = 0, le = 5, description = "Star rating out of 5")
    ]


class ConversationState(BaseModel):
    """Per-session small-talk memory; never shared between sessions."""

    greeted: bool = False
    last_subject: str | None = None


class AuthSession(BaseModel):
    id_token: str
    refresh_token: str
    email: str
    local_id: str
    expires_in: int = 3600


class ErrorResponse(BaseModel):
    error: str
