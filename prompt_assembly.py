from langchain_core.messages import HumanMessage, AIMessage
from langsmith import traceable

from schema import ChatMessage, RetrievedMatch
from settings import settings
from system_messages import answer_format_instructions, final_prompt_system_message


def preview(text: str, limit: int = settings.REVIEW_PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def format_stars(stars: float | None) -> str:
    if stars is None:
        return "n/a"
    return f"{stars:g}"


@traceable(name = "context_construction")
def build_context(matches: list[RetrievedMatch]) -> str:
    if not matches:
        return ""

    blocks = [
        f"Professor {i + 1}: {m.id}\n"
        f"Review: {preview(m.review)}\n"
        f"Subject: {m.subject}\n"
        f"Stars: {format_stars(m.stars)}"
        for i, m in enumerate(matches)
    ]
    return "Retrieved professor information:\n\n" + "\n\n".join(blocks)


def to_lc_history(chat_history: list[ChatMessage], max_turns: int = settings.MAX_TURNS):
    if max_turns <= 0:
        return []

    history = []
    for msg in chat_history[-max_turns:]:
        if msg.role == "user":
            history.append(HumanMessage(content = msg.content))
        else:
            history.append(AIMessage(content = msg.content))
    return history


def build_message(query: str, context: str, chat_history: list[ChatMessage], max_turns: int = settings.MAX_TURNS):
    messages = [final_prompt_system_message]
    messages.extend(to_lc_history(chat_history, max_turns))

    messages.append(HumanMessage(
        content = (
            f'User query: "{query}"\n\n'
            f"{context}\n\n"
            f"{answer_format_instructions}"
        )
    ))

    return messages
