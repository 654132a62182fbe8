from langchain_openai import ChatOpenAI

from logger import get_logger
from settings import settings

logger = get_logger(__name__)


def init_answer_llm():
    return ChatOpenAI(
        model = settings.LLM_MODEL,
        api_key = settings.OPENAI_API_KEY.get_secret_value(),
        base_url = settings.OPENAI_BASE_URL,
        temperature = settings.TEMPERATURE,
        top_p = settings.TOP_P,
        max_tokens = settings.MAX_TOKENS,
        streaming = True,
    )


class CompletionStreamer:
    """Relays the model's incremental text, in arrival order."""

    def __init__(self, llm = None):
        self.llm = llm if llm is not None else init_answer_llm()

    def stream(self, messages):
        for chunk in self.llm.stream(messages):
            if chunk.content:
                yield chunk.content
