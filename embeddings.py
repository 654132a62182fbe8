from langchain_openai import OpenAIEmbeddings
from langsmith import traceable

from logger import get_logger
from settings import settings

logger = get_logger(__name__)


def init_embedding_model():
    return OpenAIEmbeddings(
        model = settings.EMBEDDING_MODEL,
        dimensions = settings.EMBEDDING_DIMENSIONS,
        api_key = settings.OPENAI_API_KEY.get_secret_value(),
        base_url = settings.OPENAI_BASE_URL,
    )


class EmbeddingClient:
    """Turns query text into a fixed-length vector."""

    def __init__(self, model = None, dimensions: int = settings.EMBEDDING_DIMENSIONS):
        self.model = model if model is not None else init_embedding_model()
        self.dimensions = dimensions

    @traceable(name = "embed_query")
    def embed_query(self, text: str) -> list[float]:
        vector = self.model.embed_query(text)

        if self.dimensions and len(vector) != self.dimensions:
            raise ValueError(
                f"Embedding has {len(vector)} dimensions, expected {self.dimensions}"
            )

        logger.debug("Embedded query (%d chars) into %d dimensions", len(text), len(vector))
        return vector
