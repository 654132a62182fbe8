from qdrant_client import QdrantClient
from qdrant_client.http import models
from langsmith import traceable

from logger import get_logger
from schema import RetrievedMatch
from settings import settings

logger = get_logger(__name__)

CONTENT_KEY = "page_content"
METADATA_KEY = "metadata"


def init_qdrant_client():
    api_key = settings.QDRANT_API_KEY.get_secret_value() if settings.QDRANT_API_KEY else None
    return QdrantClient(url = settings.QDRANT_URL, api_key = api_key)


def build_namespace_filter(namespace: str | None):
    if not namespace:
        return None

    return models.Filter(
        must = [
            models.FieldCondition(
                key = f"{METADATA_KEY}.namespace",
                match = models.MatchValue(value = namespace)
            )
        ]
    )


def to_match(point) -> RetrievedMatch:
    payload = point.payload or {}
    metadata = payload.get(METADATA_KEY) or {}

    return RetrievedMatch(
        id = str(metadata.get("professor") or point.id),
        review = payload.get(CONTENT_KEY) or metadata.get("review") or "",
        subject = metadata.get("subject") or "",
        stars = metadata.get("stars"),
        score = point.score,
    )


class VectorIndexClient:
    """Nearest-neighbour search over the professor review collection."""

    def __init__(self, client = None, collection_name: str = settings.QDRANT_COLLECTION):
        self.client = client if client is not None else init_qdrant_client()
        self.collection_name = collection_name

    @traceable(name = "vector_query")
    def query(self, vector: list[float], top_k: int = settings.TOP_K, include_metadata: bool = True, namespace: str | None = None) -> list[RetrievedMatch]:
        response = self.client.query_points(
            collection_name = self.collection_name,
            query = vector,
            query_filter = build_namespace_filter(namespace),
            limit = top_k,
            with_payload = include_metadata,
        )

        matches = [to_match(point) for point in response.points]
        logger.info(
            "Retrieved %d match(es) from '%s' (top_k=%d, namespace=%s)",
            len(matches), self.collection_name, top_k, namespace,
        )
        return matches
