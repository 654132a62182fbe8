from functools import lru_cache

from langsmith import traceable

from completion import CompletionStreamer
from conversation_state import detect_smalltalk, smalltalk_reply
from embeddings import EmbeddingClient
from logger import get_logger
from prompt_assembly import build_context, build_message
from schema import ChatMessage, ConversationState
from settings import settings
from system_messages import empty_completion_response, no_matches_response
from vector_index import VectorIndexClient

logger = get_logger(__name__)


class EmptyQueryError(ValueError):
    pass


class UpstreamServiceError(RuntimeError):
    """An embedding, index or completion call failed before anything was streamed."""

    def __init__(self, stage: str):
        super().__init__(f"{stage} request failed")
        self.stage = stage


class RagPipeline:

    def __init__(self, embedder = None, index = None, streamer = None, top_k: int = settings.TOP_K, namespace: str | None = settings.QDRANT_NAMESPACE, max_turns: int = settings.MAX_TURNS):
        self.embedder = embedder if embedder is not None else EmbeddingClient()
        self.index = index if index is not None else VectorIndexClient()
        self.streamer = streamer if streamer is not None else CompletionStreamer()
        self.top_k = top_k
        self.namespace = namespace
        self.max_turns = max_turns

    def _call(self, stage: str, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            logger.exception("%s step failed", stage)
            raise UpstreamServiceError(stage) from exc

    @traceable(name = "rag_query", run_type = "chain")
    def prepare(self, messages: list[ChatMessage], state: ConversationState):
        """
        Run everything up to the first completion token and return the
        iterator of text chunks to send back.

        Raises EmptyQueryError for a blank query and UpstreamServiceError
        when a provider fails before any output exists.
        """
        if not messages:
            raise EmptyQueryError("conversation is empty")

        query = messages[-1].content.strip()
        if not query:
            raise EmptyQueryError("latest message is blank")

        logger.info("User query: %s", query)

        kind = detect_smalltalk(query)
        if kind is not None:
            logger.debug("Small talk (%s), skipping retrieval", kind)
            return iter([smalltalk_reply(kind, state)])

        vector = self._call("embedding", self.embedder.embed_query, query)

        matches = self._call(
            "vector_index",
            self.index.query,
            vector,
            top_k = self.top_k,
            include_metadata = True,
            namespace = self.namespace,
        )

        if not matches:
            return iter([no_matches_response])

        if matches[0].subject:
            state.last_subject = matches[0].subject

        context = build_context(matches)
        logger.debug("Context for model:\n%s", context)

        prompt = build_message(query, context, messages[:-1], self.max_turns)

        tokens = self._call("completion", self.streamer.stream, prompt)
        first = self._call("completion", next, tokens, None)

        return self._relay(first, tokens)

    def _relay(self, first, tokens):
        if first is None:
            logger.warning("Completion produced no text")
            yield empty_completion_response
            return

        yield first
        try:
            for token in tokens:
                yield token
        except Exception:
            # re-raised so the server aborts the body and the client sees a broken stream
            logger.exception("Completion stream broke off mid-response")
            raise


@lru_cache(maxsize = 1)
def get_pipeline() -> RagPipeline:
    return RagPipeline()
