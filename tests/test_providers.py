import pytest

from completion import CompletionStreamer
from conftest import FakeLLM
from embeddings import EmbeddingClient


class FakeEmbeddingModel:

    def __init__(self, vector):
        self.vector = vector

    def embed_query(self, text):
        return self.vector


def test_embed_query_returns_vector():
    client = EmbeddingClient(model = FakeEmbeddingModel([0.1] * 4), dimensions = 4)

    assert client.embed_query("databases") == [0.1] * 4


def test_embed_query_rejects_wrong_dimensions():
    client = EmbeddingClient(model = FakeEmbeddingModel([0.1] * 3), dimensions = 1536)

    with pytest.raises(ValueError):
        client.embed_query("databases")


def test_stream_skips_empty_chunks_and_keeps_order():
    streamer = CompletionStreamer(llm = FakeLLM(["", "Professor ", "", "Carter", "!"]))

    assert list(streamer.stream([])) == ["Professor ", "Carter", "!"]
