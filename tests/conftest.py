import os

os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("ENV", "prod")

from types import SimpleNamespace

import pytest

from schema import RetrievedMatch


class FakeEmbedder:

    def __init__(self, vector = None, error = None):
        self.vector = vector or [0.1, 0.2, 0.3]
        self.error = error
        self.calls = []

    def embed_query(self, text):
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.vector


class FakeIndex:

    def __init__(self, matches = None, error = None):
        self.matches = matches or []
        self.error = error
        self.calls = []

    def query(self, vector, top_k = 5, include_metadata = True, namespace = None):
        self.calls.append({"vector": vector, "top_k": top_k, "include_metadata": include_metadata, "namespace": namespace})
        if self.error:
            raise self.error
        return self.matches[:top_k]


class FakeStreamer:

    def __init__(self, tokens = None, error = None, fail_after = None):
        self.tokens = tokens if tokens is not None else []
        self.error = error
        self.fail_after = fail_after
        self.prompts = []

    def stream(self, messages):
        self.prompts.append(messages)
        for i, token in enumerate(self.tokens):
            if self.fail_after is not None and i == self.fail_after:
                raise RuntimeError("stream dropped")
            yield token
        if self.error:
            raise self.error


class FakeLLM:

    def __init__(self, contents):
        self.contents = contents

    def stream(self, messages):
        for content in self.contents:
            yield SimpleNamespace(content = content)


@pytest.fixture
def three_matches():
    return [
        RetrievedMatch(id = "Dr. Emily Carter", review = "Explains normalization with real examples.", subject = "Database Systems", stars = 5, score = 0.91),
        RetrievedMatch(id = "Dr. Raj Patel", review = "Knows SQL inside out but lectures move fast.", subject = "Database Systems", stars = 4, score = 0.87),
        RetrievedMatch(id = "Dr. Linda Nguyen", review = "Disorganized lectures and slow feedback.", subject = "Database Systems", stars = 2, score = 0.80),
    ]
