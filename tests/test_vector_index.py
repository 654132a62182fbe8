from types import SimpleNamespace

from qdrant_client.http import models

from vector_index import VectorIndexClient, build_namespace_filter, to_match


class FakeQdrant:

    def __init__(self, points):
        self.points = points
        self.calls = []

    def query_points(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(points = self.points[:kwargs["limit"]])


def point(pid, professor, review, subject, stars, score):
    return SimpleNamespace(
        id = pid,
        score = score,
        payload = {"page_content": review, "metadata": {"professor": professor, "subject": subject, "stars": stars}},
    )


def test_query_maps_points_to_matches():
    qdrant = FakeQdrant([
        point("a1", "Dr. Emily Carter", "Great at SQL", "Database Systems", 5, 0.93),
        point("b2", "Dr. Raj Patel", "Fast lectures", "Database Systems", 4, 0.88),
    ])
    index = VectorIndexClient(client = qdrant, collection_name = "rag")

    matches = index.query([0.1, 0.2], top_k = 5)

    assert [m.id for m in matches] == ["Dr. Emily Carter", "Dr. Raj Patel"]
    assert matches[0].review == "Great at SQL"
    assert matches[0].stars == 5
    assert matches[0].score == 0.93
    call = qdrant.calls[0]
    assert call["collection_name"] == "rag"
    assert call["query"] == [0.1, 0.2]
    assert call["limit"] == 5
    assert call["with_payload"] is True
    assert call["query_filter"] is None


def test_query_honours_top_k_and_namespace():
    qdrant = FakeQdrant([point(str(i), f"P{i}", "r", "s", 3, 0.5) for i in range(5)])
    index = VectorIndexClient(client = qdrant, collection_name = "rag")

    matches = index.query([0.0], top_k = 3, namespace = "fall")

    assert len(matches) == 3
    flt = qdrant.calls[0]["query_filter"]
    assert isinstance(flt, models.Filter)
    assert flt.must[0].key == "metadata.namespace"
    assert flt.must[0].match.value == "fall"


def test_no_namespace_no_filter():
    assert build_namespace_filter(None) is None
    assert build_namespace_filter("") is None


def test_point_without_payload_falls_back_to_id():
    match = to_match(SimpleNamespace(id = 42, score = 0.1, payload = None))

    assert match.id == "42"
    assert match.review == ""
    assert match.stars is None
