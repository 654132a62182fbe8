"""
Review ingestion script.

Reads a JSON file of professor reviews, embeds every review and upserts it
into the Qdrant collection the chat endpoint searches.

File format:
    {"reviews": [{"professor": "...", "review": "...", "subject": "...", "stars": 4}]}

Point ids are derived from professor, subject and review text, so re-running
the script updates existing points while every review keeps its own point.

Usage:
    python load_reviews.py reviews.json
    python load_reviews.py reviews.json --namespace fall-2024
    python load_reviews.py reviews.json --recreate
"""

from __future__ import annotations

import argparse
import json
import sys
import time
import uuid
from pathlib import Path

from schema import ProfessorReview

_ID_NAMESPACE = uuid.UUID("6f1c5a8e-3b7d-4e2a-9c41-2d8f0b6a7e13")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog = "load_reviews", description = "Embed professor reviews and upsert them into the vector index.")
    parser.add_argument("path", type = Path, help = "JSON file with a top-level 'reviews' list.")
    parser.add_argument("--namespace", default = None, help = "Store the reviews under this namespace (defaults to QDRANT_NAMESPACE).")
    parser.add_argument("--recreate", action = "store_true", default = False, help = "Drop and recreate the collection before loading.")
    return parser.parse_args(argv)


def load_reviews(path: Path) -> list[ProfessorReview]:
    with path.open("r", encoding = "utf-8") as f:
        data = json.load(f)

    records = data["reviews"] if isinstance(data, dict) else data
    return [ProfessorReview.model_validate(r) for r in records]


def point_id(review: ProfessorReview, namespace: str | None = None) -> str:
    key = "\x1f".join(" ".join(part.split()).lower() for part in (namespace or "", review.professor, review.subject, review.review))
    return str(uuid.uuid5(_ID_NAMESPACE, key))


def to_metadata(review: ProfessorReview, namespace: str | None) -> dict:
    metadata = {
        "professor": review.professor,
        "subject": review.subject,
        "stars": review.stars,
    }
    if namespace:
        metadata["namespace"] = namespace
    return metadata


def ingest_reviews(reviews: list[ProfessorReview], embedding, namespace: str | None = None, recreate: bool = False, vector_store_cls = None) -> int:
    from settings import settings

    if vector_store_cls is None:
        from langchain_qdrant import QdrantVectorStore
        vector_store_cls = QdrantVectorStore

    if not reviews:
        return 0

    api_key = settings.QDRANT_API_KEY.get_secret_value() if settings.QDRANT_API_KEY else None

    vector_store_cls.from_texts(
        texts = [r.review for r in reviews],
        embedding = embedding,
        metadatas = [to_metadata(r, namespace) for r in reviews],
        ids = [point_id(r, namespace) for r in reviews],
        collection_name = settings.QDRANT_COLLECTION,
        url = settings.QDRANT_URL,
        api_key = api_key,
        force_recreate = recreate,
    )
    return len(reviews)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    t_start = time.perf_counter()

    try:
        from settings import settings
    except Exception as exc:
        print("\n[FATAL] Configuration error, check your .env file:\n")
        print(f"  {exc}")
        print()
        sys.exit(1)

    from embeddings import init_embedding_model
    from logger import get_logger
    logger = get_logger(__name__)

    namespace = args.namespace or settings.QDRANT_NAMESPACE

    try:
        reviews = load_reviews(args.path)
    except (OSError, ValueError, KeyError) as exc:
        logger.error("Could not read reviews from %s: %s", args.path, exc)
        sys.exit(1)

    logger.info("Loaded %d review(s) from %s", len(reviews), args.path)

    count = ingest_reviews(reviews, init_embedding_model(), namespace = namespace, recreate = args.recreate)

    logger.info(
        "Upserted %d review(s) into '%s' (namespace=%s) in %.2fs",
        count, settings.QDRANT_COLLECTION, namespace, time.perf_counter() - t_start,
    )


if __name__ == "__main__":
    main()
