#!/usr/bin/env python3
"""Build the semantic index: chunk reference documents, embed, store in rubric_passages.

Usage:
    poetry run python scripts/ingest_rubrics.py data/
    poetry run python scripts/ingest_rubrics.py data/ --chunk-size 800 --overlap 100

Reads every .pdf, .md and .txt file in the directory (job description, case
study brief, CV and project scoring rubrics). Re-running replaces the
passages of each ingested file. Evaluation runs started afterwards pick up
the new snapshot; running ones keep the one they loaded.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
load_dotenv()

from sqlalchemy import delete  # noqa: E402

from candidate_evaluation.db import get_session  # noqa: E402
from candidate_evaluation.documents.extract_pdf import extract_pdf_text  # noqa: E402
from candidate_evaluation.models.rubrics import RubricPassage  # noqa: E402
from candidate_evaluation.resources.openrouter import OpenRouterResource  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger("ingest_rubrics")

SUPPORTED_SUFFIXES = {".pdf", ".md", ".txt"}
EMBED_BATCH_SIZE = 32


def read_document(path: Path) -> str:
    if path.suffix.lower() == ".pdf":
        return extract_pdf_text(path)
    return path.read_text(encoding="utf-8")


def chunk_text(text: str, chunk_size: int, overlap: int) -> list[str]:
    """Split text into overlapping windows, preferring paragraph boundaries."""
    text = text.strip()
    if not text:
        return []
    chunks = []
    start = 0
    while start < len(text):
        end = min(start + chunk_size, len(text))
        if end < len(text):
            boundary = text.rfind("\n\n", start, end)
            if boundary > start + chunk_size // 2:
                end = boundary
        chunk = text[start:end].strip()
        if chunk:
            chunks.append(chunk)
        if end >= len(text):
            break
        start = max(end - overlap, start + 1)
    return chunks


async def embed_chunks(openrouter: OpenRouterResource, chunks: list[str]) -> list[list[float]]:
    vectors: list[list[float]] = []
    for i in range(0, len(chunks), EMBED_BATCH_SIZE):
        batch = chunks[i : i + EMBED_BATCH_SIZE]
        vectors.extend(await openrouter.embed(batch, operation="ingest_rubrics"))
        log.info(f"  embedded {min(i + EMBED_BATCH_SIZE, len(chunks))}/{len(chunks)} chunks")
    return vectors


def ingest_file(
    openrouter: OpenRouterResource, path: Path, chunk_size: int, overlap: int
) -> int:
    chunks = chunk_text(read_document(path), chunk_size, overlap)
    if not chunks:
        log.warning(f"  {path.name}: no text, skipped")
        return 0
    vectors = asyncio.run(embed_chunks(openrouter, chunks))

    session = get_session()
    session.execute(delete(RubricPassage).where(RubricPassage.source == path.name))
    session.add_all(
        RubricPassage(
            source=path.name,
            chunk_index=i,
            text=chunk,
            embedding=vector,
            model_version=openrouter.embedding_model,
        )
        for i, (chunk, vector) in enumerate(zip(chunks, vectors))
    )
    session.commit()
    session.close()
    return len(chunks)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[0])
    parser.add_argument("directory", type=Path, help="Directory of reference documents")
    parser.add_argument("--chunk-size", type=int, default=1000)
    parser.add_argument("--overlap", type=int, default=150)
    args = parser.parse_args()

    if not args.directory.is_dir():
        print(f"  Not a directory: {args.directory}")
        sys.exit(1)

    files = sorted(
        p for p in args.directory.iterdir() if p.suffix.lower() in SUPPORTED_SUFFIXES
    )
    if not files:
        print(f"  No reference documents found in {args.directory}")
        sys.exit(1)

    openrouter = OpenRouterResource(api_key=os.environ["OPENROUTER_API_KEY"])
    log.info(f"Starting ingestion of {len(files)} document(s)...")
    total = 0
    for path in files:
        log.info(f"Ingesting {path.name}")
        total += ingest_file(openrouter, path, args.chunk_size, args.overlap)
    log.info(f"Ingestion complete: {total} passages in rubric_passages.")


if __name__ == "__main__":
    main()
