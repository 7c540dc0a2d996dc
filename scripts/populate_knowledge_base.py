#!/usr/bin/env python3
"""
Populate the knowledge base with the Muro Lucano monuments and passages.

Usage:
    python scripts/populate_knowledge_base.py [--no-embeddings]
    python scripts/populate_knowledge_base.py --backfill

Options:
    --no-embeddings: Insert passages without vectors (keyword search only)
    --backfill: Embed existing passages that lack a vector from EMBEDDING_MODEL
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import get_settings
from app.core.embeddings import EmbeddingClient
from app.core.logging import get_logger
from app.core.seeding import backfill_embeddings, seed_knowledge_base
from app.data.muro_lucano import MONUMENTS, PASSAGES
from app.db.knowledge_base import KnowledgeStore
from app.db.monuments import MonumentStore
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


def main():
    """Seed or backfill the knowledge base."""
    parser = argparse.ArgumentParser(description="Populate the Muro Lucano knowledge base")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--no-embeddings",
        action="store_true",
        help="Insert passages without embeddings",
    )
    mode.add_argument(
        "--backfill",
        action="store_true",
        help="Embed passages missing a vector from the configured model",
    )

    args = parser.parse_args()
    settings = get_settings()
    supabase = get_supabase()
    knowledge_store = KnowledgeStore(supabase)

    logger.info("=" * 60)
    logger.info("KNOWLEDGE BASE POPULATION")
    logger.info("=" * 60)

    try:
        if args.backfill:
            embedder = EmbeddingClient.from_settings(settings)
            result = backfill_embeddings(knowledge_store, embedder, settings.CORPUS_LANGUAGE)
            logger.info(f"Updated {result.updated} passages, {result.failed} failed")
            return 1 if result.failed else 0

        embedder = None if args.no_embeddings else EmbeddingClient.from_settings(settings)
        logger.info(f"Monuments: {len(MONUMENTS)}, passages: {len(PASSAGES)}")

        summary = seed_knowledge_base(
            MonumentStore(supabase),
            knowledge_store,
            embedder,
            MONUMENTS,
            PASSAGES,
            with_embeddings=not args.no_embeddings,
        )
    except Exception as e:
        logger.error(f"Population failed: {e}", exc_info=True)
        return 1

    logger.info(
        f"Inserted {summary.monuments_inserted} monuments and "
        f"{summary.passages_inserted} passages ({summary.passages_failed} skipped)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
