"""Text embedding walkthrough: server-side embedding on insert and search.

    SCINTIRETE_ADDRESS=127.0.0.1:50051 SCINTIRETE_PASSWORD=your-password python examples/text_embedding.py
"""
from __future__ import annotations

import asyncio

import grpc

from scintirete import (
    EmbedAndInsertRequest,
    EmbedAndSearchRequest,
    EmbedTextRequest,
    Scintirete,
    ScintireteSettings,
    TextData,
    configure_logging,
    create_client_from_settings,
    to_dict,
)
from scintirete.core.logging_config import get_logger


logger = get_logger("examples.text_embedding")

DB = "text_db"
COLLECTION = "documents"

DOCUMENTS = [
    TextData(text="The quick brown fox jumps over the lazy dog", metadata={"category": "animals", "source": "example1.txt"}),
    TextData(text="Python is a high-level programming language", metadata={"category": "programming", "source": "example2.txt"}),
    TextData(text="Machine learning algorithms can process large datasets", metadata={"category": "ai", "source": "example3.txt"}),
    TextData(text="Vector databases are optimized for similarity search", metadata={"category": "database", "source": "example4.txt"}),
]

QUERIES = ["programming languages", "artificial intelligence", "animal behavior", "database technology"]


async def main() -> None:
    settings = ScintireteSettings()
    configure_logging(debug=settings.debug)

    async with create_client_from_settings(settings) as client:
        api = Scintirete(client)
        try:
            await api.create_database({"name": DB})
            await api.create_collection({"db_name": DB, "collection_name": COLLECTION, "metric_type": "COSINE"})

            models = await api.list_embedding_models()
            for model in models.models:
                logger.info("embedding_model", id=model.id, name=model.name, dimension=model.dimension)

            inserted = await api.embed_and_insert(EmbedAndInsertRequest(
                db_name=DB,
                collection_name=COLLECTION,
                texts=DOCUMENTS,
                embedding_model=models.default_model or None,
            ))
            logger.info("documents_inserted", count=inserted.inserted_count)

            # Queries are independent; issue them concurrently on the one channel
            results = await asyncio.gather(*(
                api.embed_and_search(EmbedAndSearchRequest(
                    db_name=DB,
                    collection_name=COLLECTION,
                    query_text=query,
                    top_k=2,
                    include_vector=False,
                ))
                for query in QUERIES
            ))
            for query, found in zip(QUERIES, results):
                for item in found.results:
                    metadata = to_dict(item.metadata)
                    logger.info("search_hit", query=query, distance=round(item.distance, 4), category=metadata.get("category"))

            embedded = await api.embed_text(EmbedTextRequest(
                texts=["Natural language processing", "Computer vision algorithms"],
                embedding_model=models.default_model or None,
            ))
            for result in embedded.results:
                logger.info("embedding", text=result.text, dimension=len(result.embedding), head=list(result.embedding[:3]))
        except grpc.aio.AioRpcError as exc:
            logger.error("scintirete_call_failed", code=exc.code().name, details=exc.details())
        finally:
            try:
                await api.drop_database({"name": DB})
            except grpc.aio.AioRpcError as exc:
                logger.error("cleanup_failed", code=exc.code().name, details=exc.details())


if __name__ == "__main__":
    asyncio.run(main())
