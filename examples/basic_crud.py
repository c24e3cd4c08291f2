"""Basic CRUD walkthrough: database, collection, vectors, search, cleanup.

Run against a local server:

    SCINTIRETE_ADDRESS=127.0.0.1:50051 SCINTIRETE_PASSWORD=your-password python examples/basic_crud.py
"""
from __future__ import annotations

import asyncio

import grpc

from scintirete import (
    CreateCollectionRequest,
    DistanceMetric,
    HnswConfig,
    InsertVectorsRequest,
    Scintirete,
    ScintireteSettings,
    SearchRequest,
    VectorData,
    configure_logging,
    create_client_from_settings,
    to_dict,
)
from scintirete.core.logging_config import get_logger


logger = get_logger("examples.basic_crud")

DB = "example_db"
COLLECTION = "vectors"


async def main() -> None:
    settings = ScintireteSettings()
    configure_logging(debug=settings.debug)

    async with create_client_from_settings(settings) as client:
        api = Scintirete(client)
        try:
            await api.create_database({"name": DB})
            await api.create_collection(CreateCollectionRequest(
                db_name=DB,
                collection_name=COLLECTION,
                metric_type=DistanceMetric.COSINE,
                hnsw_config=HnswConfig(m=16, ef_construction=200),
            ))

            inserted = await api.insert_vectors(InsertVectorsRequest(
                db_name=DB,
                collection_name=COLLECTION,
                vectors=[
                    VectorData(elements=[0.1, 0.2, 0.3, 0.4], metadata={"title": "Document 1", "category": "tech"}),
                    VectorData(elements=[0.2, 0.3, 0.4, 0.5], metadata={"title": "Document 2", "category": "science"}),
                    VectorData(elements=[0.5, 0.4, 0.3, 0.2], metadata={"title": "Document 3", "category": "tech"}),
                ],
            ))
            logger.info("vectors_inserted", count=inserted.inserted_count, ids=list(inserted.inserted_ids))

            info = await api.get_collection_info({"db_name": DB, "collection_name": COLLECTION})
            logger.info("collection_info", **to_dict(info))

            found = await api.search(SearchRequest(
                db_name=DB,
                collection_name=COLLECTION,
                query_vector=[0.15, 0.25, 0.35, 0.45],
                top_k=2,
                include_vector=True,
            ))
            for rank, item in enumerate(found.results, start=1):
                logger.info("search_hit", rank=rank, id=item.id, distance=item.distance, metadata=to_dict(item.metadata))

            if inserted.inserted_ids:
                deleted = await api.delete_vectors({
                    "db_name": DB,
                    "collection_name": COLLECTION,
                    "ids": [inserted.inserted_ids[0]],
                })
                logger.info("vectors_deleted", count=deleted.deleted_count)
        except grpc.aio.AioRpcError as exc:
            logger.error("scintirete_call_failed", code=exc.code().name, details=exc.details())
        finally:
            try:
                await api.drop_database({"name": DB})
            except grpc.aio.AioRpcError as exc:
                logger.error("cleanup_failed", code=exc.code().name, details=exc.details())


if __name__ == "__main__":
    asyncio.run(main())
