import asyncio

import grpc
import pytest

from scintirete import (
    CallOptions,
    ClientClosedError,
    EmbedTextRequest,
    Scintirete,
    SearchRequest,
    create_client,
    to_dict,
)
from scintirete.interceptors import set_request_id
from scintirete.interceptors.request_id import REQUEST_ID_META_KEY


pytestmark = pytest.mark.asyncio


def _search(top_k: int = 1) -> SearchRequest:
    return SearchRequest(db_name="db", collection_name="c", query_vector=[0.1, 0.2], top_k=top_k)


async def test_create_database_wire_request_carries_password(grpc_server):
    target, fake = grpc_server
    async with create_client(address=target, password="secret") as client:
        resp = await Scintirete(client).create_database({"name": "example_db"})

    assert resp.success is True
    [request] = fake.requests["CreateDatabase"]
    assert request.name == "example_db"
    assert request.HasField("auth")
    assert request.auth.password == "secret"


async def test_wire_request_without_password_has_no_auth(grpc_server):
    target, fake = grpc_server
    async with create_client(address=target) as client:
        await Scintirete(client).create_database({"name": "x"})

    [request] = fake.requests["CreateDatabase"]
    assert request.name == "x"
    assert not request.HasField("auth")


async def test_responses_are_returned_as_messages(grpc_server):
    target, _ = grpc_server
    async with create_client(address=target) as client:
        api = Scintirete(client)
        await api.create_database({"name": "a"})
        await api.create_database({"name": "b"})
        listed = await api.list_databases()
        inserted = await api.insert_vectors({
            "db_name": "a",
            "collection_name": "c",
            "vectors": [{"elements": [0.1]}, {"id": "custom", "elements": [0.2]}],
        })
        embedded = await api.embed_text(EmbedTextRequest(texts=["hello", "world"], embedding_model="bge-small"))
        job = await api.bg_save()

    assert list(listed.names) == ["a", "b"]
    assert list(inserted.inserted_ids) == ["vec-1", "custom"]
    assert inserted.inserted_count == 2
    assert embedded.model == "bge-small"
    assert [r.text for r in embedded.results] == ["hello", "world"]
    assert to_dict(job) == {"success": True, "job_id": "job-1"}


async def test_service_error_surfaces_unchanged_with_single_attempt(grpc_server):
    target, fake = grpc_server
    fake.password = "secret"
    async with create_client(address=target, password="wrong") as client:
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await Scintirete(client).create_database({"name": "db"})

    assert ei.value.code() == grpc.StatusCode.UNAUTHENTICATED
    assert ei.value.details() == "invalid password"
    assert len(fake.requests["CreateDatabase"]) == 1


async def test_business_error_is_not_translated(grpc_server):
    target, _ = grpc_server
    async with create_client(address=target) as client:
        api = Scintirete(client)
        await api.create_database({"name": "dup"})
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await api.create_database({"name": "dup"})

    assert ei.value.code() == grpc.StatusCode.ALREADY_EXISTS


async def test_slow_call_does_not_block_fast_call(grpc_server):
    target, fake = grpc_server
    async with create_client(address=target) as client:
        api = Scintirete(client)
        slow = asyncio.create_task(api.search(_search()))
        await asyncio.wait_for(fake.search_started.wait(), timeout=5)

        listed = await asyncio.wait_for(api.list_databases(), timeout=5)
        assert list(listed.names) == []
        assert not slow.done()

        fake.release_search.set()
        found = await asyncio.wait_for(slow, timeout=5)
        assert found.results[0].id == "vec-1"


async def test_per_call_metadata_reaches_server(grpc_server):
    target, fake = grpc_server
    async with create_client(address=target) as client:
        await Scintirete(client).list_databases(options=CallOptions(metadata=[("x-trace-id", "trace-7")]))

    [metadata] = fake.metadata["ListDatabases"]
    assert metadata["x-trace-id"] == "trace-7"
    assert REQUEST_ID_META_KEY not in metadata


async def test_default_deadline_expires_slow_call(grpc_server):
    target, _ = grpc_server
    async with create_client(address=target, default_deadline_ms=100) as client:
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await asyncio.wait_for(Scintirete(client).search(_search()), timeout=5)

    assert ei.value.code() == grpc.StatusCode.DEADLINE_EXCEEDED


async def test_close_fails_outstanding_call(grpc_server):
    target, fake = grpc_server
    client = create_client(address=target)
    api = Scintirete(client)
    pending = asyncio.create_task(api.search(_search()))
    await asyncio.wait_for(fake.search_started.wait(), timeout=5)

    await client.close()

    with pytest.raises((asyncio.CancelledError, grpc.aio.AioRpcError)):
        await asyncio.wait_for(pending, timeout=5)


async def test_call_after_close_rejects_promptly(grpc_server):
    target, fake = grpc_server
    client = create_client(address=target)
    await client.close()

    with pytest.raises(ClientClosedError):
        await asyncio.wait_for(Scintirete(client).list_databases(), timeout=1)
    assert "ListDatabases" not in fake.requests


async def test_request_id_is_propagated_when_enabled(grpc_server):
    target, fake = grpc_server
    set_request_id("req-42")
    try:
        async with create_client(address=target, propagate_request_id=True) as client:
            api = Scintirete(client)
            await api.list_databases()
            await api.list_databases(options=CallOptions(metadata=[(REQUEST_ID_META_KEY, "explicit")]))
    finally:
        set_request_id(None)

    first, second = fake.metadata["ListDatabases"]
    assert first[REQUEST_ID_META_KEY] == "req-42"
    assert second[REQUEST_ID_META_KEY] == "explicit"


async def test_request_id_is_generated_without_context(grpc_server):
    target, fake = grpc_server
    async with create_client(address=target, propagate_request_id=True, log_calls=False) as client:
        await Scintirete(client).list_databases()

    [metadata] = fake.metadata["ListDatabases"]
    assert len(metadata[REQUEST_ID_META_KEY]) == 36


async def test_gzip_channel_round_trip(grpc_server):
    target, fake = grpc_server
    async with create_client(address=target, enable_gzip=True) as client:
        await Scintirete(client).create_database({"name": "zipped"})

    assert fake.databases == ["zipped"]
