"""Pytest bootstrap configuration.

Shared fakes: a recording stand-in for the generated stub (unit tests) and an
in-process grpc.aio server running a fake ScintireteService (integration).
"""
import asyncio
from typing import Tuple

import grpc
import pytest

from scintirete.proto import scintirete_pb2 as pb
from scintirete.proto import scintirete_pb2_grpc


class RecordingStub:
    """Stands in for ScintireteServiceStub; records every outgoing call."""

    def __init__(self, responses=None, error: Exception | None = None):
        self.calls: list[tuple[str, object, dict]] = []
        self.responses = responses or {}
        self.error = error

    def __getattr__(self, rpc: str):
        if rpc.startswith("_"):
            raise AttributeError(rpc)

        async def _invoke(request, **kwargs):
            self.calls.append((rpc, request, kwargs))
            if self.error is not None:
                raise self.error
            return self.responses.get(rpc)

        return _invoke


class FakeScintireteService(scintirete_pb2_grpc.ScintireteServiceServicer):
    """In-memory fake; records requests and metadata per RPC."""

    def __init__(self, password: str | None = None):
        self.password = password
        self.requests: dict[str, list] = {}
        self.metadata: dict[str, list[dict]] = {}
        self.databases: list[str] = []
        self.search_started = asyncio.Event()
        self.release_search = asyncio.Event()

    async def _record(self, rpc: str, request, context: grpc.aio.ServicerContext) -> None:
        self.requests.setdefault(rpc, []).append(request)
        self.metadata.setdefault(rpc, []).append(dict(context.invocation_metadata() or ()))
        if self.password is not None and request.auth.password != self.password:
            await context.abort(grpc.StatusCode.UNAUTHENTICATED, "invalid password")

    async def CreateDatabase(self, request, context):  # type: ignore[override]
        await self._record("CreateDatabase", request, context)
        if request.name in self.databases:
            await context.abort(grpc.StatusCode.ALREADY_EXISTS, f"database {request.name} already exists")
        self.databases.append(request.name)
        return pb.CreateDatabaseResponse(success=True, message="created")

    async def ListDatabases(self, request, context):  # type: ignore[override]
        await self._record("ListDatabases", request, context)
        return pb.ListDatabasesResponse(names=self.databases)

    async def InsertVectors(self, request, context):  # type: ignore[override]
        await self._record("InsertVectors", request, context)
        ids = [v.id or f"vec-{i}" for i, v in enumerate(request.vectors, start=1)]
        return pb.InsertVectorsResponse(inserted_ids=ids, inserted_count=len(ids))

    async def Search(self, request, context):  # type: ignore[override]
        await self._record("Search", request, context)
        self.search_started.set()
        await self.release_search.wait()
        return pb.SearchResponse(results=[pb.SearchResultItem(id="vec-1", distance=0.01)])

    async def EmbedText(self, request, context):  # type: ignore[override]
        await self._record("EmbedText", request, context)
        return pb.EmbedTextResponse(
            results=[
                pb.EmbedTextResult(text=text, embedding=[0.5, 0.25], index=i)
                for i, text in enumerate(request.texts)
            ],
            model=request.embedding_model or "default",
        )

    async def BgSave(self, request, context):  # type: ignore[override]
        await self._record("BgSave", request, context)
        return pb.BgSaveResponse(success=True, job_id="job-1")


@pytest.fixture
def recording_stub() -> RecordingStub:
    return RecordingStub()


@pytest.fixture
def fake_service() -> FakeScintireteService:
    return FakeScintireteService()


@pytest.fixture
async def grpc_server(fake_service) -> Tuple[str, FakeScintireteService]:
    """Serve the fake on an ephemeral loopback port (port 0)."""
    server = grpc.aio.server()
    scintirete_pb2_grpc.add_ScintireteServiceServicer_to_server(fake_service, server)
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()
    try:
        yield f"127.0.0.1:{port}", fake_service
    finally:
        fake_service.release_search.set()
        await server.stop(grace=None)
