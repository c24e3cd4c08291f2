"""Typed asynchronous façade over the Scintirete service stub.

Each method injects auth through the :class:`~scintirete.client.Client`,
encodes the request message and awaits exactly one unary call. Errors from
the transport or the service (``grpc.aio.AioRpcError``) reach the caller
unchanged; nothing is retried.
"""
from __future__ import annotations

import math
from typing import Any, Callable, Mapping, Optional, Type

from google.protobuf import json_format
from google.protobuf.descriptor import Descriptor, FieldDescriptor
from google.protobuf.message import Message

from scintirete.client import Client
from scintirete.core.exceptions import RequestEncodingError
from scintirete.proto import scintirete_pb2 as pb
from scintirete.types import (
    BgSaveRequest,
    CallOptions,
    CreateCollectionRequest,
    CreateDatabaseRequest,
    DeleteVectorsRequest,
    DropCollectionRequest,
    DropDatabaseRequest,
    EmbedAndInsertRequest,
    EmbedAndSearchRequest,
    EmbedTextRequest,
    GetCollectionInfoRequest,
    InsertVectorsRequest,
    ListCollectionsRequest,
    ListDatabasesRequest,
    ListEmbeddingModelsRequest,
    RequestLike,
    SaveRequest,
    SearchRequest,
)


_FLOATING_TYPES = (FieldDescriptor.TYPE_FLOAT, FieldDescriptor.TYPE_DOUBLE)


def _json_float(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    return value


def _spell_non_finite(fields: Mapping[str, Any], descriptor: Descriptor) -> dict[str, Any]:
    """Quote inf/nan in float fields so they encode like any other float.

    The protobuf JSON mapping only accepts non-finite numbers as the strings
    ``"Infinity"``, ``"-Infinity"`` and ``"NaN"``. Well-known types such as
    ``Struct`` are passed through untouched.
    """
    out = dict(fields)
    for name, value in fields.items():
        field = descriptor.fields_by_name.get(name)
        if field is None or value is None:
            continue
        if field.type in _FLOATING_TYPES:
            if isinstance(value, (list, tuple)):
                out[name] = [_json_float(v) for v in value]
            else:
                out[name] = _json_float(value)
        elif field.type == FieldDescriptor.TYPE_MESSAGE and not field.message_type.file.name.startswith(
            "google/protobuf/"
        ):
            nested = field.message_type
            if isinstance(value, (list, tuple)):
                out[name] = [_spell_non_finite(v, nested) if isinstance(v, Mapping) else v for v in value]
            elif isinstance(value, Mapping):
                out[name] = _spell_non_finite(value, nested)
    return out


class Scintirete:
    def __init__(self, client: Client) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        return self._client

    def encode(self, message_type: Type[Message], req: Optional[RequestLike]) -> Message:
        """Build the wire message for ``req`` with auth injected."""
        envelope = _spell_non_finite(self._client.with_auth(req), message_type.DESCRIPTOR)
        try:
            return json_format.ParseDict(envelope, message_type())
        except json_format.ParseError as exc:
            raise RequestEncodingError(message_type.DESCRIPTOR.full_name, str(exc)) from exc

    async def _call_unary(
        self,
        rpc: str,
        message_type: Type[Message],
        req: Optional[RequestLike],
        options: Optional[CallOptions],
    ) -> Any:
        self._client.ensure_open()
        request = self.encode(message_type, req)
        method: Callable[..., Any] = getattr(self._client.raw, rpc)
        return await method(request, **self._client.call_kwargs(options))

    # Database operations
    async def create_database(
        self, req: CreateDatabaseRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.CreateDatabaseResponse:
        return await self._call_unary("CreateDatabase", pb.CreateDatabaseRequest, req, options)

    async def drop_database(
        self, req: DropDatabaseRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.DropDatabaseResponse:
        return await self._call_unary("DropDatabase", pb.DropDatabaseRequest, req, options)

    async def list_databases(
        self, req: Optional[ListDatabasesRequest | RequestLike] = None, *, options: Optional[CallOptions] = None
    ) -> pb.ListDatabasesResponse:
        return await self._call_unary("ListDatabases", pb.ListDatabasesRequest, req, options)

    # Collection operations
    async def create_collection(
        self, req: CreateCollectionRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.CreateCollectionResponse:
        return await self._call_unary("CreateCollection", pb.CreateCollectionRequest, req, options)

    async def drop_collection(
        self, req: DropCollectionRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.DropCollectionResponse:
        return await self._call_unary("DropCollection", pb.DropCollectionRequest, req, options)

    async def get_collection_info(
        self, req: GetCollectionInfoRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.CollectionInfo:
        return await self._call_unary("GetCollectionInfo", pb.GetCollectionInfoRequest, req, options)

    async def list_collections(
        self, req: ListCollectionsRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.ListCollectionsResponse:
        return await self._call_unary("ListCollections", pb.ListCollectionsRequest, req, options)

    # Vector operations
    async def insert_vectors(
        self, req: InsertVectorsRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.InsertVectorsResponse:
        return await self._call_unary("InsertVectors", pb.InsertVectorsRequest, req, options)

    async def delete_vectors(
        self, req: DeleteVectorsRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.DeleteVectorsResponse:
        return await self._call_unary("DeleteVectors", pb.DeleteVectorsRequest, req, options)

    async def search(
        self, req: SearchRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.SearchResponse:
        return await self._call_unary("Search", pb.SearchRequest, req, options)

    # Text embedding operations
    async def embed_and_insert(
        self, req: EmbedAndInsertRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.EmbedAndInsertResponse:
        return await self._call_unary("EmbedAndInsert", pb.EmbedAndInsertRequest, req, options)

    async def embed_and_search(
        self, req: EmbedAndSearchRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.SearchResponse:
        return await self._call_unary("EmbedAndSearch", pb.EmbedAndSearchRequest, req, options)

    async def embed_text(
        self, req: EmbedTextRequest | RequestLike, *, options: Optional[CallOptions] = None
    ) -> pb.EmbedTextResponse:
        return await self._call_unary("EmbedText", pb.EmbedTextRequest, req, options)

    async def list_embedding_models(
        self,
        req: Optional[ListEmbeddingModelsRequest | RequestLike] = None,
        *,
        options: Optional[CallOptions] = None,
    ) -> pb.ListEmbeddingModelsResponse:
        return await self._call_unary("ListEmbeddingModels", pb.ListEmbeddingModelsRequest, req, options)

    # Persistence operations
    async def save(
        self, req: Optional[SaveRequest | RequestLike] = None, *, options: Optional[CallOptions] = None
    ) -> pb.SaveResponse:
        return await self._call_unary("Save", pb.SaveRequest, req, options)

    async def bg_save(
        self, req: Optional[BgSaveRequest | RequestLike] = None, *, options: Optional[CallOptions] = None
    ) -> pb.BgSaveResponse:
        return await self._call_unary("BgSave", pb.BgSaveRequest, req, options)
