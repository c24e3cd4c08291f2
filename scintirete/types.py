"""Typed requests and helper data types for the Scintirete façade.

Request models mirror the ``scintirete.v1`` request messages without their
``auth`` field, which the client injects. Field names follow the proto
(snake_case); unknown fields are rejected so a typo cannot reach the wire.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import grpc
from google.protobuf import json_format
from google.protobuf.message import Message
from pydantic import BaseModel, ConfigDict


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid")


# Helper data types

class HnswConfig(_Request):
    m: int = 16
    ef_construction: int = 200


class VectorData(_Request):
    id: Optional[str] = None
    elements: List[float]
    metadata: Optional[Dict[str, Any]] = None


class TextData(_Request):
    id: Optional[str] = None
    text: str
    metadata: Optional[Dict[str, Any]] = None


class SearchOptions(_Request):
    top_k: int
    ef_search: Optional[int] = None
    include_vector: Optional[bool] = None


# Database

class CreateDatabaseRequest(_Request):
    name: str


class DropDatabaseRequest(_Request):
    name: str


class ListDatabasesRequest(_Request):
    pass


# Collection

class CreateCollectionRequest(_Request):
    db_name: str
    collection_name: str
    # DistanceMetric value or name, e.g. DistanceMetric.COSINE or "COSINE"
    metric_type: Union[int, str]
    hnsw_config: Optional[HnswConfig] = None


class DropCollectionRequest(_Request):
    db_name: str
    collection_name: str


class GetCollectionInfoRequest(_Request):
    db_name: str
    collection_name: str


class ListCollectionsRequest(_Request):
    db_name: str


# Vector

class InsertVectorsRequest(_Request):
    db_name: str
    collection_name: str
    vectors: List[VectorData]


class DeleteVectorsRequest(_Request):
    db_name: str
    collection_name: str
    ids: List[str]


class SearchRequest(SearchOptions):
    db_name: str
    collection_name: str
    query_vector: List[float]


# Text embedding

class EmbedAndInsertRequest(_Request):
    db_name: str
    collection_name: str
    texts: List[TextData]
    embedding_model: Optional[str] = None


class EmbedAndSearchRequest(SearchOptions):
    db_name: str
    collection_name: str
    query_text: str
    embedding_model: Optional[str] = None


class EmbedTextRequest(_Request):
    texts: List[str]
    embedding_model: Optional[str] = None


class ListEmbeddingModelsRequest(_Request):
    pass


# Persistence

class SaveRequest(_Request):
    pass


class BgSaveRequest(_Request):
    pass


RequestLike = Union[BaseModel, Mapping[str, Any]]


@dataclass(frozen=True)
class CallOptions:
    """Per-call overrides forwarded to the gRPC multicallable.

    ``timeout`` is in seconds; when omitted the client's default deadline (if
    any) applies.
    """
    timeout: Optional[float] = None
    metadata: Optional[Sequence[Tuple[str, Union[str, bytes]]]] = None
    credentials: Optional[grpc.CallCredentials] = None
    wait_for_ready: Optional[bool] = None
    compression: Optional[grpc.Compression] = None

    def as_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.metadata is not None:
            kwargs["metadata"] = tuple(self.metadata)
        if self.credentials is not None:
            kwargs["credentials"] = self.credentials
        if self.wait_for_ready is not None:
            kwargs["wait_for_ready"] = self.wait_for_ready
        if self.compression is not None:
            kwargs["compression"] = self.compression
        return kwargs


def to_dict(message: Message) -> dict[str, Any]:
    """Render a response message as a plain dict with proto field names."""
    return json_format.MessageToDict(message, preserving_proto_field_name=True)
