"""Asynchronous Python client for the Scintirete vector database."""

import logging

from scintirete.api import Scintirete
from scintirete.client import Client, create_client, create_client_from_settings
from scintirete.core.config import DEFAULT_CHANNEL_OPTIONS, ClientOptions, ScintireteSettings, TlsSettings
from scintirete.core.exceptions import (
    ClientClosedError,
    ConfigurationError,
    RequestEncodingError,
    ScintireteError,
)
from scintirete.core.logging_config import configure_logging
from scintirete.proto.scintirete_pb2 import DistanceMetric
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
    HnswConfig,
    InsertVectorsRequest,
    ListCollectionsRequest,
    ListDatabasesRequest,
    ListEmbeddingModelsRequest,
    SaveRequest,
    SearchOptions,
    SearchRequest,
    TextData,
    VectorData,
    to_dict,
)

# Silent unless the host configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Scintirete",
    "Client",
    "create_client",
    "create_client_from_settings",
    "ClientOptions",
    "ScintireteSettings",
    "TlsSettings",
    "DEFAULT_CHANNEL_OPTIONS",
    "ScintireteError",
    "ConfigurationError",
    "ClientClosedError",
    "RequestEncodingError",
    "configure_logging",
    "DistanceMetric",
    "CallOptions",
    "HnswConfig",
    "VectorData",
    "TextData",
    "SearchOptions",
    "CreateDatabaseRequest",
    "DropDatabaseRequest",
    "ListDatabasesRequest",
    "CreateCollectionRequest",
    "DropCollectionRequest",
    "GetCollectionInfoRequest",
    "ListCollectionsRequest",
    "InsertVectorsRequest",
    "DeleteVectorsRequest",
    "SearchRequest",
    "EmbedAndInsertRequest",
    "EmbedAndSearchRequest",
    "EmbedTextRequest",
    "ListEmbeddingModelsRequest",
    "SaveRequest",
    "BgSaveRequest",
    "to_dict",
]
