"""Message classes for the ``scintirete.v1`` schema.

The descriptor is assembled from ``protos/scintirete/v1/scintirete.proto`` as a
``FileDescriptorProto`` and added to the protobuf default pool, the same way
protoc output registers its serialized file. No code-generation step is
needed to use the client.
"""

from __future__ import annotations

from typing import Sequence, Tuple, Union

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf import struct_pb2  # noqa: F401  registers google/protobuf/struct.proto
from google.protobuf.internal import enum_type_wrapper


PACKAGE = "scintirete.v1"
FILE_NAME = "scintirete/v1/scintirete.proto"
SERVICE_NAME = f"{PACKAGE}.ScintireteService"

_F = descriptor_pb2.FieldDescriptorProto

STRING = _F.TYPE_STRING
BOOL = _F.TYPE_BOOL
INT32 = _F.TYPE_INT32
INT64 = _F.TYPE_INT64
FLOAT = _F.TYPE_FLOAT
DOUBLE = _F.TYPE_DOUBLE
STRUCT = ".google.protobuf.Struct"

# (name, number, type or message/enum name, flags); flags: "repeated" | "optional"
FieldSpec = Tuple[str, int, Union[int, str], str]

_ENUMS = {
    "DistanceMetric": ("DISTANCE_METRIC_UNSPECIFIED", "L2", "COSINE", "INNER_PRODUCT"),
}

_AUTH: FieldSpec = ("auth", 1, "AuthInfo", "")

_MESSAGES: Sequence[Tuple[str, Sequence[FieldSpec]]] = (
    ("AuthInfo", (("password", 1, STRING, ""),)),
    ("HnswConfig", (("m", 1, INT32, ""), ("ef_construction", 2, INT32, ""))),
    ("Vector", (
        ("id", 1, STRING, ""),
        ("elements", 2, FLOAT, "repeated"),
        ("metadata", 3, STRUCT, ""),
    )),
    ("TextWithMetadata", (
        ("id", 1, STRING, "optional"),
        ("text", 2, STRING, ""),
        ("metadata", 3, STRUCT, ""),
    )),
    ("SearchResultItem", (
        ("id", 1, STRING, ""),
        ("distance", 2, FLOAT, ""),
        ("metadata", 3, STRUCT, ""),
        ("vector", 4, "Vector", ""),
    )),
    ("CollectionInfo", (
        ("name", 1, STRING, ""),
        ("dimension", 2, INT32, ""),
        ("vector_count", 3, INT64, ""),
        ("deleted_count", 4, INT64, ""),
        ("memory_bytes", 5, INT64, ""),
        ("metric_type", 6, "DistanceMetric", ""),
        ("hnsw_config", 7, "HnswConfig", ""),
    )),
    ("EmbedTextResult", (
        ("text", 1, STRING, ""),
        ("embedding", 2, FLOAT, "repeated"),
        ("index", 3, INT32, ""),
    )),
    ("EmbeddingModel", (
        ("id", 1, STRING, ""),
        ("name", 2, STRING, ""),
        ("dimension", 3, INT32, ""),
        ("available", 4, BOOL, ""),
        ("description", 5, STRING, ""),
    )),
    # Database
    ("CreateDatabaseRequest", (_AUTH, ("name", 2, STRING, ""))),
    ("CreateDatabaseResponse", (("success", 1, BOOL, ""), ("message", 2, STRING, ""))),
    ("DropDatabaseRequest", (_AUTH, ("name", 2, STRING, ""))),
    ("DropDatabaseResponse", (
        ("success", 1, BOOL, ""),
        ("message", 2, STRING, ""),
        ("dropped_collections", 3, INT32, ""),
    )),
    ("ListDatabasesRequest", (_AUTH,)),
    ("ListDatabasesResponse", (("names", 1, STRING, "repeated"),)),
    # Collection
    ("CreateCollectionRequest", (
        _AUTH,
        ("db_name", 2, STRING, ""),
        ("collection_name", 3, STRING, ""),
        ("metric_type", 4, "DistanceMetric", ""),
        ("hnsw_config", 5, "HnswConfig", ""),
    )),
    ("CreateCollectionResponse", (("success", 1, BOOL, ""), ("message", 2, STRING, ""))),
    ("DropCollectionRequest", (
        _AUTH,
        ("db_name", 2, STRING, ""),
        ("collection_name", 3, STRING, ""),
    )),
    ("DropCollectionResponse", (
        ("success", 1, BOOL, ""),
        ("message", 2, STRING, ""),
        ("dropped_vectors", 3, INT64, ""),
    )),
    ("GetCollectionInfoRequest", (
        _AUTH,
        ("db_name", 2, STRING, ""),
        ("collection_name", 3, STRING, ""),
    )),
    ("ListCollectionsRequest", (_AUTH, ("db_name", 2, STRING, ""))),
    ("ListCollectionsResponse", (("collections", 1, "CollectionInfo", "repeated"),)),
    # Vector
    ("InsertVectorsRequest", (
        _AUTH,
        ("db_name", 2, STRING, ""),
        ("collection_name", 3, STRING, ""),
        ("vectors", 4, "Vector", "repeated"),
    )),
    ("InsertVectorsResponse", (
        ("inserted_ids", 1, STRING, "repeated"),
        ("inserted_count", 2, INT64, ""),
    )),
    ("DeleteVectorsRequest", (
        _AUTH,
        ("db_name", 2, STRING, ""),
        ("collection_name", 3, STRING, ""),
        ("ids", 4, STRING, "repeated"),
    )),
    ("DeleteVectorsResponse", (("deleted_count", 1, INT64, ""),)),
    ("SearchRequest", (
        _AUTH,
        ("db_name", 2, STRING, ""),
        ("collection_name", 3, STRING, ""),
        ("query_vector", 4, FLOAT, "repeated"),
        ("top_k", 5, INT32, ""),
        ("ef_search", 6, INT32, "optional"),
        ("include_vector", 7, BOOL, "optional"),
    )),
    ("SearchResponse", (("results", 1, "SearchResultItem", "repeated"),)),
    # Text embedding
    ("EmbedAndInsertRequest", (
        _AUTH,
        ("db_name", 2, STRING, ""),
        ("collection_name", 3, STRING, ""),
        ("texts", 4, "TextWithMetadata", "repeated"),
        ("embedding_model", 5, STRING, "optional"),
    )),
    ("EmbedAndInsertResponse", (
        ("inserted_ids", 1, STRING, "repeated"),
        ("inserted_count", 2, INT64, ""),
    )),
    ("EmbedAndSearchRequest", (
        _AUTH,
        ("db_name", 2, STRING, ""),
        ("collection_name", 3, STRING, ""),
        ("query_text", 4, STRING, ""),
        ("embedding_model", 5, STRING, "optional"),
        ("top_k", 6, INT32, ""),
        ("ef_search", 7, INT32, "optional"),
        ("include_vector", 8, BOOL, "optional"),
    )),
    ("EmbedTextRequest", (
        _AUTH,
        ("texts", 2, STRING, "repeated"),
        ("embedding_model", 3, STRING, "optional"),
    )),
    ("EmbedTextResponse", (
        ("results", 1, "EmbedTextResult", "repeated"),
        ("model", 2, STRING, ""),
    )),
    ("ListEmbeddingModelsRequest", (_AUTH,)),
    ("ListEmbeddingModelsResponse", (
        ("models", 1, "EmbeddingModel", "repeated"),
        ("default_model", 2, STRING, ""),
    )),
    # Persistence
    ("SaveRequest", (_AUTH,)),
    ("SaveResponse", (
        ("success", 1, BOOL, ""),
        ("message", 2, STRING, ""),
        ("snapshot_size", 3, INT64, ""),
        ("duration_seconds", 4, DOUBLE, ""),
    )),
    ("BgSaveRequest", (_AUTH,)),
    ("BgSaveResponse", (
        ("success", 1, BOOL, ""),
        ("message", 2, STRING, ""),
        ("job_id", 3, STRING, ""),
    )),
)

# RPC name -> (request message, response message)
RPCS: Sequence[Tuple[str, str, str]] = (
    ("CreateDatabase", "CreateDatabaseRequest", "CreateDatabaseResponse"),
    ("DropDatabase", "DropDatabaseRequest", "DropDatabaseResponse"),
    ("ListDatabases", "ListDatabasesRequest", "ListDatabasesResponse"),
    ("CreateCollection", "CreateCollectionRequest", "CreateCollectionResponse"),
    ("DropCollection", "DropCollectionRequest", "DropCollectionResponse"),
    ("GetCollectionInfo", "GetCollectionInfoRequest", "CollectionInfo"),
    ("ListCollections", "ListCollectionsRequest", "ListCollectionsResponse"),
    ("InsertVectors", "InsertVectorsRequest", "InsertVectorsResponse"),
    ("DeleteVectors", "DeleteVectorsRequest", "DeleteVectorsResponse"),
    ("Search", "SearchRequest", "SearchResponse"),
    ("EmbedAndInsert", "EmbedAndInsertRequest", "EmbedAndInsertResponse"),
    ("EmbedAndSearch", "EmbedAndSearchRequest", "SearchResponse"),
    ("EmbedText", "EmbedTextRequest", "EmbedTextResponse"),
    ("ListEmbeddingModels", "ListEmbeddingModelsRequest", "ListEmbeddingModelsResponse"),
    ("Save", "SaveRequest", "SaveResponse"),
    ("BgSave", "BgSaveRequest", "BgSaveResponse"),
)


def _json_name(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _add_field(msg: descriptor_pb2.DescriptorProto, spec: FieldSpec) -> None:
    name, number, kind, flags = spec
    field = msg.field.add(
        name=name,
        number=number,
        json_name=_json_name(name),
        label=_F.LABEL_REPEATED if flags == "repeated" else _F.LABEL_OPTIONAL,
    )
    if isinstance(kind, str):
        field.type = _F.TYPE_ENUM if kind in _ENUMS else _F.TYPE_MESSAGE
        field.type_name = kind if kind.startswith(".") else f".{PACKAGE}.{kind}"
    else:
        field.type = kind
    if flags == "optional":
        # proto3 `optional` is a synthetic single-field oneof named `_<field>`
        field.proto3_optional = True
        field.oneof_index = len(msg.oneof_decl)
        msg.oneof_decl.add(name=f"_{name}")


def build_file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(
        name=FILE_NAME,
        package=PACKAGE,
        syntax="proto3",
        dependency=["google/protobuf/struct.proto"],
    )
    for enum_name, values in _ENUMS.items():
        enum = fdp.enum_type.add(name=enum_name)
        for number, value_name in enumerate(values):
            enum.value.add(name=value_name, number=number)
    for msg_name, fields in _MESSAGES:
        msg = fdp.message_type.add(name=msg_name)
        for spec in fields:
            _add_field(msg, spec)
    service = fdp.service.add(name=SERVICE_NAME.rsplit(".", 1)[-1])
    for rpc, request, response in RPCS:
        service.method.add(
            name=rpc,
            input_type=f".{PACKAGE}.{request}",
            output_type=f".{PACKAGE}.{response}",
        )
    return fdp


DESCRIPTOR = descriptor_pool.Default().AddSerializedFile(
    build_file_descriptor_proto().SerializeToString()
)


def _message(name: str):
    return message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name[name])


DistanceMetric = enum_type_wrapper.EnumTypeWrapper(DESCRIPTOR.enum_types_by_name["DistanceMetric"])
DISTANCE_METRIC_UNSPECIFIED = 0
L2 = 1
COSINE = 2
INNER_PRODUCT = 3

AuthInfo = _message("AuthInfo")
HnswConfig = _message("HnswConfig")
Vector = _message("Vector")
TextWithMetadata = _message("TextWithMetadata")
SearchResultItem = _message("SearchResultItem")
CollectionInfo = _message("CollectionInfo")
EmbedTextResult = _message("EmbedTextResult")
EmbeddingModel = _message("EmbeddingModel")

CreateDatabaseRequest = _message("CreateDatabaseRequest")
CreateDatabaseResponse = _message("CreateDatabaseResponse")
DropDatabaseRequest = _message("DropDatabaseRequest")
DropDatabaseResponse = _message("DropDatabaseResponse")
ListDatabasesRequest = _message("ListDatabasesRequest")
ListDatabasesResponse = _message("ListDatabasesResponse")

CreateCollectionRequest = _message("CreateCollectionRequest")
CreateCollectionResponse = _message("CreateCollectionResponse")
DropCollectionRequest = _message("DropCollectionRequest")
DropCollectionResponse = _message("DropCollectionResponse")
GetCollectionInfoRequest = _message("GetCollectionInfoRequest")
ListCollectionsRequest = _message("ListCollectionsRequest")
ListCollectionsResponse = _message("ListCollectionsResponse")

InsertVectorsRequest = _message("InsertVectorsRequest")
InsertVectorsResponse = _message("InsertVectorsResponse")
DeleteVectorsRequest = _message("DeleteVectorsRequest")
DeleteVectorsResponse = _message("DeleteVectorsResponse")
SearchRequest = _message("SearchRequest")
SearchResponse = _message("SearchResponse")

EmbedAndInsertRequest = _message("EmbedAndInsertRequest")
EmbedAndInsertResponse = _message("EmbedAndInsertResponse")
EmbedAndSearchRequest = _message("EmbedAndSearchRequest")
EmbedTextRequest = _message("EmbedTextRequest")
EmbedTextResponse = _message("EmbedTextResponse")
ListEmbeddingModelsRequest = _message("ListEmbeddingModelsRequest")
ListEmbeddingModelsResponse = _message("ListEmbeddingModelsResponse")

SaveRequest = _message("SaveRequest")
SaveResponse = _message("SaveResponse")
BgSaveRequest = _message("BgSaveRequest")
BgSaveResponse = _message("BgSaveResponse")
