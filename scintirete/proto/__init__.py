"""Wire schema for the Scintirete service (``scintirete.v1``)."""

from scintirete.proto import scintirete_pb2, scintirete_pb2_grpc

__all__ = ["scintirete_pb2", "scintirete_pb2_grpc"]
