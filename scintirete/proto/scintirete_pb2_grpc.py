"""Client and server classes for ``scintirete.v1.ScintireteService``.

Same shape as the protoc gRPC plugin output: a stub with one multicallable per
RPC, a servicer base whose methods answer UNIMPLEMENTED, and a helper that
registers a servicer on a server.
"""

from __future__ import annotations

import grpc

from scintirete.proto import scintirete_pb2


def _method_path(rpc: str) -> str:
    return f"/{scintirete_pb2.SERVICE_NAME}/{rpc}"


def _message_types(request: str, response: str):
    return getattr(scintirete_pb2, request), getattr(scintirete_pb2, response)


class ScintireteServiceStub:
    """Unary multicallables bound to a channel, named after the RPCs."""

    def __init__(self, channel) -> None:
        for rpc, request, response in scintirete_pb2.RPCS:
            request_cls, response_cls = _message_types(request, response)
            setattr(
                self,
                rpc,
                channel.unary_unary(
                    _method_path(rpc),
                    request_serializer=request_cls.SerializeToString,
                    response_deserializer=response_cls.FromString,
                ),
            )


class ScintireteServiceServicer:
    """Base servicer; subclasses override the RPCs they serve."""


def _unimplemented(rpc: str):
    def method(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details("Method not implemented!")
        raise NotImplementedError("Method not implemented!")

    method.__name__ = rpc
    method.__qualname__ = f"ScintireteServiceServicer.{rpc}"
    return method


for _rpc, _request, _response in scintirete_pb2.RPCS:
    setattr(ScintireteServiceServicer, _rpc, _unimplemented(_rpc))


def add_ScintireteServiceServicer_to_server(servicer, server) -> None:
    rpc_method_handlers = {}
    for rpc, request, response in scintirete_pb2.RPCS:
        request_cls, response_cls = _message_types(request, response)
        rpc_method_handlers[rpc] = grpc.unary_unary_rpc_method_handler(
            getattr(servicer, rpc),
            request_deserializer=request_cls.FromString,
            response_serializer=response_cls.SerializeToString,
        )
    generic_handler = grpc.method_handlers_generic_handler(
        scintirete_pb2.SERVICE_NAME, rpc_method_handlers
    )
    server.add_generic_rpc_handlers((generic_handler,))
