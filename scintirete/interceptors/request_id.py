from __future__ import annotations

import uuid
import contextvars
from typing import Callable, Awaitable

import grpc


REQUEST_ID_META_KEY = "x-request-id"
_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("scintirete_request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_var.get()


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Pin the request id for calls issued from the current context."""
    return _request_id_var.set(request_id)


def _request_id_from(metadata) -> str | None:
    for key, value in metadata or ():
        if key == REQUEST_ID_META_KEY:
            return value
    return None


class RequestIdInterceptor(grpc.aio.UnaryUnaryClientInterceptor):
    """Attach `x-request-id` metadata to outgoing unary calls.

    An id already present in the call metadata wins, then the context-bound
    id, then a fresh uuid4.
    """

    async def intercept_unary_unary(
        self,
        continuation: Callable[[grpc.aio.ClientCallDetails, object], Awaitable[grpc.aio.UnaryUnaryCall]],
        client_call_details: grpc.aio.ClientCallDetails,
        request: object,
    ):
        if _request_id_from(client_call_details.metadata):
            return await continuation(client_call_details, request)

        request_id = get_request_id() or str(uuid.uuid4())
        metadata = grpc.aio.Metadata(*tuple(client_call_details.metadata or ()))
        metadata.add(REQUEST_ID_META_KEY, request_id)
        details = grpc.aio.ClientCallDetails(
            method=client_call_details.method,
            timeout=client_call_details.timeout,
            metadata=metadata,
            credentials=client_call_details.credentials,
            wait_for_ready=client_call_details.wait_for_ready,
        )
        return await continuation(details, request)
