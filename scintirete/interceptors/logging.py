from __future__ import annotations

import time
from typing import Callable, Awaitable

import grpc

from scintirete.core.logging_config import get_logger
from scintirete.interceptors.request_id import _request_id_from


logger = get_logger(__name__)


def _method_name(method) -> str:
    if isinstance(method, bytes):
        return method.decode()
    return str(method)


class LoggingInterceptor(grpc.aio.UnaryUnaryClientInterceptor):
    """One `grpc_call_done` line per unary call with its status and latency.

    Failures are recorded by status code only; the call itself is handed back
    untouched so the caller still receives the original error.
    """

    async def intercept_unary_unary(
        self,
        continuation: Callable[[grpc.aio.ClientCallDetails, object], Awaitable[grpc.aio.UnaryUnaryCall]],
        client_call_details: grpc.aio.ClientCallDetails,
        request: object,
    ):
        start = time.perf_counter()
        call = await continuation(client_call_details, request)
        code = await call.code()
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "grpc_call_done",
            method=_method_name(client_call_details.method),
            code=code.name if code is not None else None,
            elapsed_ms=round(elapsed_ms, 2),
            request_id=_request_id_from(client_call_details.metadata),
        )
        return call
