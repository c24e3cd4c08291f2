"""Client-side gRPC interceptors installed by the connection factory."""

from scintirete.interceptors.logging import LoggingInterceptor
from scintirete.interceptors.request_id import RequestIdInterceptor, get_request_id, set_request_id

__all__ = ["LoggingInterceptor", "RequestIdInterceptor", "get_request_id", "set_request_id"]
