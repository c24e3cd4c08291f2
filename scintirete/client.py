"""Connection factory for the Scintirete gRPC service.

``create_client`` validates the configuration, opens a ``grpc.aio`` channel
(lazily connected) and returns a :class:`Client` handle exposing the raw stub,
the auth-injection step and channel teardown.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import grpc
from pydantic import BaseModel, ValidationError

from scintirete.core.config import ClientOptions, ScintireteSettings
from scintirete.core.exceptions import ClientClosedError, ConfigurationError
from scintirete.core.logging_config import get_logger
from scintirete.interceptors import LoggingInterceptor, RequestIdInterceptor
from scintirete.proto.scintirete_pb2_grpc import ScintireteServiceStub
from scintirete.types import CallOptions, RequestLike


logger = get_logger(__name__)


class Client:
    """Connection handle: one channel, its stub and the configured secret."""

    def __init__(self, options: ClientOptions, channel: grpc.aio.Channel) -> None:
        self.options = options
        self.channel = channel
        self.raw = ScintireteServiceStub(channel)
        self._closed = False

    @property
    def address(self) -> str:
        return self.options.address

    @property
    def closed(self) -> bool:
        return self._closed

    def with_auth(self, request: Optional[RequestLike] = None) -> dict[str, Any]:
        """Return a copy of ``request`` with the ``auth`` block set.

        The key is always present: ``{"password": ...}`` when a secret is
        configured, ``None`` otherwise. The argument is never mutated.
        """
        if request is None:
            fields: dict[str, Any] = {}
        elif isinstance(request, BaseModel):
            fields = request.model_dump(exclude_none=True)
        else:
            fields = dict(request)

        if not self.options.password:
            return {**fields, "auth": None}
        return {**fields, "auth": {"password": self.options.password}}

    def call_kwargs(self, options: Optional[CallOptions] = None) -> dict[str, Any]:
        kwargs = options.as_kwargs() if options is not None else {}
        if "timeout" not in kwargs and self.options.default_deadline_ms is not None:
            kwargs["timeout"] = self.options.default_deadline_ms / 1000
        return kwargs

    def ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError(self.address)

    async def close(self, grace: Optional[float] = None) -> None:
        """Close the channel. Outstanding calls are cancelled by grpc."""
        if self._closed:
            logger.warning("scintirete_client_already_closed", address=self.address)
            return
        self._closed = True
        await self.channel.close(grace)
        logger.info("scintirete_client_closed", address=self.address)

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<Client address={self.address!r} tls={self.options.use_tls} {state}>"


def _channel_credentials(options: ClientOptions) -> grpc.ChannelCredentials:
    try:
        root_certificates, private_key, certificate_chain = options.tls.read()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read TLS material: {exc}") from exc
    return grpc.ssl_channel_credentials(
        root_certificates=root_certificates,
        private_key=private_key,
        certificate_chain=certificate_chain,
    )


def _interceptors(options: ClientOptions) -> list[grpc.aio.ClientInterceptor]:
    interceptors: list[grpc.aio.ClientInterceptor] = []
    # Request id first so the logging interceptor sees it in the metadata
    if options.propagate_request_id:
        interceptors.append(RequestIdInterceptor())
    if options.log_calls:
        interceptors.append(LoggingInterceptor())
    return interceptors


def create_client(
    options: Union[ClientOptions, Mapping[str, Any], None] = None,
    /,
    **kwargs: Any,
) -> Client:
    """Build a :class:`Client` from options, a mapping, or keyword arguments.

    Raises:
        ConfigurationError: if the configuration is invalid. Reachability of
            the address is not checked; the channel connects on first use.
    """
    try:
        if isinstance(options, ClientOptions):
            opts = ClientOptions.model_validate({**options.model_dump(), **kwargs})
        else:
            opts = ClientOptions.model_validate({**dict(options or {}), **kwargs})
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid Scintirete client configuration",
            details={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc

    channel_args = opts.merged_channel_options()
    compression = grpc.Compression.Gzip if opts.enable_gzip else None
    interceptors = _interceptors(opts)

    if opts.use_tls:
        channel = grpc.aio.secure_channel(
            opts.address,
            _channel_credentials(opts),
            options=channel_args,
            compression=compression,
            interceptors=interceptors,
        )
    else:
        channel = grpc.aio.insecure_channel(
            opts.address,
            options=channel_args,
            compression=compression,
            interceptors=interceptors,
        )

    logger.info(
        "scintirete_client_created",
        address=opts.address,
        tls=opts.use_tls,
        gzip=opts.enable_gzip,
        authenticated=bool(opts.password),
    )
    return Client(opts, channel)


def create_client_from_settings(settings: Optional[ScintireteSettings] = None) -> Client:
    """Build a client from ``SCINTIRETE_*`` environment settings."""
    try:
        settings = settings or ScintireteSettings()
        options = settings.to_client_options()
    except ValidationError as exc:
        raise ConfigurationError(
            "Invalid Scintirete settings",
            details={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc
    return create_client(options)
