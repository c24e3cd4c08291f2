import logging
import subprocess
import sys
import textwrap
from pathlib import Path

import structlog

from scintirete import create_client
from scintirete.core.logging_config import get_logger

ADDRESS = "127.0.0.1:50051"

# A host program that uses the client without touching logging at all
_HOST_SCRIPT = textwrap.dedent(
    """
    import asyncio

    import grpc

    from scintirete import Scintirete, create_client


    async def main():
        client = create_client(address="127.0.0.1:1", default_deadline_ms=200)
        try:
            await Scintirete(client).list_databases()
        except grpc.aio.AioRpcError:
            pass
        await client.close()
        await client.close()


    asyncio.run(main())
    """
)


def test_library_prints_nothing_without_logging_setup():
    result = subprocess.run(
        [sys.executable, "-c", _HOST_SCRIPT],
        cwd=Path(__file__).parent.parent,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout == ""
    for event in ("scintirete_client_created", "grpc_call_done", "scintirete_client_closed"):
        assert event not in result.stderr


def test_library_loggers_are_stdlib_loggers_with_null_handler():
    package_logger = logging.getLogger("scintirete")
    assert any(isinstance(h, logging.NullHandler) for h in package_logger.handlers)

    logger = get_logger("scintirete.client")
    assert isinstance(logger.bind(), structlog.stdlib.BoundLogger)


async def test_lifecycle_events_reach_host_logging(caplog):
    caplog.set_level(logging.INFO, logger="scintirete")

    client = create_client(address=ADDRESS, log_calls=False)
    await client.close()

    names = {record.name for record in caplog.records}
    assert "scintirete.client" in names
    assert "scintirete_client_created" in caplog.text
    assert "scintirete_client_closed" in caplog.text
