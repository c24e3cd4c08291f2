import grpc
import pytest
from structlog.testing import capture_logs

from scintirete import Scintirete, create_client


pytestmark = pytest.mark.asyncio


async def test_completed_call_is_logged_with_status(grpc_server):
    target, _ = grpc_server
    async with create_client(address=target, password="secret") as client:
        with capture_logs() as logs:
            await Scintirete(client).create_database({"name": "logged"})

    [done] = [entry for entry in logs if entry["event"] == "grpc_call_done"]
    assert done["method"] == "/scintirete.v1.ScintireteService/CreateDatabase"
    assert done["code"] == "OK"
    assert done["elapsed_ms"] >= 0
    assert "secret" not in repr(logs)


async def test_failed_call_is_logged_by_status_code_only(grpc_server):
    target, fake = grpc_server
    fake.password = "secret"
    async with create_client(address=target) as client:
        with capture_logs() as logs:
            with pytest.raises(grpc.aio.AioRpcError):
                await Scintirete(client).list_databases()

    [done] = [entry for entry in logs if entry["event"] == "grpc_call_done"]
    assert done["code"] == "UNAUTHENTICATED"
    assert done["log_level"] == "info"


async def test_call_logging_can_be_disabled(grpc_server):
    target, _ = grpc_server
    async with create_client(address=target, log_calls=False) as client:
        with capture_logs() as logs:
            await Scintirete(client).list_databases()

    assert [entry for entry in logs if entry["event"] == "grpc_call_done"] == []
