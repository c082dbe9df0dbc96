import json
import logging

import httpx
import pytest

from mot_service.logging_config import (
    JSONFormatter,
    configure_logging,
    correlation_id,
    get_app_version,
    lookup_context,
    new_request_id,
)
from mot_service.mot_client import MotLookupClient


def test_json_formatter():
    formatter = JSONFormatter()
    record = logging.LogRecord("test", logging.INFO, "", 0, "hello world", (), None)
    output = formatter.format(record)
    parsed = json.loads(output)
    assert parsed["message"] == "hello world"
    assert parsed["level"] == "INFO"
    assert "timestamp" in parsed
    assert "data" not in parsed


def test_json_formatter_includes_lookup_context():
    formatter = JSONFormatter()
    record = logging.LogRecord("test", logging.INFO, "", 0, "sent", (), None)
    for key, value in lookup_context("req-1", "AB12CDE", status_code=200).items():
        setattr(record, key, value)
    parsed = json.loads(formatter.format(record))
    assert parsed["correlation_id"] == "req-1"
    assert parsed["data"]["registration_number"] == "AB12CDE"
    assert parsed["data"]["status_code"] == 200
    assert parsed["data"]["app_version"] == get_app_version()


def test_configure_logging():
    configure_logging(level="DEBUG", fmt="text")
    root = logging.getLogger()
    assert root.level == logging.DEBUG


def test_correlation_id():
    correlation_id.set("test-123")
    assert correlation_id.get() == "test-123"
    correlation_id.set("")


def test_request_ids_are_unique():
    assert new_request_id() != new_request_id()


@pytest.mark.asyncio
async def test_lookup_logs_share_one_request_id(caplog):
    client = MotLookupClient(
        api_key_provider=lambda: "test-key",
        client_factory=lambda: httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        ),
    )
    with caplog.at_level(logging.INFO, logger="mot_service.mot_client"):
        result = await client.try_lookup("AB12CDE")
    assert result.ok is False

    records = [r for r in caplog.records if r.name == "mot_service.mot_client"]
    assert len(records) >= 3
    request_ids = {r.extra_data["request_id"] for r in records}
    assert len(request_ids) == 1
    assert all(r.extra_data["registration_number"] == "AB12CDE" for r in records)


@pytest.mark.asyncio
async def test_lookup_logs_carry_injected_app_version(caplog):
    client = MotLookupClient(
        api_key_provider=lambda: "test-key",
        client_factory=lambda: httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        ),
        app_version="1.2.3",
    )
    with caplog.at_level(logging.INFO, logger="mot_service.mot_client"):
        await client.try_lookup("AB12CDE")

    records = [r for r in caplog.records if r.name == "mot_service.mot_client"]
    assert records
    assert {r.extra_data["app_version"] for r in records} == {"1.2.3"}


def test_lookup_context_defaults_to_installed_version():
    data = lookup_context("req-1", "AB12CDE")["extra_data"]
    assert data["app_version"] == get_app_version()
