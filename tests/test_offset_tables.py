import json

import httpx
import pytest

from date_tz.adapters.http.offset_table import HttpOffsetTableClient
from date_tz.domain.models import OffsetRecord
from date_tz.infrastructure.offsets.file import FileOffsetTable, records_from_json
from date_tz.infrastructure.offsets.static import StaticOffsetTable

DOCUMENT = {
    "UTC": {"sdt": 0, "dst": 0},
    "Europe/Rome": {"standard_offset_seconds": 3600, "daylight_offset_seconds": 7200},
    "Broken/Zone": {"sdt": "east"},
}


def test_bundled_table_contains_common_zones():
    table = StaticOffsetTable.bundled()
    assert "UTC" in table
    assert "Nowhere/Land" not in table
    assert table.get("Europe/Rome") == OffsetRecord(sdt=3600, dst=7200)
    assert table.get("Asia/Tokyo").observes_dst is False
    assert table.get("America/New_York").dst_delta_seconds == 3600


def test_records_from_json_skips_invalid_entries():
    records = records_from_json(DOCUMENT)
    assert set(records) == {"UTC", "Europe/Rome"}
    assert records["Europe/Rome"].observes_dst is True


def test_records_from_json_requires_object():
    with pytest.raises(ValueError):
        records_from_json(["UTC"])


def test_file_table_loads_json(tmp_path):
    path = tmp_path / "offsets.json"
    path.write_text(json.dumps(DOCUMENT))

    table = FileOffsetTable(path)

    assert len(table) == 2
    assert table.get("UTC") == OffsetRecord(sdt=0, dst=0)
    assert sorted(table.zones()) == ["Europe/Rome", "UTC"]


def test_file_table_rejects_unreadable_file(tmp_path):
    path = tmp_path / "offsets.json"
    path.write_text("{not json")

    with pytest.raises(ValueError, match="Could not load offset table"):
        FileOffsetTable(path)
    with pytest.raises(ValueError):
        FileOffsetTable(tmp_path / "missing.json")


def test_http_client_downloads_table():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/offsets.json"
        return httpx.Response(200, json=DOCUMENT)

    client = HttpOffsetTableClient("https://tz.example.com/offsets.json", transport=httpx.MockTransport(handler))

    table = client.fetch()

    assert table.get("Europe/Rome") == OffsetRecord(sdt=3600, dst=7200)
    assert "Broken/Zone" not in table


def test_http_client_wraps_status_errors():
    client = HttpOffsetTableClient(
        "https://tz.example.com/offsets.json",
        transport=httpx.MockTransport(lambda request: httpx.Response(503, text="maintenance")),
    )

    with pytest.raises(ConnectionError, match="503"):
        client.fetch()


def test_http_client_wraps_connection_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = HttpOffsetTableClient("https://tz.example.com/offsets.json", transport=httpx.MockTransport(handler))

    with pytest.raises(ConnectionError, match="Failed to connect"):
        client.fetch()


def test_http_client_rejects_non_json_body():
    client = HttpOffsetTableClient(
        "https://tz.example.com/offsets.json",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")),
    )

    with pytest.raises(ConnectionError, match="not valid JSON"):
        client.fetch()
