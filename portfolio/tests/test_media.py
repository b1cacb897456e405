"""Tests for /api/admin/media (R2 client mocked)"""
import base64
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from portfolio.app.services import storage_service


@pytest.fixture
def r2():
    client = MagicMock()
    with patch("portfolio.app.services.storage_service._get_r2_client", return_value=client), \
         patch.object(storage_service.settings, "r2_public_url", "https://cdn.example.com"), \
         patch.object(storage_service.settings, "r2_bucket_name", "portfolio"):
        yield client


def test_build_upload_key():
    assert storage_service.build_upload_key("covers/", "my photo (1).png", now_ms=123) == "covers/123-my_photo__1_.png"
    assert storage_service.build_upload_key("", "a.txt", now_ms=5) == "uploads/5-a.txt"


def test_media_requires_auth(client):
    assert client.get("/api/admin/media").status_code == 401


def test_list_flat(client, auth_headers, r2):
    r2.list_objects_v2.return_value = {
        "Contents": [{"Key": "uploads/1-a.png", "Size": 10, "LastModified": datetime(2024, 1, 2)}],
    }
    r = client.get("/api/admin/media", headers=auth_headers, params={"prefix": "uploads/"})
    assert r.status_code == 200
    assert r.json() == [{
        "key": "uploads/1-a.png",
        "size": 10,
        "lastModified": "2024-01-02T00:00:00",
        "url": "https://cdn.example.com/uploads/1-a.png",
    }]
    assert r2.list_objects_v2.call_args.kwargs["Prefix"] == "uploads/"


def test_list_folder_mode(client, auth_headers, r2):
    r2.list_objects_v2.return_value = {
        "CommonPrefixes": [{"Prefix": "uploads/covers/"}],
        "Contents": [
            {"Key": "uploads/", "Size": 0},
            {"Key": "uploads/1-a.png", "Size": 3},
        ],
    }
    r = client.get("/api/admin/media", headers=auth_headers, params={"prefix": "uploads", "mode": "folder"})
    data = r.json()
    assert data["folders"] == [{"name": "covers", "prefix": "uploads/covers/"}]
    assert [f["key"] for f in data["files"]] == ["uploads/1-a.png"]
    kwargs = r2.list_objects_v2.call_args.kwargs
    assert kwargs["Prefix"] == "uploads/"
    assert kwargs["Delimiter"] == "/"


def test_upload_file(client, auth_headers, r2):
    r = client.post(
        "/api/admin/media",
        headers=auth_headers,
        files={"file": ("cover.png", b"\x89PNG", "image/png")},
        data={"folder": "covers"},
    )
    assert r.status_code == 200
    key = r.json()["key"]
    assert key.startswith("covers/") and key.endswith("-cover.png")
    assert r.json()["url"] == f"https://cdn.example.com/{key}"
    kwargs = r2.put_object.call_args.kwargs
    assert kwargs["Body"] == b"\x89PNG"
    assert kwargs["ContentType"] == "image/png"
    assert kwargs["Bucket"] == "portfolio"


def test_chunked_upload(client, auth_headers, r2):
    chunks = [base64.b64encode(b"hello ").decode(), base64.b64encode(b"world").decode()]
    r = client.put(
        "/api/admin/media",
        headers=auth_headers,
        json={"key": "docs/cv.pdf", "chunks": chunks, "contentType": "application/pdf"},
    )
    assert r.status_code == 200
    assert r2.put_object.call_args.kwargs["Body"] == b"hello world"


def test_chunked_upload_bad_encoding(client, auth_headers, r2):
    r = client.put("/api/admin/media", headers=auth_headers, json={"key": "k", "chunks": ["***"]})
    assert r.status_code == 400
    r2.put_object.assert_not_called()


def test_chunked_upload_missing_key(client, auth_headers, r2):
    r = client.put("/api/admin/media", headers=auth_headers, json={"chunks": ["aGk="]})
    assert r.status_code == 400


def test_delete(client, auth_headers, r2):
    r = client.request("DELETE", "/api/admin/media", headers=auth_headers, json={"key": "uploads/1-a.png"})
    assert r.status_code == 200
    r2.delete_object.assert_called_once_with(Bucket="portfolio", Key="uploads/1-a.png")


def test_storage_error_returns_500(client, auth_headers, r2):
    r2.delete_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "DeleteObject"
    )
    r = client.request("DELETE", "/api/admin/media", headers=auth_headers, json={"key": "x"})
    assert r.status_code == 500


def test_unconfigured_r2_returns_500(client, auth_headers):
    with patch.object(storage_service.settings, "r2_account_id", ""):
        r = client.get("/api/admin/media", headers=auth_headers)
    assert r.status_code == 500
