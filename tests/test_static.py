from __future__ import annotations

import gzip
import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from innforum.web import static
from innforum.web.static import SigninFallbackStaticFiles, accepts_gzip, serve_dir


@pytest.fixture()
def asset_root(tmp_path: Path) -> Path:
    root = tmp_path / "assets"
    root.mkdir()
    (root / "hello.txt").write_text("hello world", encoding="utf-8")
    (root / "sub").mkdir()
    return root


@pytest.fixture()
def asset_client(asset_root: Path) -> TestClient:
    app = FastAPI()
    app.mount("/files", SigninFallbackStaticFiles(directory=str(asset_root)), name="files")
    return TestClient(app, raise_server_exceptions=False, follow_redirects=False)


def test_existing_file_is_served(asset_client):
    resp = asset_client.get("/files/hello.txt")
    assert resp.status_code == 200
    assert resp.text == "hello world"


def test_missing_file_redirects_to_signin(asset_client):
    resp = asset_client.get("/files/nope.png")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/signin"


def test_directory_redirects_to_signin(asset_client):
    resp = asset_client.get("/files/sub")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/signin"


def test_precompressed_variant_preferred(asset_root, asset_client):
    (asset_root / "app.css").write_text("body{color:red}", encoding="utf-8")
    (asset_root / "app.css.gz").write_bytes(gzip.compress(b"body{color:blue}"))

    resp = asset_client.get("/files/app.css", headers={"Accept-Encoding": "gzip"})
    assert resp.status_code == 200
    assert resp.headers["content-encoding"] == "gzip"
    assert resp.headers["content-type"].startswith("text/css")
    assert resp.text == "body{color:blue}"

    plain = asset_client.get("/files/app.css", headers={"Accept-Encoding": "identity"})
    assert "content-encoding" not in plain.headers
    assert plain.text == "body{color:red}"


def test_gzip_refused_with_zero_quality(asset_root, asset_client):
    (asset_root / "app.css").write_text("body{color:red}", encoding="utf-8")
    (asset_root / "app.css.gz").write_bytes(gzip.compress(b"body{color:blue}"))

    resp = asset_client.get("/files/app.css", headers={"Accept-Encoding": "gzip;q=0, identity"})
    assert resp.status_code == 200
    assert "content-encoding" not in resp.headers
    assert resp.text == "body{color:red}"


@pytest.mark.parametrize(
    "header, expected",
    [
        ("gzip", True),
        ("deflate, gzip;q=0.5", True),
        ("GZIP; Q=1.0", True),
        ("gzip;q=0", False),
        ("gzip; q=0.000, br", False),
        ("identity", False),
        ("", False),
        ("*", True),
        ("*;q=0", False),
        ("gzip;q=0, *", False),
        ("br, *;q=0.1", True),
    ],
)
def test_accepts_gzip(header, expected):
    assert accepts_gzip(header) is expected


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_unreadable_file_is_internal_error(asset_root, asset_client):
    secret = asset_root / "secret.txt"
    secret.write_text("nope", encoding="utf-8")
    secret.chmod(0)
    try:
        resp = asset_client.get("/files/secret.txt")
    finally:
        secret.chmod(0o644)
    assert resp.status_code == 500
    assert resp.text.startswith("Unhandled internal error:")


@pytest.mark.parametrize("encoding", ["identity", "gzip"])
def test_read_failure_is_internal_error(asset_root, asset_client, monkeypatch, encoding):
    (asset_root / "hello.txt.gz").write_bytes(gzip.compress(b"hello world"))

    def broken(path):
        raise OSError("disk on fire")

    monkeypatch.setattr(static, "_ensure_readable", broken)

    resp = asset_client.get("/files/hello.txt", headers={"Accept-Encoding": encoding})
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "Unhandled internal error: disk on fire"


@pytest.mark.parametrize("encoding", ["identity", "gzip"])
def test_permission_denied_on_lookup_is_internal_error(asset_client, monkeypatch, encoding):
    real_stat = os.stat

    def guarded_stat(path, *args, **kwargs):
        if str(path).endswith("secret.txt"):
            raise PermissionError(13, "Permission denied", str(path))
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", guarded_stat)

    resp = asset_client.get("/files/locked/secret.txt", headers={"Accept-Encoding": encoding})
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text.startswith("Unhandled internal error:")
    assert "Permission denied" in resp.text


def test_serve_dir_creates_directory(tmp_path):
    target = tmp_path / "upload" / "avatars"
    app = serve_dir(str(target))
    assert target.is_dir()
    assert isinstance(app, SigninFallbackStaticFiles)


def test_mounted_serve_dirs_in_app(client, conf):
    Path(conf.SERVE_DIR[1][1], "faq.txt").write_text("faq", encoding="utf-8")
    assert client.get("/static/docs/faq.txt").text == "faq"
    missing = client.get("/static/imgs/avatar.png")
    assert missing.status_code == 303
    assert missing.headers["location"] == "/signin"
