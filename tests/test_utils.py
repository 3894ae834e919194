"""Tests for loading bridge descriptions."""

import io
import json

import pytest
import requests

from qobject_bindgen import utils
from qobject_bindgen.utils import (
    BridgeLoadError,
    load_bridge,
    load_bridge_file,
    load_bridge_stream,
    load_bridge_url,
)

BRIDGE = {"cxx_file_stem": "a", "qobjects": [{"name": "A"}]}


class FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)


def serve(monkeypatch, response):
    monkeypatch.setattr(utils.requests, "get", lambda url, timeout: response)


class TestLoadBridgeFile:
    def test_load(self, tmp_path):
        path = tmp_path / "bridge.json"
        path.write_text(json.dumps(BRIDGE), encoding="utf-8")

        assert load_bridge_file(path) == (str(path), BRIDGE)

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_bridge_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bridge.json"
        path.write_text("[1,", encoding="utf-8")
        with pytest.raises(BridgeLoadError, match="Invalid JSON"):
            load_bridge_file(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "bridge.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(BridgeLoadError, match="not list"):
            load_bridge_file(path)

    def test_missing_stem(self, tmp_path):
        path = tmp_path / "bridge.json"
        path.write_text(json.dumps({"qobjects": []}), encoding="utf-8")
        with pytest.raises(BridgeLoadError, match="cxx_file_stem"):
            load_bridge_file(path)


class TestLoadBridgeUrl:
    def test_load(self, monkeypatch):
        serve(monkeypatch, FakeResponse(json.dumps(BRIDGE)))
        assert load_bridge_url("https://example.com/bridge.json") == (
            "https://example.com/bridge.json",
            BRIDGE,
        )

    def test_invalid_url(self):
        with pytest.raises(BridgeLoadError, match="Invalid URL"):
            load_bridge_url("not a url")

    def test_http_error(self, monkeypatch):
        serve(monkeypatch, FakeResponse("", status=404))
        with pytest.raises(BridgeLoadError, match="HTTP error 404"):
            load_bridge_url("https://example.com/bridge.json")

    def test_timeout(self, monkeypatch):
        def timeout(url, timeout):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(utils.requests, "get", timeout)
        with pytest.raises(BridgeLoadError, match="timeout"):
            load_bridge_url("https://example.com/bridge.json")

    def test_invalid_body(self, monkeypatch):
        serve(monkeypatch, FakeResponse("<html>"))
        with pytest.raises(BridgeLoadError, match="Invalid JSON"):
            load_bridge_url("https://example.com/bridge.json")

    def test_body_without_stem(self, monkeypatch):
        serve(monkeypatch, FakeResponse('{"qobjects": []}'))
        with pytest.raises(BridgeLoadError, match="not a bridge description"):
            load_bridge_url("https://example.com/bridge.json")


class TestLoadBridge:
    def test_requires_a_source(self):
        with pytest.raises(BridgeLoadError, match="Either"):
            load_bridge()

    def test_rejects_both_sources(self):
        with pytest.raises(BridgeLoadError, match="both"):
            load_bridge("a.json", url="https://example.com/a.json")

    def test_stream(self):
        stream = io.StringIO(json.dumps(BRIDGE))
        assert load_bridge_stream(stream) == ("<stdin>", BRIDGE)

    def test_invalid_stream(self):
        with pytest.raises(BridgeLoadError):
            load_bridge_stream(io.StringIO("nope"))
