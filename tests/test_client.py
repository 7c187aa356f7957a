import pytest
import requests

from vibefid_client import client as client_module
from vibefid_client.client import APIError, VibeFIDClient, main


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload
        self.text = str(payload)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append(("GET", url, params))
        return self.response

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", url, json))
        return self.response


def make_client(status_code=200, payload=None):
    client = VibeFIDClient("http://vibefid.test/")
    client.session = FakeSession(FakeResponse(status_code, payload or {}))
    return client


def test_get_traits_builds_url():
    client = make_client(payload={"fid": 50, "foil": "Prize", "wear": "Pristine"})
    assert client.get_traits(50)["foil"] == "Prize"
    client.get_traits(50, extra_seed=123.0)
    assert client.session.calls == [
        ("GET", "http://vibefid.test/traits/50", None),
        ("GET", "http://vibefid.test/traits/50", {"extra_seed": 123.0}),
    ]


def test_mint_card_drops_unset_fields():
    client = make_client(status_code=201, payload={"card": {}})
    client.mint_card("0xabc", 50, "alice", "Alice", 0.95, bio=None, power=6480)
    method, url, payload = client.session.calls[0]
    assert (method, url) == ("POST", "http://vibefid.test/cards/mint")
    assert payload["power"] == 6480
    assert "bio" not in payload


def test_error_status_raises_api_error():
    client = make_client(status_code=404, payload={"error": "Card not found"})
    with pytest.raises(APIError) as excinfo:
        client.get_card(9)
    assert excinfo.value.status_code == 404
    assert "Card not found" in str(excinfo.value)


def test_cli_local_preview(capsys):
    assert main(["local", "50"]) == 0
    out = capsys.readouterr().out
    assert "VibeFID #50" in out
    assert "Prize" in out
    assert "Pristine" in out


def test_cli_reports_unreachable_server(monkeypatch, capsys):
    def boom(self, fid, extra_seed=None):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(client_module.VibeFIDClient, "get_traits", boom)
    assert main(["--url", "http://nowhere.test", "preview", "50"]) == 2
    assert "Could not reach" in capsys.readouterr().out
