"""Tests for the browser front-end server."""

import http.client
import json
import threading
import urllib.error
import urllib.request

import pytest

from humansort.web import make_server


@pytest.fixture
def server(tmp_path):
    """Server on a free local port, running in a background thread."""
    httpd = make_server("127.0.0.1", 0, tmp_path / "app_state.json", output_limit=3)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()
    thread.join(timeout=5)


def request(server, path, data=None, raw=None):
    """Send a request and return (status, body)."""
    url = f"http://127.0.0.1:{server.server_address[1]}{path}"
    body = raw if raw is not None else (json.dumps(data).encode() if data is not None else None)
    req = urllib.request.Request(url, data=body)
    if body is not None:
        req.add_header("Content-Type", "application/json")
    try:
        with urllib.request.urlopen(req, timeout=5) as response:
            return response.status, response.read()
    except urllib.error.HTTPError as e:
        return e.code, e.read()


def post_action(server, action):
    status, body = request(server, "/api/action", data=action)
    return status, json.loads(body)


class TestPages:
    """Tests for static routes."""

    def test_index(self, server):
        """The app page is served at the root."""
        status, body = request(server, "/")

        assert status == 200
        assert b"<html" in body.lower()

    def test_unknown_path(self, server):
        """Unknown paths are 404."""
        status, body = request(server, "/nowhere")

        assert status == 404
        assert json.loads(body)["error"] == "Not found"


class TestApi:
    """Tests for the JSON API."""

    def test_initial_state(self, server):
        """A fresh server reports an empty input view."""
        status, body = request(server, "/api/state")
        payload = json.loads(body)

        assert status == 200
        assert payload["view"] == "input"
        assert payload["items"] == []
        assert payload["can_sort"] is False
        assert payload["output_limit"] == 3

    def test_actions_are_persisted(self, server, tmp_path):
        """Each action is stored and visible to later requests."""
        for name in ["x", "y"]:
            status, _ = post_action(server, {"type": "add_item", "name": name})
            assert status == 200

        status, payload = post_action(server, {"type": "set_batch_size", "batch_size": 2})

        assert status == 200
        assert payload["can_sort"] is True
        assert (tmp_path / "app_state.json").exists()

        _, body = request(server, "/api/state")
        assert [item["value"] for item in json.loads(body)["items"]] == ["x", "y"]

    def test_batch(self, server):
        """A batch holds batch_size distinct items."""
        for name in ["a", "b", "c"]:
            post_action(server, {"type": "add_item", "name": name})
        post_action(server, {"type": "set_batch_size", "batch_size": 2})

        status, body = request(server, "/api/batch")
        batch = json.loads(body)["batch"]

        assert status == 200
        assert len(batch) == 2
        assert len(set(batch)) == 2

    def test_batch_needs_items(self, server):
        """Too few items gives 409."""
        status, body = request(server, "/api/batch")

        assert status == 409
        assert "Need at least" in json.loads(body)["error"]

    def test_select_preference(self, server):
        """A choice updates the ratings."""
        for name in ["a", "b"]:
            post_action(server, {"type": "add_item", "name": name})
        post_action(server, {"type": "set_batch_size", "batch_size": 2})

        status, payload = post_action(
            server, {"type": "select_preference", "winner": "b", "others": ["a"]}
        )

        assert status == 200
        assert payload["items"] == [
            {"value": "b", "rating": 0.5},
            {"value": "a", "rating": -0.5},
        ]

    def test_rejected_action(self, server):
        """A ranking error is a 400 and the state is unchanged."""
        post_action(server, {"type": "add_item", "name": "a"})

        status, payload = post_action(server, {"type": "add_item", "name": "a"})

        assert status == 400
        assert "already exists" in payload["error"]
        _, body = request(server, "/api/state")
        assert len(json.loads(body)["items"]) == 1

    def test_sorting_view_guarded(self, server):
        """Switching to sorting without enough items is a 400."""
        status, _ = post_action(server, {"type": "change_view", "new_view": "sorting"})

        assert status == 400

    def test_invalid_json(self, server):
        """A malformed body is a 400."""
        status, body = request(server, "/api/action", raw=b"{nope")

        assert status == 400
        assert json.loads(body)["error"] == "Invalid JSON body"

    @pytest.mark.parametrize("length", ["abc", "-5"])
    def test_bad_content_length(self, server, length):
        """A non-numeric or negative Content-Length is a 400."""
        conn = http.client.HTTPConnection("127.0.0.1", server.server_address[1], timeout=5)
        try:
            conn.request("POST", "/api/action", headers={"Content-Length": length})
            response = conn.getresponse()
            payload = json.loads(response.read())
        finally:
            conn.close()

        assert response.status == 400
        assert payload["error"] == "Invalid Content-Length"

    def test_unknown_action(self, server):
        """An unknown action type is a 400."""
        status, payload = post_action(server, {"type": "explode"})

        assert status == 400
        assert payload["error"].startswith("Invalid action")
