"""
Tests for request execution: transport success and failure, history
recording, environment selection and local validation short-circuits.
"""

import asyncio
import base64
import json

import httpx
import pytest

from api_composer.exceptions import EmptyUrlError, MalformedUrlError, ResourceNotFoundError
from api_composer.schemas.environment import Variable
from api_composer.schemas.request import BasicAuth, ComposerState, ParamRow
from api_composer.services.http_executor import execute_request


def run(coro):
    return asyncio.run(coro)


class TestSuccessfulSend:

    def test_scenario_post_json(self, store, transport, handler):
        composer = ComposerState(
            method="POST",
            url="https://api.example.com/items",
            params=[ParamRow(key="q", value="1")],
            body='{"a":1}',
        )

        result = run(execute_request(composer, store, transport))

        sent = handler.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == "https://api.example.com/items?q=1"
        assert sent.headers["content-type"] == "application/json"
        assert sent.content == b'{"a":1}'

        assert result.error is None
        assert result.response.status == 200
        assert result.response.ok is True
        assert result.response.body == json.dumps({"id": 1, "title": "hello"}, indent=2)
        assert result.response.time_ms >= 0

    def test_history_entry_records_resolved_url_and_status(self, store, transport):
        result = run(execute_request(ComposerState(url="https://x.io/a"), store, transport))

        assert store.history == [result.history_entry]
        assert result.history_entry.url == "https://x.io/a"
        assert result.history_entry.status == 200
        assert result.history_entry.time_ms is not None

    def test_get_sends_no_body(self, store, transport, handler):
        run(execute_request(ComposerState(url="https://x.io", body='{"a": 1}'), store, transport))
        assert handler.requests[0].content == b""

    def test_basic_auth_is_sent(self, store, transport, handler):
        composer = ComposerState(url="https://x.io", auth=BasicAuth(username="u", password="p"))
        run(execute_request(composer, store, transport))
        assert handler.requests[0].headers["authorization"] == "Basic " + base64.b64encode(b"u:p").decode()

    def test_size_counts_utf8_bytes(self, store, transport, handler):
        handler.respond = lambda request: httpx.Response(200, text="héllo")
        result = run(execute_request(ComposerState(url="https://x.io"), store, transport))
        assert result.response.size == 6
        assert result.response.raw_body == "héllo"

    def test_deeply_nested_json_is_still_recorded(self, store, transport, handler):
        body = "[" * 100000 + "]" * 100000
        handler.respond = lambda request: httpx.Response(
            200, headers={"Content-Type": "application/json"}, text=body
        )

        result = run(execute_request(ComposerState(url="https://x.io"), store, transport))

        assert result.response.body == body
        assert store.history == [result.history_entry]
        assert result.history_entry.status == 200

    def test_redirects_are_followed(self, store, transport, handler):
        def respond(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "https://x.io/new"})
            return httpx.Response(200, text="final")
        handler.respond = respond

        result = run(execute_request(ComposerState(url="https://x.io/old"), store, transport))

        assert [str(request.url) for request in handler.requests] == [
            "https://x.io/old",
            "https://x.io/new",
        ]
        assert result.response.status == 200
        assert result.response.raw_body == "final"
        assert result.history_entry.status == 200
        assert result.history_entry.url == "https://x.io/old"

    def test_error_status_is_still_a_response(self, store, transport, handler):
        handler.respond = lambda request: httpx.Response(404, text="")
        result = run(execute_request(ComposerState(url="https://x.io"), store, transport))
        assert result.response.ok is False
        assert result.response.status_text == "Not Found"
        assert result.history_entry.status == 404


class TestEnvironments:

    def test_active_environment_variables_are_used(self, store, transport, handler):
        env = store.add_environment("Dev", [Variable(key="host", value="dev.example.com")])
        store.set_active_environment(env.id)

        result = run(execute_request(ComposerState(url="https://{{host}}/items"), store, transport))

        assert str(handler.requests[0].url) == "https://dev.example.com/items"
        assert result.history_entry.url == "https://dev.example.com/items"

    def test_explicit_environment_overrides_active(self, store, transport, handler):
        store.add_environment("Dev", [Variable(key="host", value="dev.example.com")])
        prod = store.add_environment("Prod", [Variable(key="host", value="prod.example.com")])

        run(execute_request(ComposerState(url="https://{{host}}/"), store, transport, environment_id=prod.id))

        assert handler.requests[0].url.host == "prod.example.com"

    def test_unknown_environment_is_rejected(self, store, transport, handler):
        with pytest.raises(ResourceNotFoundError):
            run(execute_request(ComposerState(url="https://x.io"), store, transport, environment_id="nope"))
        assert handler.requests == []


class TestTransportFailures:

    def test_connection_error_is_reported_and_recorded(self, store, transport, handler):
        handler.error = httpx.ConnectError("Name or service not known")

        result = run(execute_request(ComposerState(method="DELETE", url="https://x.io/1"), store, transport))

        assert result.response is None
        assert result.error.error == "Name or service not known"
        assert result.error.error_type == "network_error"
        assert store.history == [result.history_entry]
        assert result.history_entry.status is None
        assert result.history_entry.time_ms is not None
        assert result.history_entry.method == "DELETE"

    def test_timeout_is_reported(self, store, transport, handler):
        handler.error = httpx.ReadTimeout("timed out")

        result = run(execute_request(ComposerState(url="https://x.io"), store, transport))

        assert result.error.error_type == "timeout"
        assert len(store.history) == 1

    def test_error_without_description_uses_generic_message(self, store, transport, handler):
        handler.error = httpx.ConnectError("")

        result = run(execute_request(ComposerState(url="https://x.io"), store, transport))

        assert result.error.error == "Request failed."


class TestLocalValidation:

    def test_empty_url_sends_nothing_and_records_nothing(self, store, transport, handler):
        with pytest.raises(EmptyUrlError):
            run(execute_request(ComposerState(url="  "), store, transport))
        assert handler.requests == []
        assert store.history == []

    def test_malformed_url_sends_nothing(self, store, transport, handler):
        composer = ComposerState(url="not a url", params=[ParamRow(key="q", value="1")])
        with pytest.raises(MalformedUrlError):
            run(execute_request(composer, store, transport))
        assert handler.requests == []
        assert store.history == []


class TestOverlappingSends:

    def test_each_send_records_its_own_entry(self, store, transport):
        async def send_both():
            return await asyncio.gather(
                execute_request(ComposerState(url="https://x.io/1"), store, transport),
                execute_request(ComposerState(url="https://x.io/2"), store, transport),
            )

        results = run(send_both())

        assert {entry.url for entry in store.history} == {"https://x.io/1", "https://x.io/2"}
        assert {r.history_entry.id for r in results} == {entry.id for entry in store.history}
