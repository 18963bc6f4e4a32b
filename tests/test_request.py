"""Tests for the GuardianRequest transport and Result types."""

import socket
import threading
from email.message import Message
from urllib.error import HTTPError

import pytest

from guardian_client.api import Enrollment
from guardian_client.networking import (
    Failure,
    GuardianRequest,
    InvalidResponse,
    NetworkError,
    ServerError,
    Success,
    TransportError,
    log_request_hooks,
)

from .conftest import BASE_URL

URL = f"{BASE_URL}/api/enroll"


def make_request(**kwargs) -> GuardianRequest:
    return GuardianRequest("post", URL, payload={"ticket": "secret-ticket"}, response_model=Enrollment, **kwargs)


def test_description():
    request = make_request(headers={"User-Agent": "GuardianClient/test"})

    assert request.description == f"POST {URL}"
    assert str(request) == request.description
    assert "User-Agent: GuardianClient/test" in request.debug_description
    assert "Body fields: ticket" in request.debug_description
    assert "secret-ticket" not in request.debug_description


def test_decodes_success(transport):
    transport.reply(201, {"id": "d1", "user_id": "u1", "token": "tok1", "extra": True})

    result = make_request().execute()

    assert isinstance(result, Success)
    assert result.payload == Enrollment(id="d1", user_id="u1", token="tok1")


def test_without_model_returns_raw_json(transport):
    transport.reply(200, {"anything": [1, 2]})

    result = GuardianRequest("GET", URL).execute()

    assert result == Success({"anything": [1, 2]})
    assert transport.requests[0].data is None


def test_non_json_body_is_invalid_response(transport):
    transport.reply(200, b"<html>oops</html>")

    result = make_request().execute()

    assert isinstance(result.cause, InvalidResponse)


def test_server_error_details(transport):
    transport.reply(429, {"error": "too_many_requests", "message": "Slow down"})

    result = make_request().execute()

    assert isinstance(result.cause, ServerError)
    assert result.cause.status == 429
    assert result.cause.code == "too_many_requests"
    assert result.cause.description == "Slow down"
    assert str(result.cause) == "HTTP 429 (too_many_requests): Slow down"


def test_server_error_without_json_body(transport):
    transport.reply(502, b"Bad Gateway")

    result = make_request().execute()

    assert result.cause.status == 502
    assert result.cause.code is None


@pytest.mark.parametrize("error", [socket.timeout("timed out"), ConnectionResetError("reset")])
def test_socket_errors_are_network_errors(transport, error):
    transport.fail(error)

    result = make_request().execute()

    assert isinstance(result, Failure)
    assert isinstance(result.cause, NetworkError)
    assert result.cause.reason is error


def test_failing_hook_does_not_change_result(transport, log_messages):
    transport.reply(200, {"id": "d1", "user_id": "u1", "token": "tok1"})

    def broken_hook(*args):
        raise ValueError("hook bug")

    result = make_request().on(request=broken_hook, response=broken_hook).execute()

    assert isinstance(result, Success)
    assert any("hook bug" in message for message in log_messages)


def test_start_runs_in_background_once(transport):
    transport.reply(200, {"id": "d1", "user_id": "u1", "token": "tok1"})
    request = make_request()
    results = []
    done = threading.Event()

    def callback(result):
        results.append((result, threading.current_thread()))
        done.set()

    request.start(callback)
    assert done.wait(timeout=5)

    assert isinstance(results[0][0], Success)
    assert results[0][1] is not threading.main_thread()
    with pytest.raises(RuntimeError):
        request.start(callback)


def test_logging_hooks(transport, log_messages):
    transport.reply(200, {"id": "d1", "user_id": "u1", "token": "tok1"})

    log_request_hooks(make_request()).execute()

    assert any(message.startswith("INFO Request sent: POST") for message in log_messages)
    assert any(message.startswith("INFO Response received: HTTP 200") for message in log_messages)
    assert not any("secret-ticket" in message for message in log_messages)


def test_logging_hooks_on_network_error(transport, log_messages):
    transport.fail(ConnectionRefusedError("refused"))

    log_request_hooks(make_request()).execute()

    assert any(message.startswith("ERROR Request failed") for message in log_messages)


def test_result_unwrap():
    assert Success(1).unwrap() == 1
    assert Success(1).is_success
    failure = Failure(ValueError("bad"))
    assert not failure.is_success
    with pytest.raises(ValueError):
        failure.unwrap()


def test_result_pattern_matching():
    def describe(result):
        match result:
            case Success(payload=value):
                return f"ok {value}"
            case Failure(cause=cause):
                return f"failed {cause}"

    assert describe(Success(3)) == "ok 3"
    assert describe(Failure(ValueError("x"))) == "failed x"


def test_url_without_scheme_is_transport_failure(transport):
    request = GuardianRequest("POST", "tenant.guardian.example.com/api/enroll", payload={"ticket": "t"})
    events = []
    request.on(request=lambda *args: events.append("request"))

    result = request.execute()

    assert isinstance(result, Failure)
    assert isinstance(result.cause, TransportError)
    assert transport.requests == []
    assert events == []


def test_url_without_scheme_still_calls_back(transport):
    request = GuardianRequest("POST", "tenant.guardian.example.com/api/enroll")
    results = []
    done = threading.Event()

    def callback(result):
        results.append(result)
        done.set()

    request.start(callback)

    assert done.wait(timeout=5), "callback was not invoked"
    assert isinstance(results[0].cause, TransportError)


class UnreadableBody:
    """Error body whose connection drops while it is read."""

    def read(self, *args):
        raise ConnectionResetError("reset while reading body")

    def close(self):
        pass


def test_unreadable_error_body_still_fails_cleanly(transport):
    transport.fail(HTTPError(URL, 500, "Internal Server Error", Message(), UnreadableBody()))
    statuses = []
    request = make_request().on(response=lambda status, headers, body: statuses.append((status, body)))
    results = []
    done = threading.Event()

    def callback(result):
        results.append(result)
        done.set()

    request.start(callback)

    assert done.wait(timeout=5), "callback was not invoked"
    assert isinstance(results[0].cause, ServerError)
    assert results[0].cause.status == 500
    assert statuses == [(500, b"")]
