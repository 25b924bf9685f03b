# tests/test_client.py
import json
from dataclasses import replace

import httpx
import pytest

from app import app
from client import (
    DASHBOARD_VIEW,
    LOGIN_VIEW,
    LOGIN_NETWORK_ERROR,
    SIGNUP_NETWORK_ERROR,
    ClientSession,
    SkillBridgeClient,
)


def make_client(handler) -> SkillBridgeClient:
    return SkillBridgeClient("http://testserver", transport=httpx.MockTransport(handler))


class RecordingHandler:
    """Serves canned responses and remembers every request."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes[request.url.path]
        return httpx.Response(status, json=body)

    @property
    def paths(self):
        return [r.url.path for r in self.requests]


USER = {"id": 1, "username": "alice1", "role": "student", "skills": []}


@pytest.mark.asyncio
async def test_login_success_moves_to_dashboard_and_fetches_recommendations():
    handler = RecordingHandler({
        "/login": (200, {"success": True, "user": USER}),
        "/mentors": (200, [{"username": "mentor_1"}]),
        "/jobs": (200, [{"title": "Dev"}]),
    })
    client = make_client(handler)
    session = ClientSession()

    result = await client.login(session, "alice1", "Passw0rd")
    await client.close()

    assert result.view == DASHBOARD_VIEW
    assert result.user == USER
    assert result.error == ""
    assert result.mentors == [{"username": "mentor_1"}]
    assert result.jobs == [{"title": "Dev"}]
    assert handler.paths == ["/login", "/mentors", "/jobs"]
    assert json.loads(handler.requests[0].content) == {"username": "alice1", "password": "Passw0rd"}
    # the input session is left untouched
    assert session == ClientSession()


@pytest.mark.asyncio
async def test_login_failure_keeps_view_and_shows_message():
    handler = RecordingHandler({
        "/login": (401, {"success": False, "message": "Invalid username or password"}),
    })
    client = make_client(handler)

    result = await client.login(ClientSession(), "alice1", "wrong")
    await client.close()

    assert result.view == LOGIN_VIEW
    assert result.user is None
    assert result.error == "Invalid username or password"
    assert result.network_error is False
    assert handler.paths == ["/login"]


@pytest.mark.asyncio
async def test_login_missing_fields_never_sends_request():
    handler = RecordingHandler({})
    client = make_client(handler)

    result = await client.login(ClientSession(), "", "")
    await client.close()

    assert result.error == "Please enter both username and password"
    assert handler.requests == []


@pytest.mark.asyncio
async def test_network_failure_is_flagged_separately():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    result = await client.login(ClientSession(), "alice1", "Passw0rd")
    await client.close()

    assert result.network_error is True
    assert result.error == LOGIN_NETWORK_ERROR
    assert result.view == LOGIN_VIEW


@pytest.mark.asyncio
async def test_signup_network_failure_uses_signup_message(alice_form):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    result = await client.signup(ClientSession(view="signup"), alice_form)
    await client.close()

    assert result.network_error is True
    assert result.error == SIGNUP_NETWORK_ERROR
    assert result.view == "signup"


@pytest.mark.asyncio
async def test_recommendation_failures_do_not_block_login():
    def handler(request):
        if request.url.path == "/login":
            return httpx.Response(200, json={"success": True, "user": USER})
        raise httpx.ConnectError("down", request=request)

    client = make_client(handler)
    result = await client.login(ClientSession(), "alice1", "Passw0rd")
    await client.close()

    assert result.view == DASHBOARD_VIEW
    assert result.mentors == []
    assert result.jobs == []
    assert result.network_error is False


@pytest.mark.asyncio
async def test_signup_validates_locally_before_sending(alice_form):
    handler = RecordingHandler({})
    client = make_client(handler)

    result = await client.signup(ClientSession(view="signup"), replace(alice_form, confirm_password="nope"))
    await client.close()

    assert result.error == "Passwords do not match"
    assert result.view == "signup"
    assert handler.requests == []


@pytest.mark.asyncio
async def test_signup_sends_stringified_skills(alice_form):
    handler = RecordingHandler({
        "/signup": (200, {"success": True, "user": USER}),
        "/mentors": (200, []),
        "/jobs": (200, []),
    })
    client = make_client(handler)

    result = await client.signup(ClientSession(), replace(alice_form, skills=["Python", "React"]))
    await client.close()

    assert result.view == DASHBOARD_VIEW
    body = json.loads(handler.requests[0].content)
    assert body["skills"] == '["Python", "React"]'
    assert body["firstName"] == "Alice"
    assert body["confirmPassword"] == "Passw0rd"


@pytest.mark.asyncio
async def test_client_builds_default_transport():
    client = SkillBridgeClient("http://testserver/")

    assert client.base_url == "http://testserver"
    assert client.client.base_url.host == "testserver"
    await client.close()


def test_logout_resets_session():
    client = SkillBridgeClient("http://testserver", transport=httpx.MockTransport(RecordingHandler({})))
    session = ClientSession(view=DASHBOARD_VIEW, user=USER, mentors=[{"username": "m"}])

    assert client.logout(session) == ClientSession()


@pytest.mark.asyncio
async def test_signup_then_login_against_app(override_db, alice_form):
    client = SkillBridgeClient("http://testserver", transport=httpx.ASGITransport(app=app))

    signed_up = await client.signup(ClientSession(), alice_form)
    logged_out = client.logout(signed_up)
    logged_in = await client.login(logged_out, "alice1", "Passw0rd")
    await client.close()

    assert signed_up.view == DASHBOARD_VIEW
    assert signed_up.user["role"] == "student"
    assert logged_in.user["id"] == signed_up.user["id"]
    assert isinstance(logged_in.jobs, list)
