"""
Async client for the Skill Bridge HTTP API.

Instead of ambient UI state, every call takes a ``ClientSession`` and returns
a new one describing what the UI should show next: the current view, the
logged-in user, the last error, and any recommendations fetched after login.
"""
import json
from dataclasses import dataclass, field, replace
from typing import List, Optional

import httpx
from loguru import logger

from errors import ValidationError
from validators import RegistrationForm, validate_login, validate_registration

LOGIN_VIEW = "login"
SIGNUP_VIEW = "signup"
DASHBOARD_VIEW = "dashboard"

LOGIN_NETWORK_ERROR = "Network error. Please check your connection."
SIGNUP_NETWORK_ERROR = "Network error. Please try again."


@dataclass(frozen=True)
class ClientSession:
    view: str = LOGIN_VIEW
    user: Optional[dict] = None
    error: str = ""
    network_error: bool = False
    mentors: List[dict] = field(default_factory=list)
    jobs: List[dict] = field(default_factory=list)


class SkillBridgeClient:
    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def login(self, session: ClientSession, username: str, password: str) -> ClientSession:
        session = replace(session, error="", network_error=False)
        try:
            validate_login(username, password)
        except ValidationError as exc:
            return replace(session, error=exc.message)

        return await self._authenticate(
            session, "/login", {"username": username, "password": password}, "Login failed", LOGIN_NETWORK_ERROR
        )

    async def signup(self, session: ClientSession, form: RegistrationForm) -> ClientSession:
        """
        Validate ``form`` locally and, only if it passes, submit it.

        Skills are sent as a JSON-encoded array, as the server expects.
        """
        session = replace(session, error="", network_error=False)
        try:
            validate_registration(form)
        except ValidationError as exc:
            return replace(session, error=exc.message)

        body = {
            "username": form.username,
            "password": form.password,
            "confirmPassword": form.confirm_password,
            "firstName": form.first_name,
            "lastName": form.last_name,
            "email": form.email,
            "role": form.role,
            "skills": json.dumps(list(form.skills)),
            "linkedinProfile": form.linkedin_profile,
            "githubProfile": form.github_profile,
        }
        return await self._authenticate(session, "/signup", body, "Signup failed", SIGNUP_NETWORK_ERROR)

    def logout(self, session: ClientSession) -> ClientSession:
        return ClientSession(view=LOGIN_VIEW)

    async def _authenticate(self, session: ClientSession, path: str, body: dict, fallback: str, network_message: str) -> ClientSession:
        try:
            response = await self.client.post(path, json=body)
            result = response.json()
        except httpx.RequestError as exc:
            logger.warning("Request to {} failed: {}", path, exc)
            return replace(session, error=network_message, network_error=True)
        except ValueError:
            logger.warning("Non-JSON response from {}", path)
            return replace(session, error=fallback)

        if not result.get("success"):
            return replace(session, error=result.get("message") or fallback)

        session = replace(session, user=result.get("user"), view=DASHBOARD_VIEW)
        return replace(
            session,
            mentors=await self._fetch_list("/mentors"),
            jobs=await self._fetch_list("/jobs"),
        )

    async def _fetch_list(self, path: str) -> List[dict]:
        # Recommendations are best effort; a failure leaves the list empty.
        try:
            response = await self.client.get(path)
            data = response.json()
        except (httpx.RequestError, ValueError) as exc:
            logger.warning("Could not fetch {}: {}", path, exc)
            return []
        return data if isinstance(data, list) else []

    async def close(self):
        await self.client.aclose()
