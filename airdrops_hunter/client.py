"""Async API client that mirrors server collections in a per-session cache.

Collections are fetched on first access and cached under their URL. A
successful mutation invalidates the collection it touched so the next read
refetches; a failed one raises ``ApiError`` and leaves the cache alone.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from airdrops_hunter.schemas.auth import RegisterForm

logger = logging.getLogger(__name__)

CURRENT_USER_KEY = "/api/users/current"
AIRDROPS_KEY = "/api/airdrops"
BLOG_POSTS_KEY = "/api/blog-posts"


class ApiError(Exception):
    """A request failed. ``status_code`` is None when no response arrived."""

    def __init__(self, status_code: int | None, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class QueryState:
    """What UI code sees for one cached collection."""

    data: Any = None
    is_loading: bool = False
    error: str | None = None


def raise_for_status(response: httpx.Response) -> None:
    """Raise ApiError with ``"<status>: <body>"`` for non-2xx responses."""
    if response.is_success:
        return
    text = response.text or response.reason_phrase
    raise ApiError(response.status_code, f"{response.status_code}: {text}")


class CatalogClient:
    """Client for the Airdrops Hunter API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self._states: dict[str, QueryState] = {}
        self._fresh: set[str] = set()
        self._inflight: dict[str, asyncio.Task] = {}
        self._generations: dict[str, int] = {}

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # Cache
    def state(self, key: str) -> QueryState:
        """Current state for ``key`` without triggering a fetch."""
        return self._states.get(key, QueryState())

    def invalidate(self, key: str) -> None:
        """Drop the cached value so the next read refetches."""
        self._generations[key] = self._generations.get(key, 0) + 1
        self._states.pop(key, None)
        self._fresh.discard(key)
        self._inflight.pop(key, None)

    def _set_data(self, key: str, data: Any) -> None:
        self._generations[key] = self._generations.get(key, 0) + 1
        self._inflight.pop(key, None)
        self._states[key] = QueryState(data=data)
        self._fresh.add(key)

    async def query(self, key: str) -> QueryState:
        """Return the cached state for ``key``, fetching it if needed.

        Concurrent callers share one in-flight request.
        """
        if key in self._fresh:
            return self._states[key]
        task = self._inflight.get(key)
        if task is None:
            self._states[key] = QueryState(data=self.state(key).data, is_loading=True)
            task = asyncio.ensure_future(self._fetch(key, self._generations.get(key, 0)))
            self._inflight[key] = task
        return await task

    async def _fetch(self, key: str, generation: int) -> QueryState:
        state: QueryState | None = None
        fresh = False
        try:
            response = await self._http.get(key)
            if key == CURRENT_USER_KEY and response.status_code == 401:
                # Not logged in is a normal answer, not a failure
                state = QueryState(data=None)
            else:
                raise_for_status(response)
                state = QueryState(data=response.json())
            fresh = True
        except ApiError as e:
            logger.warning(f"Fetching {key} failed: {e.message}")
            state = QueryState(error=e.message)
        except httpx.HTTPError as e:
            logger.warning(f"Fetching {key} failed: {e}")
            state = QueryState(error=str(e))
        except ValueError:
            logger.warning(f"Fetching {key} returned a body that is not JSON")
            state = QueryState(error=f"{response.status_code}: invalid JSON response")
        finally:
            if self._generations.get(key, 0) == generation:
                self._inflight.pop(key, None)
                if state is None:
                    # Interrupted before any answer; the next read fetches again
                    self._states.pop(key, None)
                else:
                    self._states[key] = state
                    if fresh:
                        self._fresh.add(key)
        return state

    async def _mutate(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        invalidates: tuple[str, ...] = (),
    ) -> Any:
        try:
            response = await self._http.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise ApiError(None, str(e)) from e
        raise_for_status(response)
        for key in invalidates:
            self.invalidate(key)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                response.status_code, f"{response.status_code}: invalid JSON response"
            ) from e

    # Queries
    async def current_user(self) -> QueryState:
        return await self.query(CURRENT_USER_KEY)

    async def airdrops(self) -> QueryState:
        return await self.query(AIRDROPS_KEY)

    async def blog_posts(self) -> QueryState:
        return await self.query(BLOG_POSTS_KEY)

    # Auth
    async def login(self, username: str, password: str) -> dict[str, Any]:
        user = await self._mutate(
            "POST", "/api/users/login", json={"username": username, "password": password}
        )
        self._set_data(CURRENT_USER_KEY, user)
        return user

    async def logout(self) -> None:
        await self._mutate("POST", "/api/users/logout")
        self._set_data(CURRENT_USER_KEY, None)

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str | None = None,
    ) -> dict[str, Any]:
        """Register an account. A confirm password is checked before sending.

        Raises pydantic.ValidationError if the form is invalid.
        """
        if confirm_password is not None:
            RegisterForm(
                username=username,
                email=email,
                password=password,
                confirm_password=confirm_password,
            )
        return await self._mutate(
            "POST",
            "/api/users/register",
            json={"username": username, "email": email, "password": password, "isAdmin": False},
        )

    # Airdrops
    async def create_airdrop(self, airdrop: dict[str, Any]) -> dict[str, Any]:
        return await self._mutate("POST", AIRDROPS_KEY, json=airdrop, invalidates=(AIRDROPS_KEY,))

    async def update_airdrop(self, airdrop_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        return await self._mutate(
            "PUT", f"{AIRDROPS_KEY}/{airdrop_id}", json=changes, invalidates=(AIRDROPS_KEY,)
        )

    async def delete_airdrop(self, airdrop_id: int) -> None:
        await self._mutate("DELETE", f"{AIRDROPS_KEY}/{airdrop_id}", invalidates=(AIRDROPS_KEY,))

    # Blog posts
    async def create_blog_post(self, post: dict[str, Any]) -> dict[str, Any]:
        return await self._mutate("POST", BLOG_POSTS_KEY, json=post, invalidates=(BLOG_POSTS_KEY,))

    async def update_blog_post(self, post_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        return await self._mutate(
            "PUT", f"{BLOG_POSTS_KEY}/{post_id}", json=changes, invalidates=(BLOG_POSTS_KEY,)
        )

    async def delete_blog_post(self, post_id: int) -> None:
        await self._mutate("DELETE", f"{BLOG_POSTS_KEY}/{post_id}", invalidates=(BLOG_POSTS_KEY,))

    # Newsletter and contact
    async def subscribe_to_newsletter(self, email: str, interests: str) -> dict[str, Any]:
        return await self._mutate(
            "POST", "/api/newsletter", json={"email": email, "interests": interests}
        )

    async def send_contact_message(
        self, name: str, email: str, subject: str, message: str
    ) -> dict[str, Any]:
        return await self._mutate(
            "POST",
            "/api/contact",
            json={"name": name, "email": email, "subject": subject, "message": message},
        )
