"""
users.py — User Profile Lookup

Fetches a user from the user API and reduces it to the fields the shop needs.
"""

import logging

import httpx

from .errors import UserFetchFailed, UserIdRequired, UserNotFound
from .models import UserProfile

log = logging.getLogger(__name__)


async def fetch_user_profile(user_id, api_client: httpx.AsyncClient) -> UserProfile:
    """
    Fetches and transforms a user profile.

    Args:
        user_id (int | str): The user to look up.
        api_client (httpx.AsyncClient): Client with the user API as base_url.

    Returns:
        UserProfile: id, name, email and isActive (True when status is "active").

    Raises:
        UserIdRequired: If user_id is empty. The API is not called.
        UserNotFound: If the API answers 404.
        UserFetchFailed: On any other HTTP, transport or payload error.
    """
    if not user_id:
        raise UserIdRequired()

    try:
        response = await api_client.get(f"/users/{user_id}")
        response.raise_for_status()
        data = response.json()
        return UserProfile(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            isActive=data.get("status") == "active"
        )
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            log.warning(f"[User: {user_id}] Not found in user API.")
            raise UserNotFound() from e
        log.error(f"[User: {user_id}] HTTP error from user API: {e}")
        raise UserFetchFailed() from e
    except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
        log.error(f"[User: {user_id}] Failed to fetch profile: {e}")
        raise UserFetchFailed() from e
