"""TMDB credential placement for API requests."""

from __future__ import annotations


def is_read_access_token(api_key: str) -> bool:
    """v4 read access tokens are JWTs; v3 keys are 32 hex characters."""
    key = (api_key or "").strip()
    if key.lower().startswith("bearer "):
        return True
    return key.startswith("eyJ") and key.count(".") == 2


def build_tmdb_auth(api_key: str) -> tuple[dict[str, str], dict[str, str]]:
    """
    Return ``(headers, params)`` carrying the credential.

    Read access tokens go in the Authorization header, legacy keys in the
    ``api_key`` query parameter.
    """
    key = (api_key or "").strip()
    if not key:
        raise ValueError("TMDB API key is required.")
    if is_read_access_token(key):
        token = key if key.lower().startswith("bearer ") else f"Bearer {key}"
        return {"Authorization": token}, {}
    return {}, {"api_key": key}
