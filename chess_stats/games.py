"""
Chess.com archive fetching utilities.
"""

import os
from urllib.parse import quote

import requests
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Build User-Agent from environment variables
# Format: ProjectName/Version (username: your_username; contact: your_email)
_project = os.getenv("CHESSCOM_PROJECT_NAME", "chess-time-stats")
_version = os.getenv("CHESSCOM_PROJECT_VERSION", "0.1")
_username = os.getenv("CHESSCOM_USERNAME", "")
_contact = os.getenv("CHESSCOM_CONTACT_EMAIL", "")

if _username and _contact:
    USER_AGENT = f"{_project}/{_version} (username: {_username}; contact: {_contact})"
else:
    USER_AGENT = f"{_project}/{_version}"

HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json",
}

CHESSCOM_API_BASE = os.getenv("CHESSCOM_API_BASE", "https://api.chess.com/pub/player").rstrip("/")
REQUEST_TIMEOUT = float(os.getenv("CHESSCOM_REQUEST_TIMEOUT", "30"))


class RequestFailed(requests.HTTPError):
    """A chess.com request came back with a non-success status."""

    def __init__(self, url: str, status: int, response: requests.Response | None = None):
        super().__init__(
            f"Request to {url} failed with status {status}",
            response=response,
        )
        self.url = url
        self.status = status


class NotFound(RequestFailed):
    """The requested player or archive does not exist (HTTP 404)."""


def fetch_json(url: str) -> dict:
    """
    GET a chess.com endpoint and return the decoded JSON body.

    Args:
        url: Full endpoint URL.

    Returns:
        Parsed JSON payload.

    Raises:
        NotFound: The endpoint answered 404.
        RequestFailed: Any other non-success status.
    """
    response = requests.get(url, headers=HEADERS, timeout=REQUEST_TIMEOUT)
    if not response.ok:
        if response.status_code == 404:
            raise NotFound(url, response.status_code, response)
        raise RequestFailed(url, response.status_code, response)
    return response.json()


def archives_url(username: str) -> str:
    """URL of the monthly archive list for a player."""
    return f"{CHESSCOM_API_BASE}/{quote(username, safe='')}/games/archives"


def fetch_archives(username: str) -> list[str]:
    """
    Fetch the list of monthly game archives for a player.

    Args:
        username: Chess.com username.

    Returns:
        List of archive URLs (e.g., ["https://api.chess.com/pub/player/username/games/2024/01", ...]).
        Empty when the player has no archives.
    """
    payload = fetch_json(archives_url(username))
    if not isinstance(payload, dict):
        return []
    return payload.get("archives") or []


def fetch_archive_games(archive_url: str) -> list[dict]:
    """
    Fetch the games of one monthly archive.

    Args:
        archive_url: Archive URL as returned by fetch_archives().

    Returns:
        List of game dictionaries from the API (empty for a month without games).
    """
    payload = fetch_json(archive_url)
    if not isinstance(payload, dict):
        return []
    return payload.get("games") or []
