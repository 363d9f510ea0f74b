"""GitHub REST API client for organization metrics retrieval."""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

import requests

from .config import Config
from .errors import ApiError, DataValidationError
from .models import Repository, WorkItem, WorkItemKind

logger = logging.getLogger(__name__)


class GitHubClient:
    """Small, typed client for the GitHub repository, pull and issue APIs."""

    _BASE_URL = "https://api.github.com"
    _API_VERSION = "2022-11-28"
    _PAGE_SIZE = 100

    def __init__(self, config: Config, timeout_seconds: int = 30) -> None:
        """Initialize an authenticated GitHub API client.

        Args:
            config: Validated runtime configuration including the token.
            timeout_seconds: Per-request timeout in seconds.
        """
        self._config = config
        self._timeout_seconds = timeout_seconds

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {config.token}",
                "X-GitHub-Api-Version": self._API_VERSION,
            }
        )

    def _build_url(self, path: str) -> str:
        """Build a fully qualified API URL from a path below the API root."""
        return f"{self._BASE_URL}/{path.lstrip('/')}"

    def _parse_datetime(self, value: Optional[str]) -> Optional[datetime]:
        """Parse GitHub ISO8601 timestamps into timezone-aware datetimes."""
        if not value:
            return None

        normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
        parsed = datetime.fromisoformat(normalized)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Execute a single request and fail on transport errors or HTTP >= 400.

        Raises:
            ApiError: If the request cannot be sent or returns HTTP >= 400.
        """
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json_body,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ApiError(f"GitHub request failed: {method} {url}") from exc

        if response.status_code >= 400:
            raise ApiError(
                "GitHub API request failed: "
                f"{method} {url} returned {response.status_code} - {response.text}"
            )

        return response

    def _decode_json(self, response: requests.Response, method: str, url: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"GitHub API returned invalid JSON: {method} {url}") from exc

    def _iter_pages(self, path: str, params: Dict[str, Any]) -> Iterator[List[Dict[str, Any]]]:
        """Yield each page of a list endpoint, following ``Link: rel="next"``."""
        url: Optional[str] = self._build_url(path)
        query: Optional[Dict[str, Any]] = dict(params, per_page=self._PAGE_SIZE)

        while url:
            response = self._request("GET", url, params=query)
            payload = self._decode_json(response, "GET", url)
            if not isinstance(payload, list):
                raise ApiError(f"GitHub API returned unexpected payload shape: GET {url}")

            yield payload

            # The next link already carries every query parameter.
            url = response.links.get("next", {}).get("url")
            query = None

    def _to_work_item(self, kind: WorkItemKind, repo_name: str, item: Dict[str, Any]) -> WorkItem:
        created_at = self._parse_datetime(item.get("created_at"))
        number = item.get("number")

        if created_at is None or number is None:
            raise DataValidationError(
                "GitHub payload is missing required fields: "
                f"repo={repo_name}, kind={kind.value}, payload={item}"
            )

        user = item.get("user") or {}
        login = user.get("login")

        return WorkItem(
            kind=kind,
            number=int(number),
            repo_name=repo_name,
            created_at=created_at,
            closed_at=self._parse_datetime(item.get("closed_at")),
            author=str(login) if login else None,
        )

    def iter_org_repositories(self, organization: str) -> Iterator[Repository]:
        """Iterate every repository of ``organization``."""
        for page in self._iter_pages(f"orgs/{organization}/repos", {}):
            for item in page:
                name = item.get("name")
                if not name:
                    continue
                yield Repository(name=str(name), full_name=str(item.get("full_name") or name))

    def iter_closed_pull_requests(self, owner: str, repo_name: str) -> Iterator[List[WorkItem]]:
        """Yield pages of closed pull requests, oldest first."""
        params = {"state": "closed", "sort": "created", "direction": "asc"}

        for page in self._iter_pages(f"repos/{owner}/{repo_name}/pulls", params):
            yield [self._to_work_item(WorkItemKind.PULL_REQUEST, repo_name, item) for item in page]

    def iter_closed_issues(self, owner: str, repo_name: str) -> Iterator[List[WorkItem]]:
        """Yield pages of closed issues, oldest first.

        The issues endpoint also returns pull requests; those carry a
        ``pull_request`` key and are dropped here.
        """
        params = {"state": "closed", "sort": "created", "direction": "asc"}

        for page in self._iter_pages(f"repos/{owner}/{repo_name}/issues", params):
            yield [
                self._to_work_item(WorkItemKind.ISSUE, repo_name, item)
                for item in page
                if "pull_request" not in item
            ]

    def fetch_text(self, url: str) -> str:
        """Fetch a raw document, such as a markdown file, as text.

        The document may live on any host, so it is fetched outside the
        authenticated API session and never carries the token.

        Raises:
            ApiError: If the request cannot be sent or returns HTTP >= 400.
        """
        try:
            response = requests.get(url, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise ApiError(f"Document fetch failed: GET {url}") from exc

        if response.status_code >= 400:
            raise ApiError(
                "Document fetch failed: "
                f"GET {url} returned {response.status_code} - {response.text}"
            )

        return response.text

    def create_blob(self, owner: str, repo_name: str, content: bytes) -> str:
        """Create a git blob from ``content`` and return its sha."""
        url = self._build_url(f"repos/{owner}/{repo_name}/git/blobs")
        response = self._request(
            "POST",
            url,
            json_body={
                "content": base64.b64encode(content).decode("ascii"),
                "encoding": "base64",
            },
        )
        payload = self._decode_json(response, "POST", url)

        sha = payload.get("sha") if isinstance(payload, dict) else None
        if not sha:
            raise ApiError(f"GitHub API returned a blob without sha: POST {url}")
        return str(sha)

    def update_file_contents(
        self,
        owner: str,
        repo_name: str,
        path: str,
        content: bytes,
        message: str,
        sha: Optional[str],
        committer: Dict[str, str],
    ) -> Dict[str, Any]:
        """Create or update a file in the repository.

        ``sha`` must be the blob sha of the version being replaced; it is
        omitted only when the file is being created.
        """
        url = self._build_url(f"repos/{owner}/{repo_name}/contents/{path.lstrip('/')}")
        body: Dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "committer": committer,
        }
        if sha:
            body["sha"] = sha

        response = self._request("PUT", url, json_body=body)
        payload = self._decode_json(response, "PUT", url)
        logger.debug("Updated file contents", extra={"repo": repo_name, "path": path})
        return payload if isinstance(payload, dict) else {}
