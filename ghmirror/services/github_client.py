"""GitHub API client wrapper"""
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel

from ghmirror.config import settings

logger = logging.getLogger(__name__)

# GitHub caps per_page at 100.
MAX_PER_PAGE = 100


class IssueRecord(BaseModel):
    id: int
    number: int
    title: str
    body: Optional[str] = None
    updated_at: str
    # GitHub reports the comment count, not the comments themselves.
    comments: int = 0


class CommentRecord(BaseModel):
    id: int
    body: Optional[str] = None
    updated_at: str


class GitHubClient:
    """Read-only wrapper for the GitHub REST issues API"""

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitHub client"""
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self.http = session or requests.Session()
        self.http.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": settings.user_agent,
            }
        )

    def _get_list(self, path: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """GET a JSON array, raising on HTTP errors and non-list payloads."""
        response = self.http.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise ValueError(f"Unexpected response from {path}: expected a list, got {type(data).__name__}")
        return data

    def list_issues(self, owner: str, repo: str, page: int, per_page: int = MAX_PER_PAGE) -> List[IssueRecord]:
        """Get one page of issues, oldest first, open and closed"""
        params = {
            # GitHub defaults to state=open; closed issues must be mirrored too.
            "state": "all",
            "sort": "created",
            "direction": "asc",
            "page": page,
            "per_page": per_page,
        }
        try:
            data = self._get_list(f"/repos/{owner}/{repo}/issues", params)
            return [IssueRecord.model_validate(item) for item in data]
        except Exception as e:
            logger.error(f"Failed to get issues page {page} for {owner}/{repo}: {e}")
            raise

    def list_comments(self, owner: str, repo: str, issue_number: int) -> List[CommentRecord]:
        """Get all comments for an issue"""
        comments: List[CommentRecord] = []
        page = 1
        try:
            while True:
                params = {"page": page, "per_page": MAX_PER_PAGE}
                data = self._get_list(f"/repos/{owner}/{repo}/issues/{issue_number}/comments", params)
                comments.extend(CommentRecord.model_validate(item) for item in data)
                if len(data) < MAX_PER_PAGE:
                    return comments
                page += 1
        except Exception as e:
            logger.error(f"Failed to get comments for issue #{issue_number} in {owner}/{repo}: {e}")
            raise
