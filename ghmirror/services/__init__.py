"""Services"""

from ghmirror.services.github_client import GitHubClient
from ghmirror.services.stats import SyncStats
from ghmirror.services.sync_service import SyncService

__all__ = ["GitHubClient", "SyncService", "SyncStats"]
