"""Issue mirroring service"""

import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import func, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from ghmirror.config import settings
from ghmirror.models import Comment, Issue
from ghmirror.services.github_client import CommentRecord, GitHubClient, IssueRecord
from ghmirror.services.stats import SyncStats

logger = logging.getLogger(__name__)


class SyncService:
    """Service for mirroring one repository's issues into the local store"""

    def __init__(self, db: Session, client: GitHubClient, page_size: Optional[int] = None):
        self.db = db
        self.client = client
        self.page_size = page_size or settings.page_size

    def get_cursor(self) -> int:
        """Highest issue number already stored, 0 for an empty mirror."""
        return self.db.query(func.max(Issue.number)).scalar() or 0

    def _insert_issue(self, issue: IssueRecord) -> bool:
        """INSERT OR IGNORE an issue; True if a row was written."""
        stmt = (
            sqlite_insert(Issue.__table__)
            .values(
                id=issue.id,
                number=issue.number,
                title=issue.title,
                body=issue.body or "",
                updated_at=issue.updated_at,
            )
            .on_conflict_do_nothing(index_elements=["id"])
        )
        return self.db.execute(stmt).rowcount > 0

    def _insert_comment(self, comment: CommentRecord, issue_id: int) -> bool:
        """INSERT OR IGNORE a comment; True if a row was written."""
        stmt = (
            sqlite_insert(Comment.__table__)
            .values(
                id=comment.id,
                issue_id=issue_id,
                body=comment.body or "",
                updated_at=comment.updated_at,
            )
            .on_conflict_do_nothing(index_elements=["id"])
        )
        return self.db.execute(stmt).rowcount > 0

    def _update_comment(self, comment: CommentRecord):
        self.db.execute(
            update(Comment.__table__)
            .where(Comment.__table__.c.id == comment.id)
            .values(body=comment.body or "", updated_at=comment.updated_at)
        )

    def _stored_comments(self, issue_id: int) -> Dict[int, Tuple[Any, Any]]:
        rows = (
            self.db.query(Comment.id, Comment.body, Comment.updated_at)
            .filter(Comment.issue_id == issue_id)
            .all()
        )
        return {row.id: (row.body, row.updated_at) for row in rows}

    def sync_repository(self, owner: str, repo: str, stats: Optional[SyncStats] = None) -> Dict[str, Any]:
        """Mirror new issues, then refresh comments of previously mirrored ones"""
        if stats is None:
            stats = SyncStats()

        logger.info(f"Starting sync for {owner}/{repo}")

        try:
            cursor = self.get_cursor()
            logger.info(f"Starting from issue #{cursor}")

            self.ingest_new_issues(owner, repo, cursor, stats)

            # Nothing was stored before this run, so there is nothing to reconcile.
            if cursor > 0:
                self.reconcile_existing_issues(owner, repo, cursor, stats)

            logger.info(f"Sync completed for {owner}/{repo}: {stats.as_dict()}")
            return {"status": "success", "stats": stats}

        except Exception as e:
            self.db.rollback()
            logger.error(f"Sync failed for {owner}/{repo}: {e}")
            return {"status": "failed", "error": str(e), "stats": stats}

    def ingest_new_issues(self, owner: str, repo: str, cursor: int, stats: SyncStats):
        """Walk issue pages oldest first, inserting issues numbered above `cursor`"""
        page = 1
        while True:
            issues = self.client.list_issues(owner, repo, page=page, per_page=self.page_size)
            if not issues:
                break

            logger.info(f"Processing issues page {page}")
            new_in_page = 0

            for issue in issues:
                stats.mark_processed(issue.number)
                if issue.number <= cursor:
                    continue

                if not self._insert_issue(issue):
                    # Already written earlier in this run (page contents shifted).
                    logger.debug(f"Issue #{issue.number} already stored, skipping")
                    continue

                inserted_comments = 0
                if issue.comments > 0:
                    for comment in self.client.list_comments(owner, repo, issue.number):
                        if self._insert_comment(comment, issue.id):
                            inserted_comments += 1

                self.db.commit()
                # Counted only once the rows are committed.
                stats.new_issues += 1
                stats.new_comments += inserted_comments
                new_in_page += 1

            logger.debug(f"Page {page}: {new_in_page} new of {len(issues)} issues")

            # A short page is the last one. A full page always advances,
            # including one made up entirely of already-stored issues.
            if len(issues) < self.page_size:
                break
            page += 1

    def reconcile_existing_issues(self, owner: str, repo: str, cursor: int, stats: SyncStats):
        """Pick up comments added or edited on issues mirrored by earlier runs"""
        logger.info("Checking for updates to existing issues...")

        existing = (
            self.db.query(Issue.id, Issue.number)
            .filter(Issue.number <= cursor)
            .order_by(Issue.number)
            .all()
        )

        for issue_id, number in existing:
            stored = self._stored_comments(issue_id)
            inserted = updated = 0

            for comment in self.client.list_comments(owner, repo, number):
                if comment.id not in stored:
                    if self._insert_comment(comment, issue_id):
                        inserted += 1
                    continue

                body, updated_at = stored[comment.id]
                if body != (comment.body or "") or updated_at != comment.updated_at:
                    self._update_comment(comment)
                    updated += 1

            self.db.commit()
            stats.mark_processed(number)
            stats.new_comments += inserted
            stats.updated_comments += updated
