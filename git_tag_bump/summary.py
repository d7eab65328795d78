"""Annotated tag message listing the commits since the previous tag."""

import logging
from typing import Iterable, Optional

from git_tag_bump.errors import CollaboratorFailure
from git_tag_bump.git import Commit, Head, Repository
from git_tag_bump.version import Version

logger = logging.getLogger(__name__)

NOTHING_NEW = "Nothing new, just for tagging."


def summarize(commits: Iterable[Commit], stop: Optional[str] = None) -> str:
    """Bullet every commit message until ``stop`` is reached."""
    lines = []
    for commit in commits:
        if commit.sha == stop:
            break
        lines.append(f"* {commit.message}")
    return "".join(lines) or NOTHING_NEW


def release_notes(repo: Repository, latest: Version, head: Head) -> str:
    try:
        stop = repo.resolve(latest.tag) if latest.tag else None
        return summarize(repo.log(head.commit, stop), stop)
    except CollaboratorFailure as exc:
        logger.warning("could not summarize commits since %s: %s", latest.tag, exc)
        return f"Failed to summarize commit messages <{exc}>"
