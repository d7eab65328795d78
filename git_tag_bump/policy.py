"""Increment policies: how the next tag is derived from the latest one."""

import enum
import logging
import re
from dataclasses import replace
from typing import Iterable, Optional

from git_tag_bump.errors import PreconditionViolation
from git_tag_bump.version import Convention, Version, find_latest

logger = logging.getLogger(__name__)

RELEASE_BRANCH = re.compile(r"^release/(0|[1-9]\d*)\.(0|[1-9]\d*)$")


class Policy(enum.Enum):
    BUILD_NUMBER = "build-number"
    PATCH = "patch"
    RELEASE_LINE = "release-line"

    @property
    def convention(self) -> Convention:
        if self is Policy.BUILD_NUMBER:
            return Convention.LEGACY
        return Convention.SEMVER


def bump_build_number(latest: Version) -> Version:
    # Build number 0 means none was set yet: open a new patch at build 1.
    if latest.build_number == 0:
        return replace(latest, patch=latest.patch + 1, build_number=1, tag=None)
    return replace(latest, build_number=latest.build_number + 1, tag=None)


def bump_patch(latest: Version) -> Version:
    return replace(latest, patch=latest.patch + 1, prerelease=None, build=None,
                   build_number=0, tag=None)


def release_line(branch: Optional[str]) -> tuple[int, int]:
    """Extract ``(major, minor)`` from a ``release/<major>.<minor>`` branch name."""
    if branch is None:
        raise PreconditionViolation("HEAD is not a branch")
    match = RELEASE_BRANCH.match(branch)
    if match is None:
        raise PreconditionViolation(
            f"branch <{branch}> does not match release/<major>.<minor>")
    return int(match.group(1)), int(match.group(2))


def bump_within_release_line(latest: Version, major: int, minor: int) -> Version:
    if latest.tag is None or latest.line != (major, minor):
        return Version(major=major, minor=minor, patch=0, prefix=latest.prefix)
    return bump_patch(latest)


def next_version(tags: Iterable[str], policy: Policy, branch: Optional[str] = None,
                 prefix: Optional[str] = None) -> tuple[Version, Version]:
    """Find the latest tag and derive the one that should follow it.

    Args:
        tags: tag names as listed by the repository.
        policy: increment policy; it also fixes the suffix convention.
        branch: short name of the checked out branch, None when detached.
            Only consulted by ``Policy.RELEASE_LINE``.
        prefix: prefix for the new tag. None keeps the latest tag's prefix.

    Returns:
        ``(latest, next)``. ``latest.tag`` is None when no tag qualified.

    Raises:
        PreconditionViolation: for ``Policy.RELEASE_LINE`` when HEAD is
            detached or the branch is not a release branch.
    """
    convention = policy.convention
    if policy is Policy.RELEASE_LINE:
        major, minor = release_line(branch)
        latest = find_latest(tags, convention, lambda v: v.line == (major, minor))
        following = bump_within_release_line(latest, major, minor)
    elif policy is Policy.BUILD_NUMBER:
        latest = find_latest(tags, convention)
        following = bump_build_number(latest)
    else:
        latest = find_latest(tags, convention)
        following = bump_patch(latest)

    logger.debug("latest tag: %s", latest.tag or "<none>")
    if prefix is not None:
        following = replace(following, prefix=prefix)
    return latest, following
