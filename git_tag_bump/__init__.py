"""Compute the next version tag of a git repository and publish it."""

from git_tag_bump.errors import (
    BumpError,
    CollaboratorFailure,
    ConfigError,
    MalformedTag,
    PreconditionViolation,
)
from git_tag_bump.policy import Policy, next_version
from git_tag_bump.version import (
    ZERO,
    Convention,
    Version,
    compare,
    find_latest,
    is_newer,
    parse,
    render,
)

__version__ = "0.1.0"
