"""Settings read from the environment of the CI job."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from git_tag_bump.errors import ConfigError
from git_tag_bump.policy import Policy

DEFAULT_TAGGER_NAME = "whiteblock"
DEFAULT_TAGGER_EMAIL = "developer@whiteblock.co"
DEFAULT_PREFIX = "v"


@dataclass(frozen=True)
class Settings:
    repo_dir: str = "."
    policy: Policy = Policy.BUILD_NUMBER
    # None keeps whatever prefix the latest tag carries.
    prefix: Optional[str] = DEFAULT_PREFIX
    token: Optional[str] = None
    remote: str = "origin"
    tagger_name: str = DEFAULT_TAGGER_NAME
    tagger_email: str = DEFAULT_TAGGER_EMAIL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        prefix = env.get("TAG_PREFIX", DEFAULT_PREFIX)
        if _enabled(env, "INHERIT_PREFIX"):
            prefix = None
        if _enabled(env, "WITHOUT_V"):
            prefix = ""

        return cls(
            repo_dir=env.get("REPO_DIR") or ".",
            policy=parse_policy(env.get("BUMP_POLICY") or Policy.BUILD_NUMBER.value),
            prefix=prefix,
            token=env.get("REPO_TOKEN") or None,
            remote=env.get("GIT_REMOTE") or "origin",
            tagger_name=env.get("TAGGER_NAME") or DEFAULT_TAGGER_NAME,
            tagger_email=env.get("TAGGER_EMAIL") or DEFAULT_TAGGER_EMAIL,
        )


def parse_policy(value: str) -> Policy:
    try:
        return Policy(value.strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in Policy)
        raise ConfigError(f"unknown bump policy <{value}>, expected one of: {choices}") from None


def _enabled(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() == "true"
