"""Thin wrapper around the ``git`` executable."""

import base64
import logging
import os
import subprocess
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator, Optional, Sequence

from git_tag_bump.errors import CollaboratorFailure

logger = logging.getLogger(__name__)

# Tag timestamps are written in Korea Standard Time.
KST = timezone(timedelta(hours=9), "KST")

# Any non-empty user name is accepted when authenticating with a token.
PUSH_USER = "git-tag-bump"


@dataclass(frozen=True)
class Signature:
    name: str
    email: str
    when: datetime


@dataclass(frozen=True)
class Head:
    commit: str
    branch: Optional[str]


@dataclass(frozen=True)
class Commit:
    sha: str
    message: str


def tagger(name: str, email: str, now: Optional[datetime] = None) -> Signature:
    when = now or datetime.now(timezone.utc)
    return Signature(name=name, email=email, when=when.astimezone(KST).replace(microsecond=0))


def refspec(tag: str) -> str:
    return f"+refs/tags/{tag}:refs/tags/{tag}"


class Repository:
    """A local repository driven through ``git`` subprocesses."""

    def __init__(self, path="."):
        self.path = Path(path)

    def _git(self, *args: str, stdin: Optional[str] = None, env=None,
             options: Sequence[str] = (), allowed: Sequence[int] = (0,)) -> str:
        # ``options`` may carry credentials, so they never reach logs or errors.
        shown = ["git", *args]
        logger.debug("running %s", " ".join(shown))
        try:
            result = subprocess.run(
                ["git", *options, *args],
                cwd=self.path,
                input=stdin,
                capture_output=True,
                text=True,
                env=env,
            )
        except OSError as exc:
            raise CollaboratorFailure(shown, str(exc)) from exc
        if result.returncode not in allowed:
            raise CollaboratorFailure(shown, result.stderr)
        return result.stdout

    def tags(self) -> list[str]:
        return self._git("tag", "--list").splitlines()

    def head(self) -> Head:
        commit = self._git("rev-parse", "--verify", "HEAD").strip()
        try:
            branch = self._git("symbolic-ref", "--quiet", "--short", "HEAD").strip()
        except CollaboratorFailure:
            branch = None
        return Head(commit=commit, branch=branch)

    def resolve(self, rev: str) -> str:
        """Return the commit ``rev`` points at, peeling annotated tags."""
        return self._git("rev-parse", "--verify", f"{rev}^{{commit}}").strip()

    def log(self, start: str, stop: Optional[str] = None) -> Iterator[Commit]:
        """Yield commits reachable from ``start`` but not from ``stop``, newest first."""
        revisions = [start] if stop is None else [start, f"^{stop}"]
        output = self._git("log", "-z", "--format=%H%n%B", *revisions)
        for record in output.split("\0"):
            if not record.strip():
                continue
            sha, _, body = record.lstrip("\n").partition("\n")
            yield Commit(sha=sha.strip(), message=body.rstrip("\n") + "\n")

    def create_tag(self, name: str, commit: str, message: str, signature: Signature) -> None:
        env = dict(os.environ)
        env.update(
            GIT_COMMITTER_NAME=signature.name,
            GIT_COMMITTER_EMAIL=signature.email,
            GIT_COMMITTER_DATE=signature.when.isoformat(),
        )
        self._git("tag", "--annotate", "--cleanup=verbatim", "--file=-", name, commit,
                  stdin=message, env=env)
        logger.info("created tag %s at %s", name, commit)

    def _configured_headers(self) -> list[str]:
        """Names of every ``http[.<url>].extraheader`` key set in git config."""
        output = self._git("config", "--get-regexp", r"^http\.(.*\.)?extraheader$", allowed=(0, 1))
        keys = ["http.extraheader"]
        for line in output.splitlines():
            key = line.split(" ", 1)[0]
            if key and key not in keys:
                keys.append(key)
        return keys

    def _auth_options(self, remote: str, token: str) -> list[str]:
        # An empty value clears headers collected so far for that key.
        options = []
        for key in self._configured_headers():
            options += ["-c", f"{key}="]

        url = self._git("remote", "get-url", "--push", remote).strip()
        key = "http.extraHeader"
        if url.startswith(("http://", "https://")):
            # The most specific URL match wins over host-wide entries.
            key = f"http.{url}.extraHeader"
        credentials = base64.b64encode(f"{PUSH_USER}:{token}".encode()).decode()
        return options + ["-c", f"{key}=Authorization: Basic {credentials}"]

    def push(self, spec: str, token: Optional[str] = None, remote: str = "origin") -> None:
        options = []
        if token:
            options = self._auth_options(remote, token)
        else:
            logger.warning("no push token set, relying on git's configured credentials")
        self._git("push", remote, spec, options=options)
        logger.info("pushed %s to %s", spec, remote)
