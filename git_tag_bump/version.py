"""Version model for tag names.

Two suffix conventions are understood:

* ``Convention.LEGACY`` encodes an incrementing counter after a dash in the
  patch field (``v1.2.3-4`` is patch 3, build number 4). Numeric fields are
  read leniently: text that is not a number counts as 0.
* ``Convention.SEMVER`` follows https://semver.org/ with an optional
  lowercase prefix (``v1.2.3-rc.1+build.7``). Grammar and precedence come
  from the ``semver`` package, so build metadata never affects ordering.

A single invocation picks one convention and uses it for every parse,
comparison and rendering.
"""

import enum
import functools
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional

import semver

from git_tag_bump.errors import MalformedTag

logger = logging.getLogger(__name__)

_LEGACY_PREFIX = re.compile(r"^[a-z][a-z-]*")
_SEMVER_PREFIX = re.compile(r"^[a-z]*")
_DIGITS = re.compile(r"[0-9]+")


class Convention(enum.Enum):
    LEGACY = "legacy"
    SEMVER = "semver"


@dataclass(frozen=True)
class Version:
    major: int = 0
    minor: int = 0
    patch: int = 0
    prefix: str = ""
    prerelease: Optional[str] = None
    build: Optional[str] = None
    build_number: int = 0
    # Name of the tag this version was read from; None for computed versions.
    tag: Optional[str] = field(default=None, compare=False)

    @property
    def line(self) -> tuple[int, int]:
        return self.major, self.minor


ZERO = Version()

VersionFilter = Callable[[Version], bool]


def _atoi(text: str) -> int:
    if _DIGITS.fullmatch(text):
        return int(text)
    return 0


def _parse_legacy(tag: str) -> Version:
    match = _LEGACY_PREFIX.match(tag)
    prefix = match.group(0) if match else ""
    parts = tag[len(prefix):].split(".")
    if len(parts) != 3:
        raise MalformedTag(tag)

    patch_text, _, build_text = parts[2].partition("-")
    return Version(
        major=_atoi(parts[0]),
        minor=_atoi(parts[1]),
        patch=_atoi(patch_text),
        prefix=prefix,
        build_number=_atoi(build_text),
        tag=tag,
    )


def _parse_semver(tag: str) -> Version:
    prefix = _SEMVER_PREFIX.match(tag).group(0)
    try:
        info = semver.Version.parse(tag[len(prefix):])
    except ValueError as exc:
        raise MalformedTag(tag, "not a semantic version") from exc
    return Version(
        major=info.major,
        minor=info.minor,
        patch=info.patch,
        prefix=prefix,
        prerelease=info.prerelease,
        build=info.build,
        tag=tag,
    )


def parse(tag: str, convention: Convention = Convention.SEMVER) -> Version:
    """Parse a tag name into a :class:`Version`.

    Raises:
        MalformedTag: if the tag does not have three dot separated fields
            (legacy) or does not match the semantic version grammar.
    """
    if convention is Convention.LEGACY:
        return _parse_legacy(tag)
    return _parse_semver(tag)


def render(version: Version, convention: Convention = Convention.SEMVER) -> str:
    text = f"{version.prefix}{version.major}.{version.minor}.{version.patch}"
    if convention is Convention.LEGACY:
        return f"{text}-{version.build_number}"
    if version.prerelease:
        text += f"-{version.prerelease}"
    if version.build:
        text += f"+{version.build}"
    return text


def compare(a: Version, b: Version, convention: Convention = Convention.SEMVER) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, level with, or after ``b``."""
    if convention is Convention.LEGACY:
        left = (a.major, a.minor, a.patch, a.build_number)
        right = (b.major, b.minor, b.patch, b.build_number)
        return (left > right) - (left < right)

    left = semver.Version(a.major, a.minor, a.patch, a.prerelease)
    return left.compare(semver.Version(b.major, b.minor, b.patch, b.prerelease))


def is_newer(candidate: Version, reference: Version,
             convention: Convention = Convention.SEMVER) -> bool:
    """True unless ``candidate`` sorts strictly before ``reference``.

    Equal versions count as newer, so a later tag of the same version
    replaces an earlier one.
    """
    return compare(candidate, reference, convention) >= 0


def _candidates(tags: Iterable[str], convention: Convention,
                predicate: Optional[VersionFilter]) -> Iterator[Version]:
    for tag in tags:
        try:
            version = parse(tag, convention)
        except MalformedTag as exc:
            logger.warning("skipping tag: %s", exc)
            continue
        if predicate is None or predicate(version):
            yield version


def find_latest(tags: Iterable[str], convention: Convention = Convention.SEMVER,
                predicate: Optional[VersionFilter] = None) -> Version:
    """Return the newest version among ``tags``, or ``ZERO`` if none qualifies."""
    return functools.reduce(
        lambda latest, candidate: candidate if is_newer(candidate, latest, convention) else latest,
        _candidates(tags, convention, predicate),
        ZERO,
    )
