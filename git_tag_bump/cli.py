"""Command line entry point: compute, create and push the next version tag."""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from git_tag_bump import git
from git_tag_bump.config import Settings, parse_policy
from git_tag_bump.errors import BumpError
from git_tag_bump.policy import Policy, next_version
from git_tag_bump.summary import release_notes
from git_tag_bump.version import render

logger = logging.getLogger(__name__)


def bump(repo: git.Repository, settings: Settings, push: bool = True,
         dry_run: bool = False) -> str:
    """Tag HEAD with the next version and return the new tag name."""
    tags = repo.tags()
    head = repo.head()
    latest, following = next_version(tags, settings.policy, head.branch, settings.prefix)
    convention = settings.policy.convention
    name = render(following, convention)
    logger.info("latest tag: %s", latest.tag or "<none>")

    if dry_run:
        logger.info("dry run, not creating %s", name)
        return name

    message = release_notes(repo, latest, head)
    signature = git.tagger(settings.tagger_name, settings.tagger_email)
    repo.create_tag(name, head.commit, message, signature)
    if push:
        repo.push(git.refspec(name), settings.token, settings.remote)
    logger.info("bumped version to %s", name)
    return name


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="git-tag-bump",
        description="Create and push the next version tag of a git repository.",
    )
    parser.add_argument("--repo", help="Repository path (env REPO_DIR, default: .)")
    parser.add_argument(
        "--policy",
        choices=[p.value for p in Policy],
        help="Increment policy (env BUMP_POLICY, default: build-number)",
    )
    parser.add_argument("--prefix", help="Prefix of the new tag (env TAG_PREFIX, default: v)")
    parser.add_argument("--inherit-prefix", action="store_true",
                        help="Reuse the latest tag's prefix (env INHERIT_PREFIX)")
    parser.add_argument("--remote", help="Remote to push to (env GIT_REMOTE, default: origin)")
    parser.add_argument("--no-push", action="store_true", help="Create the tag locally only")
    parser.add_argument("--dry-run", action="store_true", help="Print the next tag and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    try:
        settings = Settings.from_env()
        overrides = {}
        if args.repo:
            overrides["repo_dir"] = args.repo
        if args.policy:
            overrides["policy"] = parse_policy(args.policy)
        if args.inherit_prefix:
            overrides["prefix"] = None
        if args.prefix is not None:
            overrides["prefix"] = args.prefix
        if args.remote:
            overrides["remote"] = args.remote
        settings = replace(settings, **overrides)

        name = bump(git.Repository(settings.repo_dir), settings,
                    push=not args.no_push, dry_run=args.dry_run)
    except BumpError as exc:
        logger.error("error: %s", exc)
        return 1

    print(name)
    return 0
