"""Exceptions raised while computing and publishing a version tag."""


class BumpError(Exception):
    """Base class for every failure the tool reports."""


class MalformedTag(BumpError, ValueError):
    """A tag name does not follow the version grammar in use."""

    def __init__(self, tag, reason="invalid tag format"):
        self.tag = tag
        super().__init__(f"{reason}: <{tag}>")


class PreconditionViolation(BumpError):
    """The repository is not in a state that allows a bump."""


class CollaboratorFailure(BumpError):
    """A git command failed."""

    def __init__(self, command, stderr=""):
        self.command = list(command)
        self.stderr = stderr.strip()
        message = f"`{' '.join(self.command)}` failed"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class ConfigError(BumpError):
    """An environment variable or flag holds an unusable value."""
