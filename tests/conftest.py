import pytest

from git_tag_bump.config import Settings

SETTINGS_VARIABLES = (
    "REPO_DIR", "BUMP_POLICY", "WITHOUT_V", "TAG_PREFIX", "REPO_TOKEN",
    "GIT_REMOTE", "TAGGER_NAME", "TAGGER_EMAIL", "INHERIT_PREFIX",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CI job's own settings out of the tests."""
    for name in SETTINGS_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings()
