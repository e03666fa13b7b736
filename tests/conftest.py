import pytest

from safelayers.config import get_settings

SETTINGS_ENV = (
    "APP_ENV",
    "LOG_LEVEL",
    "LOG_JSON",
    "SAFETY_DEFAULT_LAYERS",
    "SAFETY_MAX_LAYERS",
    "SAFETY_MUTATION_ATTEMPTS",
    "SAFETY_LOG_PROBES",
)


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class CountingLogic:
    """Wrap a decision function and count its invocations."""

    def __init__(self, fn) -> None:
        self.fn = fn
        self.calls = 0

    def __call__(self, model):
        self.calls += 1
        return self.fn(model)


@pytest.fixture
def counting():
    return CountingLogic
