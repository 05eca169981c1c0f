from orgboard.config import Settings
from orgboard.services.crawl.base import MissingFieldPolicy

import pytest


def test_defaults_from_empty_env():
    s = Settings.from_env({})
    assert s.base_url == "https://www.theofficialboard.jp"
    assert s.timeout == 12.0
    assert s.on_missing_field is MissingFieldPolicy.ABORT
    assert s.log_level == "WARNING"
    assert s.headers == {"User-Agent": "orgboard-crawler/0.1"}


def test_values_from_env():
    s = Settings.from_env(
        {
            "ORGBOARD_BASE_URL": "http://localhost:9000/",
            "ORGBOARD_TIMEOUT": "3.5",
            "ORGBOARD_USER_AGENT": "test-agent",
            "ORGBOARD_ON_MISSING": "SKIP",
            "ORGBOARD_LOG_LEVEL": "debug",
        }
    )
    assert s.base_url == "http://localhost:9000"
    assert s.timeout == 3.5
    assert s.user_agent == "test-agent"
    assert s.on_missing_field is MissingFieldPolicy.SKIP
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {"ORGBOARD_TIMEOUT": "soon"},
        {"ORGBOARD_TIMEOUT": "0"},
        {"ORGBOARD_BASE_URL": "ftp://example.test"},
        {"ORGBOARD_ON_MISSING": "ignore"},
        {"ORGBOARD_LOG_LEVEL": "chatty"},
    ],
)
def test_invalid_env_values_raise(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)


def test_override_ignores_none_and_validates():
    s = Settings.from_env({}).override(timeout=None, on_missing_field="skip", base_url="https://mirror.test/")
    assert s.timeout == 12.0
    assert s.on_missing_field is MissingFieldPolicy.SKIP
    assert s.base_url == "https://mirror.test"
    with pytest.raises(ValueError):
        s.override(timeout=-1)
