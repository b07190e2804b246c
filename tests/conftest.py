import pytest

from transcoder import KEY_ENV_VAR, Transcoder


@pytest.fixture
def tc():
    return Transcoder("abcdefghijk")


@pytest.fixture(autouse=True)
def no_env_key(monkeypatch):
    monkeypatch.delenv(KEY_ENV_VAR, raising=False)
    yield
