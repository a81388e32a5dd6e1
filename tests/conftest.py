import pytest


@pytest.fixture(autouse=True)
def isolate_user_environment(monkeypatch, tmp_path):
    """Keep the real user's prompt file and OLLAMA_URL out of the tests.

    ``HOME`` points at an empty temporary directory, so the loader sees no
    ``~/.config/commit_generator/prompt.md`` unless a test writes one.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("OLLAMA_URL", raising=False)
    yield home
