import os

from kapa_docs.core.env import load_dotenv_file


def test_load_dotenv_file_returns_none_when_missing(tmp_path) -> None:
    assert load_dotenv_file(tmp_path / ".env") is None


def test_load_dotenv_file_sets_unset_variables(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "KAPA_API_KEY='quoted-key'\n"
        "export KAPA_PROJECT_ID=project-1\n"
        "not a pair\n"
        "MCP_SERVER_NAME=from-file\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("MCP_SERVER_NAME", "already-set")

    pairs = load_dotenv_file(env_file)

    assert pairs == {
        "KAPA_API_KEY": "quoted-key",
        "KAPA_PROJECT_ID": "project-1",
        "MCP_SERVER_NAME": "from-file",
    }
    assert os.environ["KAPA_API_KEY"] == "quoted-key"
    assert os.environ["KAPA_PROJECT_ID"] == "project-1"
    assert os.environ["MCP_SERVER_NAME"] == "already-set"


def test_load_dotenv_file_returns_keys_in_file_order(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("# KAPA_API_KEY=x\nKAPA_API_KEY=x\nexport LOG_LEVEL=INFO\n")
    monkeypatch.setenv("KAPA_API_KEY", "from-env")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert list(load_dotenv_file(env_file)) == ["KAPA_API_KEY", "LOG_LEVEL"]


def test_load_dotenv_file_returns_empty_pairs_for_empty_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("# nothing yet\n")

    assert load_dotenv_file(env_file) == {}
