from clusters_mcp.config import (
    DEFAULT_TIMEOUT_SECONDS,
    ClustersConfig,
    _load_timeout,
    load_api_key,
)


def test_load_timeout_invalid_env(monkeypatch):
    monkeypatch.setenv("CLUSTERS_HTTP_TIMEOUT", "not-a-number")
    assert _load_timeout() == DEFAULT_TIMEOUT_SECONDS


def test_load_timeout_rejects_non_positive(monkeypatch):
    monkeypatch.setenv("CLUSTERS_HTTP_TIMEOUT", "0")
    assert _load_timeout() == DEFAULT_TIMEOUT_SECONDS


def test_load_timeout_valid_env(monkeypatch):
    monkeypatch.setenv("CLUSTERS_HTTP_TIMEOUT", "5.5")
    assert _load_timeout() == 5.5


def test_load_api_key_env_over_file(monkeypatch, tmp_path):
    key_file = tmp_path / "apikey.txt"
    key_file.write_text("file-key", encoding="utf-8")
    monkeypatch.setenv("CLUSTERS_API_KEY", "env-key")
    monkeypatch.setenv("CLUSTERS_API_KEY_FILE", str(key_file))
    assert load_api_key() == "env-key"


def test_load_api_key_from_file(monkeypatch, tmp_path):
    key_file = tmp_path / "apikey.txt"
    key_file.write_text("file-key\n", encoding="utf-8")
    monkeypatch.delenv("CLUSTERS_API_KEY", raising=False)
    monkeypatch.setenv("CLUSTERS_API_KEY_FILE", str(key_file))
    assert load_api_key() == "file-key"


def test_missing_api_key_is_empty_string(monkeypatch, tmp_path):
    monkeypatch.delenv("CLUSTERS_API_KEY", raising=False)
    monkeypatch.setenv("CLUSTERS_API_KEY_FILE", str(tmp_path / "missing.txt"))
    assert load_api_key() == ""


def test_config_accepts_injected_values():
    cfg = ClustersConfig(base_url="http://stub", api_key="k", timeout=2.0)
    assert cfg.base_url == "http://stub"
    assert cfg.api_key == "k"
    assert cfg.timeout == 2.0
