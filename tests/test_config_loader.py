import pytest
import yaml

from e2e_framework.utils.config_loader import PROJECT_ROOT, load_config, resolve_config_dir


def test_load_config_reads_environment_file(tmp_path):
    (tmp_path / "qa.yaml").write_text(
        "BROWSER: firefox\nHEADLESS: true\nAPP_URL: https://qa.example.test\n",
        encoding="utf-8",
    )

    store = load_config("qa", tmp_path)

    assert store.environment == "qa"
    assert store.path == tmp_path / "qa.yaml"
    assert store.get("BROWSER") == "firefox"
    assert store.get("HEADLESS") is True
    assert store.get("MISSING") is None
    assert store.get("MISSING", "x") == "x"
    assert "APP_URL" in store


def test_missing_environment_file_fails_fast(tmp_path):
    with pytest.raises(FileNotFoundError, match="staging"):
        load_config("staging", tmp_path)


def test_empty_file_is_empty_store(tmp_path):
    (tmp_path / "dev.yaml").write_text("", encoding="utf-8")
    assert load_config("dev", tmp_path).get("BROWSER") is None


def test_non_mapping_root_is_rejected(tmp_path):
    (tmp_path / "dev.yaml").write_text("- chrome\n- firefox\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config("dev", tmp_path)


def test_invalid_yaml_propagates(tmp_path):
    (tmp_path / "dev.yaml").write_text("BROWSER: [chrome\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_config("dev", tmp_path)


def test_config_dir_from_env_var(tmp_path, monkeypatch):
    monkeypatch.setenv("E2E_CONFIG_DIR", str(tmp_path))
    assert resolve_config_dir() == tmp_path


def test_relative_config_dir_resolves_against_project_root(monkeypatch):
    monkeypatch.delenv("E2E_CONFIG_DIR", raising=False)
    assert resolve_config_dir() == (PROJECT_ROOT / "config").resolve()
    assert resolve_config_dir("settings") == (PROJECT_ROOT / "settings").resolve()


def test_bundled_dev_config_loads(monkeypatch):
    monkeypatch.delenv("E2E_CONFIG_DIR", raising=False)
    store = load_config("dev")
    assert store.get("BROWSER")
    assert store.get("APP_URL")
