import pytest

from omnex_backend import config as cfg


def _clear_env(monkeypatch):
    for name in (
        "OMNEX_SERVE_ROOT",
        "OMNEX_ASSETS_DIR",
        "OMNEX_HOST",
        "OMNEX_PORT",
        "OMNEX_PUBLIC_BASE_URL",
        "OMNEX_SERVE_STATIC",
        "OMNEX_DEFAULT_ACCENT",
        "OMNEX_DEFAULT_PAGE_SIZE",
        "OMNEX_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults_relative_to_serve_root(monkeypatch, site):
    _clear_env(monkeypatch)
    settings = cfg.load_settings(serve_root=str(site))
    assert settings.asset_root == (site / "Assets").resolve()
    assert settings.host == cfg.DEFAULT_HOST
    assert settings.port == cfg.DEFAULT_PORT
    assert settings.default_accent == cfg.DEFAULT_ACCENT
    assert settings.default_page_size == cfg.DEFAULT_PAGE_SIZE
    assert settings.serve_static is True
    assert settings.public_base_url == ""


def test_load_settings_reads_environment(monkeypatch, site):
    _clear_env(monkeypatch)
    monkeypatch.setenv("OMNEX_SERVE_ROOT", str(site))
    monkeypatch.setenv("OMNEX_ASSETS_DIR", "Assets/Images")
    monkeypatch.setenv("OMNEX_PORT", "9001")
    monkeypatch.setenv("OMNEX_PUBLIC_BASE_URL", "https://cdn.example.com/files/")
    monkeypatch.setenv("OMNEX_DEFAULT_ACCENT", "00FF00")
    monkeypatch.setenv("OMNEX_DEFAULT_PAGE_SIZE", "50")
    monkeypatch.setenv("OMNEX_SERVE_STATIC", "off")

    settings = cfg.load_settings()
    assert settings.asset_root == (site / "Assets" / "Images").resolve()
    assert settings.port == 9001
    assert settings.public_base_url == "https://cdn.example.com/files"
    assert settings.default_accent == "00ff00"
    assert settings.default_page_size == 50
    assert settings.serve_static is False


def test_invalid_env_values_fall_back(monkeypatch, site):
    _clear_env(monkeypatch)
    monkeypatch.setenv("OMNEX_PORT", "not-a-port")
    monkeypatch.setenv("OMNEX_DEFAULT_ACCENT", "purple")
    monkeypatch.setenv("OMNEX_DEFAULT_PAGE_SIZE", "0")

    settings = cfg.load_settings(serve_root=str(site))
    assert settings.port == cfg.DEFAULT_PORT
    assert settings.default_accent == cfg.DEFAULT_ACCENT
    assert settings.default_page_size == 1


def test_cli_overrides_beat_environment(monkeypatch, site):
    _clear_env(monkeypatch)
    monkeypatch.setenv("OMNEX_HOST", "0.0.0.0")
    settings = cfg.load_settings(serve_root=str(site), host="localhost", port=1234)
    assert settings.host == "localhost"
    assert settings.port == 1234


def test_validate_settings_accepts_existing_root(monkeypatch, site):
    _clear_env(monkeypatch)
    settings = cfg.validate_settings(cfg.load_settings(serve_root=str(site)))
    assert settings.asset_root == (site / "Assets").resolve()
    assert settings.static_mount == "/omnex/static/Assets"


def test_validate_settings_rejects_missing_root(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    with pytest.raises(cfg.AssetRootError):
        cfg.validate_settings(cfg.load_settings(serve_root=str(tmp_path)))


def test_validate_settings_rejects_root_outside_serve_root(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    serve = tmp_path / "www"
    serve.mkdir()
    (tmp_path / "elsewhere").mkdir()
    with pytest.raises(cfg.AssetRootError):
        cfg.validate_settings(cfg.load_settings(serve_root=str(serve), assets_dir="../elsewhere"))


def test_static_mount_when_asset_root_is_serve_root(site):
    settings = cfg.Settings(serve_root=site, asset_root=site)
    assert settings.static_mount == cfg.STATIC_PREFIX
