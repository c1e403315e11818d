import pytest

from togglit_cli import config


def _use_tmp_config_dir(tmp_path, monkeypatch) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)


def test_load_config_without_file_returns_defaults(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    cfg = config.load_config()
    assert cfg.project_id == ""
    assert cfg.variant == "hosted"
    assert cfg.profiles == {}


def test_save_config_round_trip_omits_empty_values(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    cfg = config.AppConfig(project_id="p1", env="prod", api_key="", profiles={"dev": {"env": "dev"}})

    path = config.save_config(cfg)
    contents = tmp_path.joinpath("config.toml").read_text(encoding="utf-8")

    assert path.endswith("config.toml")
    assert "api_key" not in contents
    loaded = config.load_config()
    assert loaded.project_id == "p1"
    assert loaded.env == "prod"
    assert loaded.profiles == {"dev": {"env": "dev"}}


def test_apply_profile_overrides_only_set_fields() -> None:
    cfg = config.AppConfig(
        project_id="p1",
        env="prod",
        api_key="k",
        profiles={"dev": {"env": "staging", "api_key": ""}},
    )
    effective = config.apply_profile(cfg, "dev")
    assert effective.env == "staging"
    assert effective.api_key == "k"
    assert effective.project_id == "p1"
    assert cfg.env == "prod"


def test_apply_profile_unknown_raises() -> None:
    cfg = config.default_config()
    with pytest.raises(KeyError):
        config.apply_profile(cfg, "missing")


def test_apply_env_overrides_file_values(monkeypatch) -> None:
    cfg = config.AppConfig(project_id="p1", env="prod", api_key="file-key")
    monkeypatch.setenv(config.ENV_API_KEY, "env-key")
    monkeypatch.setenv(config.ENV_ENV, " ")
    monkeypatch.delenv(config.ENV_PROJECT_ID, raising=False)
    effective = config.apply_env(cfg)
    assert effective.api_key == "env-key"
    assert effective.env == "prod"
    assert effective.project_id == "p1"


def test_normalize_variant() -> None:
    assert config.normalize_variant(None) == "hosted"
    assert config.normalize_variant(" Local ") == "local"


def test_normalize_variant_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="alternate"):
        config.normalize_variant("staging-box")
