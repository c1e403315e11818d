from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_config, normalize_variant, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/togglit/config.toml).")

SETTING_KEYS = ("project_id", "env", "api_key", "variant")


def _mask(value: str) -> str:
    return "(set)" if (value or "").strip() else "(empty)"


def _checked_variant(raw: str) -> str:
    try:
        return normalize_variant(raw)
    except ValueError as e:
        console.err(str(e))
        raise typer.Exit(code=2)


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        project_id: str = typer.Option(..., "--project", prompt="Project id", help="Togglit project id."),
        env: str = typer.Option("production", "--env", prompt="Environment", help="Default environment."),
        api_key: str = typer.Option(..., "--api-key", prompt="API key", hide_input=True, help="Togglit API key."),
        variant: str = typer.Option("hosted", "--variant", help="Service variant: hosted, local, alternate."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.warn(f"Config already exists: {path}. Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.project_id = project_id.strip()
    cfg.env = env.strip()
    cfg.api_key = api_key.strip()
    cfg.variant = _checked_variant(variant)
    if not cfg.project_id:
        console.err("Project id cannot be empty.")
        raise typer.Exit(code=2)
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    console.console.print(
        f"project_id={cfg.project_id} env={cfg.env} api_key={_mask(cfg.api_key)} variant={cfg.variant}"
    )
    for name in sorted(cfg.profiles):
        prof = cfg.profiles[name]
        console.console.print(
            f"[{name}] project_id={prof.get('project_id', '')} env={prof.get('env', '')} "
            f"api_key={_mask(prof.get('api_key', ''))} variant={prof.get('variant', '')}",
            markup=False,
        )


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help="Setting key (project_id, env, variant)."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k == "api_key":
        console.console.print(_mask(cfg.api_key))
        return
    if k in SETTING_KEYS:
        console.console.print(getattr(cfg, k))
        return
    console.err(f"Unknown setting: {key}")
    raise typer.Exit(code=2)


@app.command("set")
def set_setting(
        project_id: str | None = typer.Option(None, "--project", help="Set project id."),
        env: str | None = typer.Option(None, "--env", help="Set default environment."),
        api_key: str | None = typer.Option(None, "--api-key", help="Set API key."),
        variant: str | None = typer.Option(None, "--variant", help="Set service variant."),
        profile: str | None = typer.Option(None, "--profile", help="Write into this profile instead of the defaults."),
):
    cfg = load_config()
    values: dict[str, str] = {}
    if project_id is not None:
        values["project_id"] = project_id.strip()
    if env is not None:
        values["env"] = env.strip()
    if api_key is not None:
        values["api_key"] = api_key.strip()
    if variant is not None:
        values["variant"] = _checked_variant(variant)

    if profile:
        cfg.profiles.setdefault(profile, {}).update(values)
    else:
        for k, v in values.items():
            setattr(cfg, k, v)
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
