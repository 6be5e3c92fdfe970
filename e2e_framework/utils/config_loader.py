from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml


PROJECT_ROOT = Path(__file__).resolve().parents[2]

CONFIG_DIR_ENV = "E2E_CONFIG_DIR"


class ConfigStore:
    """Author: taobo.zhou
    中文：某个环境的键值配置。
    English: Flat key/value configuration of one named environment.
    """

    def __init__(self, environment: str, path: Path, data: dict):
        self.environment = environment
        self.path = path
        self._data = data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"ConfigStore(environment={self.environment!r}, path={str(self.path)!r})"


def resolve_config_dir(config_dir: str | Path | None = None) -> Path:
    """Author: taobo.zhou
    中文：确定配置目录，相对路径以项目根目录为基准。
    参数:
        config_dir: 显式目录；未传时读取 E2E_CONFIG_DIR，再退回 config/。
    """

    if config_dir is None:
        config_dir = os.environ.get(CONFIG_DIR_ENV) or "config"

    p = Path(config_dir)
    if not p.is_absolute():
        p = (PROJECT_ROOT / p).resolve()
    return p


def load_config(environment: str, config_dir: str | Path | None = None) -> ConfigStore:
    """Author: taobo.zhou
    中文：加载 <config_dir>/<environment>.yaml 并返回 ConfigStore。
    参数:
        environment: 环境名称，如 dev、qa。
        config_dir: 配置目录，支持相对路径。
    """

    p = resolve_config_dir(config_dir) / f"{environment}.yaml"
    if not p.exists():
        raise FileNotFoundError(f"Config file not found for environment '{environment}': {p}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict: {p}")

    return ConfigStore(environment, p, data)
