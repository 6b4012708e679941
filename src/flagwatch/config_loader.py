# src/flagwatch/config_loader.py
import importlib.util
import json
import os
import tomllib
from dataclasses import replace
from types import ModuleType

import yaml

from .errors import ConfigurationError
from .models import FlagwatchConfig

# Looked up in this order when no --config is given; package manifests come last.
CONFIG_FILENAMES = [
    "flagwatch.config.json",
    "flagwatch.config.yml",
    "flagwatch.config.yaml",
    ".flagwatch.yml",
    "flagwatch.config.py",
]

LIST_KEYS = {
    "include": "include",
    "exclude": "exclude",
    "flag_patterns": "flag_patterns",
    "flagPatterns": "flag_patterns",
    "env_var_prefixes": "env_var_prefixes",
    "envVarPrefixes": "env_var_prefixes",
}


def _read_json(path):
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Failed to read configuration file: {path} ({exc})", path) from exc


def _read_yaml(path):
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to read configuration file: {path} ({exc})", path) from exc


def _load_file_module(path: str) -> ModuleType:
    name = f"flagwatch_config_{abs(hash(path))}"
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load config module {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _read_python(path):
    """Script config: the module exposes CONFIG (a mapping) or config() returning one."""
    try:
        module = _load_file_module(os.path.abspath(path))
        if callable(getattr(module, "config", None)):
            return module.config()
        if hasattr(module, "CONFIG"):
            return module.CONFIG
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load Python configuration file: {path} ({exc})", path
        ) from exc
    raise ConfigurationError(f"Python configuration file defines neither CONFIG nor config(): {path}", path)


READERS = {
    ".json": _read_json,
    ".yml": _read_yaml,
    ".yaml": _read_yaml,
    ".py": _read_python,
}


def _read_config_file(path):
    ext = os.path.splitext(path)[1].lower()
    reader = READERS.get(ext)
    if reader is None:
        raise ConfigurationError(f"Unsupported configuration file format: {ext or path}", path)
    return reader(path)


def _read_package_manifests(search_dir):
    """Fallback: "flagwatch" key of package.json, then [tool.flagwatch] of pyproject.toml."""
    package_json = os.path.join(search_dir, "package.json")
    if os.path.exists(package_json):
        data = _read_json(package_json)
        if isinstance(data, dict) and data.get("flagwatch"):
            return data["flagwatch"], package_json

    pyproject = os.path.join(search_dir, "pyproject.toml")
    if os.path.exists(pyproject):
        try:
            with open(pyproject, "rb") as fh:
                data = tomllib.load(fh)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Failed to read configuration file: {pyproject} ({exc})", pyproject) from exc
        section = data.get("tool", {}).get("flagwatch")
        if section:
            return section, pyproject

    return None, None


def validate_config(raw, config_path=None) -> FlagwatchConfig:
    """
    Overlay a raw mapping on the defaults. Unknown keys are ignored, non-string
    list items are dropped and a non-boolean `strict` is ignored.
    """
    if not isinstance(raw, dict):
        raise ConfigurationError("Configuration must be an object", config_path)

    updates = {}
    for key, field_name in LIST_KEYS.items():
        value = raw.get(key)
        if isinstance(value, list):
            updates[field_name] = tuple(item for item in value if isinstance(item, str))

    if isinstance(raw.get("strict"), bool):
        updates["strict"] = raw["strict"]

    return replace(FlagwatchConfig(), **updates)


def load_config(config_path=None, cli_excludes=(), search_dir=None, strict=None) -> FlagwatchConfig:
    """
    Resolve the configuration for a run.

    An explicit `config_path` must exist; otherwise the first file of
    CONFIG_FILENAMES found in `search_dir` (default: cwd) is used, then the
    package manifests, then the defaults. `cli_excludes` are appended to
    `exclude` and `strict=True` forces strict mode.
    """
    search_dir = search_dir or os.getcwd()
    raw, source = None, None

    if config_path:
        full_path = config_path if os.path.isabs(config_path) else os.path.join(search_dir, config_path)
        if not os.path.exists(full_path):
            raise ConfigurationError(f"Configuration file not found: {full_path}", full_path)
        raw, source = _read_config_file(full_path), full_path
    else:
        for name in CONFIG_FILENAMES:
            candidate = os.path.join(search_dir, name)
            if os.path.exists(candidate):
                raw, source = _read_config_file(candidate), candidate
                break
        else:
            raw, source = _read_package_manifests(search_dir)

    cfg = validate_config(raw, source) if raw is not None else FlagwatchConfig()

    if cli_excludes:
        cfg = replace(cfg, exclude=tuple(dict.fromkeys(cfg.exclude + tuple(cli_excludes))))
    if strict:
        cfg = replace(cfg, strict=True)
    return cfg
