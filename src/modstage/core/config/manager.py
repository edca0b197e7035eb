"""
modstage configuration management (YAML-only).
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple
import os
import json
import re
import logging

import jsonschema
import yaml

from modstage.core.exceptions import ConfigError
from modstage.core.utils.merge import deep_merge as _deep_merge
from modstage.data import get_data_path, read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "MODSTAGE_"
PROJECT_CONFIG_DIRNAME = ".modstage"


class ConfigManager:
    """Load, merge, and validate modstage configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: MODSTAGE_<SECTION>__<KEY>
    2. Project config: <repo_root>/.modstage/config/*.yaml (alphabetical order)
    3. Bundled defaults: modstage.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIRNAME / "config"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            # Fail closed: configuration must never silently ignore invalid YAML.
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Top-level YAML in {path} must be a mapping",
                context={"path": str(path)},
            )
        return data

    def _yaml_files(self, directory: Path) -> List[Path]:
        if not directory.is_dir():
            return []
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix in {".yaml", ".yml"}
        )

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in self._yaml_files(directory):
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ---------- environment overrides ----------

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return s
        return s

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX) :]
            segs = [seg.lower() for seg in raw.split("__")]
            if len(segs) < 2 or any(seg == "" for seg in segs):
                logger.warning("Ignoring malformed override %s (expected %s<SECTION>__<KEY>)", key, ENV_PREFIX)
                continue
            yield segs, self._coerce_type(os.environ[key])

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path, value in self._iter_env_overrides():
            cur = cfg
            for part in path[:-1]:
                nxt = cur.get(part)
                if not isinstance(nxt, dict):
                    nxt = {}
                    cur[part] = nxt
                cur = nxt
            cur[path[-1]] = value
        return cfg

    # ---------- validation ----------

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_data_yaml("schemas", "config.schema.yaml")
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
        if errors:
            first = errors[0]
            where = ".".join(str(p) for p in first.path) or "<root>"
            raise ConfigError(
                f"Configuration invalid at {where}: {first.message}",
                context={"path": where, "errors": len(errors)},
            )

    # ---------- loading ----------

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        cfg = self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration for ``repo_root``.

        Args:
            validate: Validate the merged result against the bundled schema.

        Raises:
            ConfigError: If a YAML file is invalid or validation fails.
        """
        return self._load_config_uncached(validate=validate)


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_DIRNAME"]
