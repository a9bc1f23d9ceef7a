"""Configuration from a YAML file and environment variables.

Values are resolved in this order: environment variables (a `.env`
file in the working directory is loaded first), then the YAML file,
then the defaults below.  Example YAML::

    store_path: ~/.filterflow/batch.json
    export_dir: exports
    log_level: INFO
    request_timeout: 30
    headers:
      vtools:
        Authorization: Bearer abc
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml  # type: ignore
from dotenv import load_dotenv

from .errors import ConfigError
from .normalize.schema import Source

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".filterflow" / "batch.json"

_TOKEN_ENV = {
    Source.VTOOLS: "VTOOLS_TOKEN",
    Source.SOUK: "SOUK_TOKEN",
}


@dataclass
class Settings:
    store_path: Path = DEFAULT_STORE_PATH
    export_dir: str = "."
    log_level: str = "INFO"
    request_timeout: int = 30
    headers: Dict[Source, Dict[str, str]] = field(default_factory=dict)

    def headers_for(self, source: Optional[Source]) -> Dict[str, str]:
        if source is None:
            return {}
        return dict(self.headers.get(source, {}))


def _load_yaml(config_path: str) -> Dict[str, object]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {config_path} must be a mapping")
    return data


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Build `Settings` from the environment and an optional YAML file.

    Args:
        config_path: YAML file to read.  Falls back to the
            ``FILTERFLOW_CONFIG`` environment variable; no file is read
            when neither is set.

    Raises:
        ConfigError: If the file cannot be read or is not a mapping, or
            if a numeric setting is not a number.
    """
    load_dotenv()
    config_path = config_path or os.getenv("FILTERFLOW_CONFIG")
    cfg = _load_yaml(config_path) if config_path else {}

    settings = Settings()
    store_path = os.getenv("FILTERFLOW_STORE") or cfg.get("store_path")
    if store_path:
        settings.store_path = Path(str(store_path)).expanduser()
    settings.export_dir = str(os.getenv("FILTERFLOW_EXPORT_DIR") or cfg.get("export_dir") or settings.export_dir)
    settings.log_level = str(os.getenv("FILTERFLOW_LOG_LEVEL") or cfg.get("log_level") or settings.log_level).upper()
    timeout = os.getenv("FILTERFLOW_TIMEOUT") or cfg.get("request_timeout")
    if timeout is not None:
        try:
            settings.request_timeout = int(timeout)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"request_timeout must be an integer, got {timeout!r}") from exc

    raw_headers = cfg.get("headers") or {}
    if not isinstance(raw_headers, dict):
        raise ConfigError("headers must map source tags to header mappings")
    for tag, values in raw_headers.items():
        source = Source.from_tag(tag)
        if source is None or not isinstance(values, dict):
            logger.warning("Ignoring headers for unknown source %r", tag)
            continue
        settings.headers[source] = {str(k): str(v) for k, v in values.items()}
    for source, env_name in _TOKEN_ENV.items():
        token = os.getenv(env_name)
        if token:
            settings.headers.setdefault(source, {})["Authorization"] = f"Bearer {token}"
    return settings
