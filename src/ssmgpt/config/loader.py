"""Configuration loading from files and environment.

Supports:
- TOML config files
- Environment variables (SSMGPT_* prefix)
- .env files
"""

import os
import re
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from ssmgpt.config.schema import AppConfig
from ssmgpt.observability.logging import get_logger

logger = get_logger(__name__)

ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _substitute_env_vars(obj: Any) -> Any:
    """Recursively substitute environment variables in a data structure.

    Supports formats:
    - ${VAR_NAME}
    - ${VAR_NAME:-default}

    Unset variables without a default are left as-is.
    """
    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_substitute_env_vars(item) for item in obj]
    elif isinstance(obj, str):

        def replace_var(match: re.Match) -> str:
            var_expr = match.group(1)
            if ":-" in var_expr:
                var_name, default_value = var_expr.split(":-", 1)
                return os.getenv(var_name.strip(), default_value)

            var_name = var_expr.strip()
            value = os.getenv(var_name)
            if value is None:
                logger.warning(
                    "env_var_not_found",
                    var_name=var_name,
                    suggestion="Check that the environment variable is set",
                )
                return match.group(0)
            return value

        return ENV_VAR_PATTERN.sub(replace_var, obj)
    else:
        return obj


def load_config(
    config_path: Optional[Path] = None,
    env_file: Optional[Path] = None,
) -> AppConfig:
    """Load application configuration.

    Priority (highest to lowest):
    1. Config file
    2. Environment variables (SSMGPT_*)
    3. Defaults

    Args:
        config_path: Path to TOML config file
        env_file: Path to .env file

    Returns:
        Loaded and validated configuration
    """
    if env_file and env_file.exists():
        load_dotenv(env_file)
        logger.info("loaded_env_file", path=str(env_file))

    config_data: dict[str, Any] = {}
    if config_path and config_path.exists():
        with open(config_path, "rb") as f:
            config_data = tomllib.load(f)
        logger.info("loaded_config_file", path=str(config_path))
        config_data = _substitute_env_vars(config_data)

    config = AppConfig(**config_data)
    logger.info(
        "config_loaded",
        log_level=config.log_level.value,
        embedding_model=config.embedding.model_name,
        llm_model=config.llm.model_name,
        corpus_path=str(config.corpus.path),
        top_k=config.retrieval.top_k,
    )

    return config


def get_default_config_path() -> Path:
    """Get the default config file path.

    Searches in order:
    1. ./config.toml
    2. ~/.ssmgpt/config.toml
    3. /etc/ssmgpt/config.toml
    """
    search_paths = [
        Path.cwd() / "config.toml",
        Path.home() / ".ssmgpt" / "config.toml",
        Path("/etc/ssmgpt/config.toml"),
    ]

    for path in search_paths:
        if path.exists():
            return path

    return search_paths[0]


def get_default_env_file() -> Path:
    """The .env file in the working directory."""
    return Path.cwd() / ".env"
