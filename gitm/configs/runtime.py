"""
gitm Runtime Configuration

Runtime defaults and configuration merging logic.
Combines defaults, YAML config, and environment variables.
"""

import os

from gitm.configs.constants import DEFAULT_B, DEFAULT_K1, DEFAULT_MAX_RESULTS
from gitm.configs.yaml_config import load_yaml_config

# --- Default Runtime Configuration ---

DEFAULT_CONFIG = {
    "max_results": DEFAULT_MAX_RESULTS,
    "k1": DEFAULT_K1,
    "b": DEFAULT_B,
    "include_patches": False,
    "classify": True,
    "issue_limit": 100,
    "model": "gpt-4-0613",
    "openai_base_url": "https://api.openai.com/v1",
    "api_key": None,
}


def get_full_config() -> dict:
    """
    Get full configuration merged from defaults, YAML, and environment.

    Priority (highest wins):
    1. Environment variables
    2. YAML config file
    3. DEFAULT_CONFIG

    Returns:
        Merged configuration dictionary
    """
    config = dict(DEFAULT_CONFIG)

    yaml_config = load_yaml_config()

    for key, value in (yaml_config.get("search") or {}).items():
        if key in config:
            config[key] = value

    openai_config = (yaml_config.get("llm") or {}).get("openai") or {}
    if openai_config.get("model"):
        config["model"] = openai_config["model"]
    if openai_config.get("base_url"):
        config["openai_base_url"] = openai_config["base_url"]

    # Environment overrides
    if os.environ.get("GITM_MAX_RESULTS"):
        try:
            config["max_results"] = int(os.environ["GITM_MAX_RESULTS"])
        except ValueError:
            pass

    if os.environ.get("GITM_MODEL"):
        config["model"] = os.environ["GITM_MODEL"]

    if os.environ.get("OPENAI_API_KEY"):
        config["api_key"] = os.environ["OPENAI_API_KEY"]

    return config
