"""
gitm YAML Configuration

Loading, saving, and defaults for ~/.gitm/config.yaml.
"""

from pathlib import Path

import yaml

from gitm.configs.paths import ensure_data_dir, get_data_path

# --- Default Config Template ---

DEFAULT_CONFIG_YAML = """\
# gitm Configuration
# Edit this file to customize gitm behavior.

# Search Settings
search:
  # Number of results per list (commits, issues)
  max_results: 5

  # BM25 parameters: k1 (term-frequency saturation), b (length normalization)
  k1: 1.2
  b: 0.75

  # Also rank the added lines of each commit's patch
  include_patches: false

  # Extract author/date filters from the query with the LLM
  classify: true

  # Maximum number of issues requested from gh
  issue_limit: 100

# LLM Provider Configuration
llm:
  openai:
    model: "gpt-4-0613"
    base_url: "https://api.openai.com/v1"
    # API key read from OPENAI_API_KEY env var or --api-key
"""


def get_config_path() -> Path:
    """Get the path to config.yaml."""
    return get_data_path() / "config.yaml"


def load_yaml_config() -> dict:
    """
    Load configuration from ~/.gitm/config.yaml.

    Returns:
        Configuration dictionary (empty if file doesn't exist)

    Raises:
        yaml.YAMLError: If the file exists but is not valid YAML
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    content = config_path.read_text()
    return yaml.safe_load(content) or {}


def save_yaml_config(config: dict) -> bool:
    """
    Save configuration to ~/.gitm/config.yaml.

    Args:
        config: Configuration dictionary to save

    Returns:
        True if successful
    """
    config_path = get_config_path()
    ensure_data_dir()

    content = yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
    config_path.write_text(content)
    return True


def create_default_config() -> bool:
    """
    Create default config.yaml if it doesn't exist.

    Returns:
        True if file was created, False if it already exists
    """
    config_path = get_config_path()
    if config_path.exists():
        return False

    ensure_data_dir()
    config_path.write_text(DEFAULT_CONFIG_YAML)
    return True
