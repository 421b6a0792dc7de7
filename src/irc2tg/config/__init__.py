"""Configuration: YAML + env overlay."""

from irc2tg.config.loader import load_config, load_config_with_env
from irc2tg.config.schema import Config

__all__ = ["Config", "load_config", "load_config_with_env"]
