"""Configuration loading for Rainbridge."""

from .pydantic_config import ConfigurationManager, RainbridgeConfig

__all__ = ["ConfigurationManager", "RainbridgeConfig"]
