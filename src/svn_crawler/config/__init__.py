"""Configuration for svn-crawler."""

from svn_crawler.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
