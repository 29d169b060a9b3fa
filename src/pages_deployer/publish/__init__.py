"""Publish stage."""

from .publisher import PUBLISH_COMMAND, Publisher
from .site_check import SiteChecker

__all__ = ["PUBLISH_COMMAND", "Publisher", "SiteChecker"]
