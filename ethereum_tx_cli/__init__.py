"""Command line interface for the transaction tools."""

from .main import ethtx

__all__ = ["ethtx"]
