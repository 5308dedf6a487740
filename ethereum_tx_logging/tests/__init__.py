"""Tests for the ethereum_tx_logging package."""
