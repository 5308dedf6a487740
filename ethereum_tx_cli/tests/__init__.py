"""Tests for the ethereum_tx_cli package."""
