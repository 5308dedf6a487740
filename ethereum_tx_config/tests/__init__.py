"""Tests for the ethereum_tx_config package."""
