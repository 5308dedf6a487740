"""Tests for the ethereum_tx_types package."""
