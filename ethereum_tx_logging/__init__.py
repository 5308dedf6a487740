"""Import the logging module content to make it available from ethereum_tx_logging."""

from .logging import (
    VERBOSE_LEVEL,
    ColorFormatter,
    LogLevel,
    TxLogger,
    UTCFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "VERBOSE_LEVEL",
    "ColorFormatter",
    "LogLevel",
    "TxLogger",
    "UTCFormatter",
    "configure_logging",
    "get_logger",
]
