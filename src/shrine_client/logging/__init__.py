"""Shrine client logging — port and structlog adapter."""

from shrine_client.logging.port import LoggingPort
from shrine_client.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
