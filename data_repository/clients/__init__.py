"""Data client contracts."""

from .data_client import DataClient

__all__ = ["DataClient"]
