"""Repository layer for data client abstractions."""

from .data_repository import DataRepository

__all__ = ["DataRepository"]
