"""
Abstract interface for the durable key-value store backing the form.
"""

from abc import ABC, abstractmethod


class StoragePort(ABC):
    """Port for reading and writing named string slots that survive restarts."""

    @abstractmethod
    async def load(self, key: str) -> str | None:
        """
        Return the value stored under `key`, or None if the slot is empty.

        Args:
            key: Slot name (e.g., 'resume', 'jobs')
        """
        ...

    @abstractmethod
    async def save(self, key: str, value: str) -> None:
        """
        Overwrite the slot `key` with `value`.

        Args:
            key: Slot name (e.g., 'resume', 'jobs')
            value: Raw string to store
        """
        ...
