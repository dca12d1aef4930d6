from __future__ import annotations

from abc import ABC, abstractmethod

from ...domain import CustodyState
from ...settings import MonitorSettings


class CustodyDecodeError(Exception):
    """Raised when a custody record is absent or cannot be decoded."""

    def __init__(self, address: str, message: str):
        super().__init__(f"{address}: {message}")
        self.address = address


class BaseCustodySource(ABC):
    """Abstract base class for pool/custody account sources."""

    def __init__(self, config: MonitorSettings):
        """Initialize the source with configuration.

        Args:
            config: Monitor configuration
        """
        self.config = config

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of this source."""
        ...

    @abstractmethod
    async def fetch_custody_addresses(self, pool_address: str) -> list[str]:
        """Return the pool's custody addresses in pool order."""
        ...

    @abstractmethod
    async def fetch_custody(self, address: str) -> CustodyState:
        """Fetch and decode one custody.

        Raises:
            CustodyDecodeError: If the record is missing or malformed
        """
        ...
