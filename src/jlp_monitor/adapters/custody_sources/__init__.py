from __future__ import annotations

from .base import BaseCustodySource, CustodyDecodeError
from .snapshot import SnapshotCustodySource

__all__ = ["BaseCustodySource", "CustodyDecodeError", "SnapshotCustodySource"]
