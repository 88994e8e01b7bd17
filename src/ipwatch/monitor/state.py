"""Last known external IP, guarded by a lock."""

import threading
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AddressChange:
    """Result of recording an address that differs from the cached one.

    Attributes:
        previous: Cached address before the change, None on first observation.
        current: Newly cached address.
    """

    previous: Optional[str]
    current: str

    @property
    def is_first(self) -> bool:
        """Whether this is the first address ever observed."""
        return self.previous is None


class AddressState:
    """Thread-safe cell holding the last known external IP.

    An empty string means no address has been observed yet.

    Thread-safety: All reads and writes are protected by a lock.
    """

    def __init__(self):
        self._address = ""
        self._lock = threading.Lock()

    @property
    def address(self) -> str:
        """Last known address, empty if never observed."""
        with self._lock:
            return self._address

    def record(self, address: str) -> Optional[AddressChange]:
        """Compare against the cached address and update it on change.

        Empty addresses are ignored.

        Args:
            address: Address returned by a successful lookup.

        Returns:
            AddressChange if the cache was updated, None otherwise.
        """
        if not address:
            return None

        with self._lock:
            previous = self._address
            if address == previous:
                return None
            self._address = address

        return AddressChange(previous=previous or None, current=address)
