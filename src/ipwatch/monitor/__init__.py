"""IP watching module for ipwatch.

Polls the lookup endpoint on a fixed interval and logs the external IP
on first observation and whenever it changes.
"""

from .state import AddressChange, AddressState
from .watcher import IpWatcher

__all__ = ["AddressChange", "AddressState", "IpWatcher"]
