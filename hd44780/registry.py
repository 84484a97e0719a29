# hd44780/registry.py
# Fixed-size table of live displays, indexed by small integer handles.
# Bound displays are held weakly: a display nobody references frees its slot.

import weakref

from . import config as cfg
from .errors import HandleTableFullError
from .log import get_logger

_log = get_logger("Registry")


def _resolve(slot):
    if isinstance(slot, weakref.ref):
        return slot()
    return slot


class HandleRegistry:
    def __init__(self, capacity=cfg.MAX_LCDS):
        self.capacity = capacity
        self._slots = [None] * capacity

    def _live(self, handle):
        if not 0 <= handle < self.capacity:
            return None
        return _resolve(self._slots[handle])

    def acquire(self, obj):
        """Reserve the lowest free slot for ``obj`` and return its index."""
        for handle in range(self.capacity):
            if self._live(handle) is None:
                self._slots[handle] = obj
                _log(f"Handle {handle} allocated.", level="DEBUG")
                return handle
        raise HandleTableFullError(f"All {self.capacity} LCD handles are in use")

    def bind(self, handle, obj):
        """Hold ``obj`` weakly in a reserved slot."""
        if self._live(handle) is None:
            raise KeyError(handle)
        self._slots[handle] = weakref.ref(obj)

    def release(self, handle):
        if 0 <= handle < self.capacity and self._slots[handle] is not None:
            self._slots[handle] = None
            _log(f"Handle {handle} released.", level="DEBUG")

    def get(self, handle):
        obj = self._live(handle)
        if obj is None:
            raise KeyError(handle)
        return obj

    def clear(self):
        self._slots = [None] * self.capacity

    def __len__(self):
        return sum(1 for handle in range(self.capacity) if self._live(handle) is not None)

    def __contains__(self, handle):
        return self._live(handle) is not None


# Process-wide table used by lcd_new()
registry = HandleRegistry()
