import sys

if sys.version_info < (3, 12):
    print("scoped requires python 3.12+", file=sys.stderr)
    exit(1)


from . import libc
from .com import Interface, QueryingRefCountedOwner, RefCountedOwner, Slot
from .gdi import DeviceContextOwner, DeviceContextSelectionGuard, GraphicsObjectOwner
from .handle import INVALID_HANDLE_VALUE, HandleOwner, is_valid_handle
from .lock import LockGuard
from .memory import DuplicatingStringOwner, HeapObjectOwner, RawMemoryOwner, WideDuplicatingStringOwner
from .smart_ptr import NonCopyable, OwnershipError, smart_ptr
from .subsystem import HookedSubsystemInitGuard, SubsystemInitGuard, SubsystemState


__all__ = [
    "libc",

    "smart_ptr",
    "NonCopyable",
    "OwnershipError",

    "RawMemoryOwner",
    "HeapObjectOwner",
    "DuplicatingStringOwner",
    "WideDuplicatingStringOwner",
    "LockGuard",
    "HandleOwner",
    "INVALID_HANDLE_VALUE",
    "is_valid_handle",
    "Interface",
    "Slot",
    "RefCountedOwner",
    "QueryingRefCountedOwner",
    "GraphicsObjectOwner",
    "DeviceContextOwner",
    "DeviceContextSelectionGuard",
    "SubsystemState",
    "SubsystemInitGuard",
    "HookedSubsystemInitGuard",
]
