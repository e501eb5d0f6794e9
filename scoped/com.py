from collections.abc import Callable, Generator
from contextlib import contextmanager
from ctypes import c_void_p
from typing import Any, Protocol

from .smart_ptr import OwnershipError, smart_ptr


__all__ = [
    "Interface",
    "Slot",
    "RefCountedOwner",
    "QueryingRefCountedOwner",
]


class Interface(Protocol):
    '''Reference-counted interface pointer, in the shape of COM's IUnknown'''
    def AddRef(self) -> int: ...
    def Release(self) -> int: ...
    def QueryInterface(self, kind: Any) -> "Interface | None": ...


Instantiate = Callable[[Any, Any], Any]


class Slot[T]:
    '''Out-parameter box for acquisition functions that do not work on ctypes pointers'''
    def __init__(self):
        self.value: T | None = None

    def __bool__(self):
        return bool(self.value)


def _release(ptr: Interface) -> None:
    ptr.Release()


class RefCountedOwner[T: Interface](smart_ptr[T]):
    '''
    Owns exactly one reference to an interface pointer and calls `Release()`
    on it once. `kind` is the interface type used by `create()` and
    `out_slot()`; `instantiate(clsid, kind)` creates an instance or returns
    None.
    '''
    _deleter = staticmethod(_release)
    _instantiate: Instantiate | None = None
    _kind: Any = None

    def __init__(self,
                 value: T | None = None,
                 kind: Any = None,
                 instantiate: Instantiate | None = None):
        super().__init__(value)
        self._kind = kind if kind is not None else type(self)._kind
        self.__instantiate = instantiate if instantiate is not None else type(self)._instantiate

    def create(self, clsid, kind: Any = None) -> bool:
        if self:
            raise OwnershipError("create() called on an occupied owner")
        if self.__instantiate is None:
            raise TypeError(f"{type(self).__name__} has no instantiate function")
        ptr = self.__instantiate(clsid, kind if kind is not None else self._kind)
        if not ptr:
            return False
        self.reset(ptr)
        return True

    @contextmanager
    def out_slot(self) -> Generator[Any, None, None]:
        '''
        Yield a slot to pass to a function returning a new reference through an
        out-parameter (e.g. `byref(slot)`), then take ownership of what it was
        filled with. The slot must not be used after the `with` block.
        '''
        if self:
            raise OwnershipError("out_slot() called on an occupied owner")
        kind = self._kind
        if isinstance(kind, type) and issubclass(kind, c_void_p):
            slot = kind()
            yield slot
            if slot:
                self.reset(slot)
        else:
            slot = Slot()
            yield slot
            if slot:
                self.reset(slot.value)


class QueryingRefCountedOwner[T: Interface](RefCountedOwner[T]):
    '''
    Owns the result of querying `source` for `kind`. A source that does not
    support `kind` leaves the owner empty. The source's own reference is never
    released by this owner.
    '''
    def __init__(self,
                 kind: Any = None,
                 source: Interface | None = None,
                 instantiate: Instantiate | None = None):
        super().__init__(None, kind, instantiate)
        if source is not None:
            self.assign_query(source)

    def assign_query(self, source: Interface) -> T | None:
        self.reset(None)
        ptr = source.QueryInterface(self._kind)
        if ptr:
            self.reset(ptr)
        return self.get()
