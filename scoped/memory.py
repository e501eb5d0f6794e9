from collections.abc import Callable
from ctypes import c_char_p, c_void_p, c_wchar_p, cast, string_at, wstring_at
from typing import Any, Self

from . import libc
from .smart_ptr import smart_ptr


__all__ = [
    "RawMemoryOwner",
    "HeapObjectOwner",
    "DuplicatingStringOwner",
    "WideDuplicatingStringOwner",
]


class RawMemoryOwner[T: c_void_p](smart_ptr[T]):
    '''Owns a buffer obtained from the C allocator, freed with `free()`'''
    _deleter = staticmethod(libc.free)

    @classmethod
    def allocate(cls, size: int) -> Self:
        '''Allocate `size` bytes; allocation failure yields an empty owner'''
        return cls(libc.malloc(size))


def _close(obj: Any) -> None:
    obj.close()


class HeapObjectOwner[T](smart_ptr[T]):
    '''Owns a single object and destroys it (by default with its `close()` method)'''
    _deleter = staticmethod(_close)

    @staticmethod
    def _is_empty(value) -> bool:
        return value is None


class _StringOwner[T: c_void_p](RawMemoryOwner[T]):
    _duplicate: Callable[[Any], T] = NotImplemented
    _read: Callable[[T], Any] = NotImplemented
    _text_type: type = NotImplemented

    def assign_copy(self, text) -> None:
        '''
        Replace the held buffer with an owned copy of `text`, which is only borrowed.
        An empty `text` leaves the owner empty. Raw pointers, including the
        ones held by owners of this kind, are read as strings.
        '''
        if isinstance(text, c_void_p):
            text = cast(text, self._text_type)
        copy = self._duplicate(text) if text else None
        self.reset(copy)

    @property
    def text(self):
        ptr = self.get()
        if ptr is None:
            return None
        return self._read(ptr)


class DuplicatingStringOwner(_StringOwner[libc.char_p]):
    '''Owns a NUL-terminated `char` string; `text` returns `bytes`'''
    _duplicate = staticmethod(libc.strdup)
    _read = staticmethod(string_at)
    _text_type = c_char_p

    @classmethod
    def copy_of(cls, text: bytes | c_char_p | c_void_p | None) -> Self:
        owner = cls()
        owner.assign_copy(text)
        return owner


class WideDuplicatingStringOwner(_StringOwner[libc.wchar_p]):
    '''Owns a NUL-terminated `wchar_t` string; `text` returns `str`'''
    _duplicate = staticmethod(libc.wcsdup)
    _read = staticmethod(wstring_at)
    _text_type = c_wchar_p

    @classmethod
    def copy_of(cls, text: str | c_wchar_p | c_void_p | None) -> Self:
        owner = cls()
        owner.assign_copy(text)
        return owner
