from collections.abc import Callable
from typing import Any, Self


class OwnershipError(AssertionError):
    '''Precondition violation at the call site, e.g. acquiring into an occupied owner'''


class NonCopyable:
    def __copy__(self):
        raise TypeError(f"{type(self).__name__} is not copyable")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} is not copyable")

    def __reduce_ex__(self, protocol):
        raise TypeError(f"{type(self).__name__} cannot be pickled")


class smart_ptr[T](NonCopyable):
    _deleter: Callable[[T], Any] | None = None

    def __init__(self, value: T | None = None, deleter: Callable[[T], Any] | None = None):
        self.__value = None
        if deleter is None:
            deleter = type(self)._deleter
        if deleter is None:
            raise TypeError(f"{type(self).__name__} requires a deleter")
        self.__deleter = deleter
        self.__value = value

    def __bool__(self):
        return not self._is_empty(self.__value)

    def __del__(self):
        # __init__ may have raised before the deleter was set
        if hasattr(self, "_smart_ptr__deleter"):
            self.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self):
        return f"<{type(self).__name__} {self.__value!r}>"

    @staticmethod
    def _is_empty(value: T | None) -> bool:
        return not value

    @property
    def value(self) -> T:
        if self._is_empty(self.__value):
            raise RuntimeError("null ptr dereference")
        return self.__value

    def get(self) -> T | None:
        if self._is_empty(self.__value):
            return None
        return self.__value

    def reset(self, value: T | None = None) -> None:
        old, self.__value = self.__value, None
        try:
            if not self._is_empty(old):
                self.__deleter(old)
        finally:
            self.__value = value

    def steal(self) -> T | None:
        value, self.__value = self.__value, None
        if self._is_empty(value):
            return None
        return value

    def close(self) -> None:
        self.reset(None)
