from collections.abc import Callable
from typing import Any, Self

from .smart_ptr import NonCopyable, smart_ptr


class GraphicsObjectOwner[T](smart_ptr[T]):
    '''Owns a drawing object handle (font, pen, brush, bitmap...)'''
    pass


class DeviceContextOwner[T](smart_ptr[T]):
    '''Owns a device context handle'''
    pass


class DeviceContextSelectionGuard[DC, OBJ](NonCopyable):
    '''
    Selects `obj` into `hdc` and puts the previously selected object back when
    the guard is closed. Nested guards on one context restore in reverse order.
    '''
    _select: Callable[[DC, OBJ], OBJ] | None = None

    def __init__(self, hdc: DC, obj: OBJ, select: Callable[[DC, OBJ], Any] | None = None):
        self.__hdc = None
        if select is None:
            select = type(self)._select
        if select is None:
            raise TypeError(f"{type(self).__name__} requires a select function")
        self.__select = select
        self.__previous = select(hdc, obj)
        self.__hdc = hdc

    def __del__(self):
        self.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def previous(self) -> OBJ:
        return self.__previous

    def close(self) -> None:
        hdc, self.__hdc = self.__hdc, None
        if hdc is not None:
            self.__select(hdc, self.__previous)
