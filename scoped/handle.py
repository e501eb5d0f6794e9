from ctypes import c_void_p

from .smart_ptr import smart_ptr


INVALID_HANDLE_VALUE = c_void_p(-1).value

def _handle_value(handle) -> int | None:
    if isinstance(handle, c_void_p):
        return handle.value
    return handle

def is_valid_handle(handle) -> bool:
    '''False for null handles and for the `INVALID_HANDLE_VALUE` sentinel'''
    value = _handle_value(handle)
    return value is not None and value != 0 and value != INVALID_HANDLE_VALUE


class HandleOwner[T](smart_ptr[T]):
    '''
    Owns an OS handle. Both null and `INVALID_HANDLE_VALUE` count as empty, so
    the close primitive is never called with either.
    '''
    @staticmethod
    def _is_empty(value) -> bool:
        return not is_valid_handle(value)

    def is_valid(self) -> bool:
        return bool(self)
