from ctypes import byref, c_size_t

from ..com import QueryingRefCountedOwner, RefCountedOwner
from ..gdi import DeviceContextOwner, DeviceContextSelectionGuard, GraphicsObjectOwner
from ..handle import HandleOwner
from ..lock import LockGuard
from ..smart_ptr import NonCopyable
from ..subsystem import HookedSubsystemInitGuard, SubsystemInitGuard
from . import winapi
from .winapi import HANDLE, HBITMAP, HBRUSH, HDC, HFONT, HGDIOBJ, HPEN, GUID, IUnknown


__all__ = [
    "winapi",
    "GUID",
    "IUnknown",
    "HANDLE",
    "HDC",
    "HGDIOBJ",
    "HFONT",
    "HPEN",
    "HBRUSH",
    "HBITMAP",

    "OwnedHandle",
    "CriticalSection",
    "CriticalSectionGuard",
    "ComPtr",
    "ComQueryPtr",
    "GdiObject",
    "Font",
    "Pen",
    "Brush",
    "Bitmap",
    "DeviceContext",
    "DeviceContextSelection",
    "ComInit",
    "OleInit",
    "GdiPlusInit",
]


class OwnedHandle(HandleOwner[HANDLE]):
    _deleter = staticmethod(winapi.CloseHandle)


class CriticalSection(NonCopyable):
    '''A Win32 critical section exposing the `acquire()`/`release()` lock shape'''
    def __init__(self):
        self.__cs = winapi.CRITICAL_SECTION()
        winapi.InitializeCriticalSection(byref(self.__cs))
        self.__initialized = True

    def __del__(self):
        if getattr(self, "_CriticalSection__initialized", False):
            self.__initialized = False
            winapi.DeleteCriticalSection(byref(self.__cs))

    def acquire(self) -> None:
        winapi.EnterCriticalSection(byref(self.__cs))

    def release(self) -> None:
        winapi.LeaveCriticalSection(byref(self.__cs))


class CriticalSectionGuard(LockGuard):
    '''Holds a `CriticalSection` for the guard's scope'''
    def __init__(self, cs: CriticalSection):
        super().__init__(cs)


class ComPtr[T: IUnknown](RefCountedOwner[T]):
    _kind = IUnknown
    _instantiate = staticmethod(winapi.create_instance)


class ComQueryPtr[T: IUnknown](QueryingRefCountedOwner[T]):
    _kind = IUnknown
    _instantiate = staticmethod(winapi.create_instance)


class GdiObject[T: HGDIOBJ](GraphicsObjectOwner[T]):
    _deleter = staticmethod(winapi.DeleteObject)

Font = GdiObject[HFONT]
Pen = GdiObject[HPEN]
Brush = GdiObject[HBRUSH]
Bitmap = GdiObject[HBITMAP]


class DeviceContext(DeviceContextOwner[HDC]):
    _deleter = staticmethod(winapi.DeleteDC)


class DeviceContextSelection(DeviceContextSelectionGuard[HDC, HGDIOBJ]):
    _select = staticmethod(winapi.SelectObject)


class ComInit(SubsystemInitGuard):
    _name = "COM"

    @staticmethod
    def _startup() -> int:
        return winapi.CoInitialize(None)

    @staticmethod
    def _shutdown(status: int) -> None:
        winapi.CoUninitialize()


class OleInit(SubsystemInitGuard):
    _name = "OLE"

    @staticmethod
    def _startup() -> int:
        return winapi.OleInitialize(None)

    @staticmethod
    def _shutdown(status: int) -> None:
        winapi.OleUninitialize()


class GdiPlusInit(HookedSubsystemInitGuard):
    '''
    GDI+ runtime. Pass `suppress_background_thread=True` when starting up from
    the very beginning of the process: the GDI+ background thread otherwise
    lets DDE messages through too early, which causes spurious timeouts.
    '''
    _name = "GDI+"

    @staticmethod
    def _startup(suppress_background_thread: bool) -> tuple[int, winapi.GdiplusStartupOutput]:
        token = c_size_t(0)
        si = winapi.GdiplusStartupInput(1, None, int(suppress_background_thread), 0)
        so = winapi.GdiplusStartupOutput()
        winapi.GdiplusStartup(byref(token), byref(si), byref(so))
        return token.value, so

    @staticmethod
    def _shutdown(token: int) -> None:
        winapi.GdiplusShutdown(token)
