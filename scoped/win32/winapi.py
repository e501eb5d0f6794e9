import sys

if sys.platform != "win32":
    raise ImportError("scoped.win32 is only available on Windows")

import uuid
from ctypes import *


kernel32 = WinDLL("kernel32", use_last_error=True)
gdi32 = WinDLL("gdi32", use_last_error=True)
ole32 = WinDLL("ole32")
gdiplus = WinDLL("gdiplus")

def _import(lib: WinDLL, symbol: str, restype: type | None, *argtypes: type):
    f = lib[symbol]
    f.argtypes = argtypes
    f.restype = restype
    return f

HRESULT = c_long

def SUCCEEDED(hr: int) -> bool:
    return hr >= 0

# Handles

class HANDLE(c_void_p): pass
class HDC(c_void_p): pass
class HGDIOBJ(c_void_p): pass
class HFONT(HGDIOBJ): pass
class HPEN(HGDIOBJ): pass
class HBRUSH(HGDIOBJ): pass
class HBITMAP(HGDIOBJ): pass

CloseHandle = _import(kernel32, "CloseHandle", c_int, c_void_p)

# Critical sections

class CRITICAL_SECTION(Structure):
    _fields_ = [
        ("DebugInfo", c_void_p),
        ("LockCount", c_long),
        ("RecursionCount", c_long),
        ("OwningThread", c_void_p),
        ("LockSemaphore", c_void_p),
        ("SpinCount", c_size_t),
    ]

InitializeCriticalSection = _import(kernel32, "InitializeCriticalSection", None, POINTER(CRITICAL_SECTION))
DeleteCriticalSection = _import(kernel32, "DeleteCriticalSection", None, POINTER(CRITICAL_SECTION))
EnterCriticalSection = _import(kernel32, "EnterCriticalSection", None, POINTER(CRITICAL_SECTION))
LeaveCriticalSection = _import(kernel32, "LeaveCriticalSection", None, POINTER(CRITICAL_SECTION))

# GDI

PS_SOLID = 0

DeleteObject = _import(gdi32, "DeleteObject", c_int, c_void_p)
DeleteDC = _import(gdi32, "DeleteDC", c_int, c_void_p)
SelectObject = _import(gdi32, "SelectObject", HGDIOBJ, c_void_p, c_void_p)
GetCurrentObject = _import(gdi32, "GetCurrentObject", HGDIOBJ, c_void_p, c_uint)
CreateCompatibleDC = _import(gdi32, "CreateCompatibleDC", HDC, c_void_p)
CreateSolidBrush = _import(gdi32, "CreateSolidBrush", HBRUSH, c_ulong)
CreatePen = _import(gdi32, "CreatePen", HPEN, c_int, c_int, c_ulong)

OBJ_PEN = 1
OBJ_BRUSH = 2

# COM

class GUID(Structure):
    _fields_ = [
        ("Data1", c_ulong),
        ("Data2", c_ushort),
        ("Data3", c_ushort),
        ("Data4", c_ubyte * 8),
    ]

    def __init__(self, value: str | None = None):
        super().__init__()
        if value is not None:
            memmove(byref(self), uuid.UUID(value).bytes_le, sizeof(self))

    def __eq__(self, other):
        return isinstance(other, GUID) and bytes(self) == bytes(other)

    def __hash__(self):
        return hash(bytes(self))

    def __str__(self):
        return "{" + str(uuid.UUID(bytes_le=bytes(self))).upper() + "}"

CLSCTX_INPROC_SERVER = 0x1
CLSCTX_INPROC_HANDLER = 0x2
CLSCTX_LOCAL_SERVER = 0x4
CLSCTX_REMOTE_SERVER = 0x10
CLSCTX_ALL = CLSCTX_INPROC_SERVER | CLSCTX_INPROC_HANDLER | CLSCTX_LOCAL_SERVER | CLSCTX_REMOTE_SERVER

_QueryInterface = WINFUNCTYPE(HRESULT, c_void_p, POINTER(GUID), c_void_p)
_AddRef = WINFUNCTYPE(c_ulong, c_void_p)
_Release = WINFUNCTYPE(c_ulong, c_void_p)

class IUnknown(c_void_p):
    '''Interface pointer; subclasses set `_iid_` to their interface ID'''
    _iid_ = GUID("00000000-0000-0000-C000-000000000046")

    def __method(self, index: int, prototype):
        if not self:
            raise RuntimeError("null ptr dereference")
        vtbl = cast(self, POINTER(POINTER(c_void_p))).contents
        return prototype(vtbl[index])

    def QueryInterface[T: IUnknown](self, kind: type[T]) -> T | None:
        out = kind()
        hr = self.__method(0, _QueryInterface)(self, byref(kind._iid_), byref(out))
        if not SUCCEEDED(hr) or not out:
            return None
        return out

    def AddRef(self) -> int:
        return self.__method(1, _AddRef)(self)

    def Release(self) -> int:
        return self.__method(2, _Release)(self)

CoInitialize = _import(ole32, "CoInitialize", HRESULT, c_void_p)
CoUninitialize = _import(ole32, "CoUninitialize", None)
OleInitialize = _import(ole32, "OleInitialize", HRESULT, c_void_p)
OleUninitialize = _import(ole32, "OleUninitialize", None)
CoCreateInstance = _import(ole32, "CoCreateInstance", HRESULT, POINTER(GUID), c_void_p, c_ulong, POINTER(GUID), c_void_p)

def create_instance[T: IUnknown](clsid: GUID | str, kind: type[T] | None) -> T | None:
    if kind is None:
        kind = IUnknown
    if isinstance(clsid, str):
        clsid = GUID(clsid)
    out = kind()
    hr = CoCreateInstance(byref(clsid), None, CLSCTX_ALL, byref(kind._iid_), byref(out))
    if not SUCCEEDED(hr) or not out:
        return None
    return out

# GDI+

class GdiplusStartupInput(Structure):
    _fields_ = [
        ("GdiplusVersion", c_uint32),
        ("DebugEventCallback", c_void_p),
        ("SuppressBackgroundThread", c_int),
        ("SuppressExternalCodecs", c_int),
    ]

NotificationHookProc = WINFUNCTYPE(c_int, POINTER(c_size_t))
NotificationUnhookProc = WINFUNCTYPE(None, c_size_t)

class GdiplusStartupOutput(Structure):
    _fields_ = [
        ("NotificationHook", NotificationHookProc),
        ("NotificationUnhook", NotificationUnhookProc),
    ]

    def install_hook(self) -> int:
        token = c_size_t(0)
        if self.NotificationHook(byref(token)) != 0:
            raise OSError("GDI+ NotificationHook failed")
        return token.value

    def remove_hook(self, token: int) -> None:
        self.NotificationUnhook(token)

GdiplusStartup = _import(gdiplus, "GdiplusStartup", c_int, POINTER(c_size_t), POINTER(GdiplusStartupInput), POINTER(GdiplusStartupOutput))
GdiplusShutdown = _import(gdiplus, "GdiplusShutdown", None, c_size_t)
