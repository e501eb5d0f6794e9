from ctypes import *
import ctypes.util
import sys


if sys.platform == "win32":
    libc = cdll.msvcrt
    _strdup_symbol, _wcsdup_symbol = "_strdup", "_wcsdup"
else:
    libc = CDLL(ctypes.util.find_library("c"))
    _strdup_symbol, _wcsdup_symbol = "strdup", "wcsdup"

def _import(symbol: str, restype: type | None, *argtypes: type):
    f = libc[symbol]
    f.argtypes = argtypes
    f.restype = restype
    return f

# Typed pointers, kept as ctypes instances when returned

class void_p(c_void_p): pass
class char_p(c_void_p): pass
class wchar_p(c_void_p): pass

# Allocator

malloc = _import("malloc", void_p, c_size_t)
free = _import("free", None, c_void_p)

# Strings

strdup = _import(_strdup_symbol, char_p, c_char_p)
wcsdup = _import(_wcsdup_symbol, wchar_p, c_wchar_p)
