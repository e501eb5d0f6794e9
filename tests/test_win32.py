from __future__ import annotations

import threading

import pytest

from scoped import SubsystemState

win32 = pytest.importorskip("scoped.win32", exc_type=ImportError)
winapi = win32.winapi


def test_guid_round_trip() -> None:
    guid = winapi.GUID("00000000-0000-0000-C000-000000000046")
    assert str(guid) == "{00000000-0000-0000-C000-000000000046}"
    assert guid == winapi.IUnknown._iid_


def test_critical_section_guard() -> None:
    cs = win32.CriticalSection()
    entered = threading.Event()

    def worker() -> None:
        with win32.CriticalSectionGuard(cs):
            entered.set()

    with win32.CriticalSectionGuard(cs) as guard:
        assert guard.locked
        thread = threading.Thread(target=worker)
        thread.start()
        assert not entered.wait(0.1)
    assert entered.wait(5)
    thread.join(5)


def test_invalid_handle_is_not_closed() -> None:
    owner = win32.OwnedHandle(winapi.HANDLE(-1))
    assert not owner.is_valid()
    owner.close()


def test_device_context_and_selection() -> None:
    with win32.DeviceContext(winapi.CreateCompatibleDC(None)) as dc:
        assert dc
        with win32.Brush(winapi.CreateSolidBrush(0x0000FF)) as brush:
            original = winapi.GetCurrentObject(dc.value, winapi.OBJ_BRUSH).value
            with win32.DeviceContextSelection(dc.value, brush.value):
                assert winapi.GetCurrentObject(dc.value, winapi.OBJ_BRUSH).value == brush.value.value
            assert winapi.GetCurrentObject(dc.value, winapi.OBJ_BRUSH).value == original


def test_com_and_ole_init() -> None:
    with win32.ComInit() as com:
        assert com.state is SubsystemState.STARTED
        assert winapi.SUCCEEDED(com.token)
    assert com.state is SubsystemState.TERMINATED
    with win32.OleInit() as ole:
        assert winapi.SUCCEEDED(ole.token)


def test_query_for_unsupported_interface_is_empty() -> None:
    class IMissing(winapi.IUnknown):
        _iid_ = winapi.GUID("8f3e1c2a-0d8b-4a7e-9b52-3c1d7a6e0f91")

    with win32.ComInit():
        with win32.ComQueryPtr(IMissing) as missing:
            assert not missing


def test_gdiplus_without_background_thread() -> None:
    with win32.GdiPlusInit(suppress_background_thread=True) as gdiplus:
        assert gdiplus.state is SubsystemState.HOOK_INSTALLED
    assert gdiplus.state is SubsystemState.TERMINATED
