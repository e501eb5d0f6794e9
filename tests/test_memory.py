from __future__ import annotations

from ctypes import c_char_p, c_wchar_p, create_string_buffer, create_unicode_buffer, memset, string_at

import pytest

from scoped import DuplicatingStringOwner, HeapObjectOwner, RawMemoryOwner, WideDuplicatingStringOwner, libc


class CountingFree:
    def __init__(self) -> None:
        self.freed: list[int] = []

    def __call__(self, ptr) -> None:
        self.freed.append(ptr.value)
        libc.free(ptr)


@pytest.fixture()
def counting_free() -> CountingFree:
    return CountingFree()


def test_allocate_gives_usable_buffer() -> None:
    with RawMemoryOwner.allocate(32) as owner:
        assert owner
        memset(owner.value, 0x41, 32)
        assert string_at(owner.value, 32) == b"A" * 32


def test_raw_memory_freed_once(counting_free) -> None:
    ptr = libc.malloc(16)
    address = ptr.value
    owner = RawMemoryOwner(ptr, counting_free)
    owner.close()
    del owner
    assert counting_free.freed == [address]


def test_raw_memory_reset_frees_previous(counting_free) -> None:
    first, second = libc.malloc(8), libc.malloc(8)
    first_address, second_address = first.value, second.value
    owner = RawMemoryOwner(first, counting_free)
    owner.reset(second)
    assert counting_free.freed == [first_address]
    owner.close()
    assert counting_free.freed == [first_address, second_address]


def test_raw_memory_steal_does_not_free(counting_free) -> None:
    owner = RawMemoryOwner(libc.malloc(8), counting_free)
    ptr = owner.steal()
    del owner
    assert counting_free.freed == []
    libc.free(ptr)


def test_null_pointer_is_empty(counting_free) -> None:
    owner = RawMemoryOwner(libc.void_p(None), counting_free)
    assert not owner
    assert owner.get() is None
    owner.close()
    assert counting_free.freed == []


class Resource:
    def __init__(self) -> None:
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


class FalsyResource(Resource):
    def __bool__(self) -> bool:
        return False


def test_heap_object_destroyed_once() -> None:
    resource = Resource()
    with HeapObjectOwner(resource) as owner:
        assert owner.value is resource
    del owner
    assert resource.closed == 1


def test_heap_object_falsy_object_is_still_owned() -> None:
    resource = FalsyResource()
    owner = HeapObjectOwner(resource)
    assert owner
    owner.close()
    assert resource.closed == 1


def test_heap_object_reset_and_steal() -> None:
    first, second = Resource(), Resource()
    owner = HeapObjectOwner(first)
    owner.reset(second)
    assert (first.closed, second.closed) == (1, 0)
    assert owner.steal() is second
    owner.close()
    assert second.closed == 0


def test_heap_object_custom_destroy(released) -> None:
    owner = HeapObjectOwner("object", released)
    owner.close()
    assert released.calls == ["object"]


def test_assign_copy_is_independent_of_source() -> None:
    source = create_string_buffer(b"hello")
    owner = DuplicatingStringOwner()
    owner.assign_copy(source)
    source.value = b"HELLO"
    assert owner.text == b"hello"
    memset(source, 0, len(source))
    del source
    assert owner.text == b"hello"
    owner.close()
    assert owner.text is None


def test_assign_copy_releases_previous_buffer(counting_free) -> None:
    owner = DuplicatingStringOwner(None, counting_free)
    owner.assign_copy(b"first")
    first_address = owner.value.value
    owner.assign_copy(b"second")
    assert counting_free.freed == [first_address]
    assert owner.text == b"second"


@pytest.mark.parametrize("empty", [None, b"", c_char_p(None)])
def test_assign_copy_with_empty_text_empties_owner(counting_free, empty) -> None:
    owner = DuplicatingStringOwner(None, counting_free)
    owner.assign_copy(b"held")
    held_address = owner.value.value
    owner.assign_copy(empty)
    assert not owner
    assert owner.text is None
    assert counting_free.freed == [held_address]
    owner.close()
    assert counting_free.freed == [held_address]


def test_assign_copy_from_another_owner() -> None:
    src = DuplicatingStringOwner.copy_of(b"cached")
    dst = DuplicatingStringOwner()
    dst.assign_copy(src.get())
    assert dst.value.value != src.value.value
    src.close()
    assert dst.text == b"cached"


def test_assign_copy_of_own_buffer(counting_free) -> None:
    owner = DuplicatingStringOwner(None, counting_free)
    owner.assign_copy(b"self")
    held_address = owner.value.value
    owner.assign_copy(owner.get())
    assert owner.text == b"self"
    assert counting_free.freed == [held_address]


def test_assign_copy_from_null_pointer_empties_owner() -> None:
    owner = DuplicatingStringOwner.copy_of(b"held")
    owner.assign_copy(libc.char_p(None))
    assert not owner


def test_wide_assign_copy_from_owners() -> None:
    src = WideDuplicatingStringOwner.copy_of("wïde")
    dst = WideDuplicatingStringOwner.copy_of(src.get())
    src.close()
    assert dst.text == "wïde"
    dst.assign_copy(dst.get())
    assert dst.text == "wïde"


def test_wide_string_copy() -> None:
    source = create_unicode_buffer("héllo wörld")
    owner = WideDuplicatingStringOwner.copy_of(source)
    source.value = "changed"
    assert owner.text == "héllo wörld"
    owner.assign_copy(c_wchar_p("other"))
    assert owner.text == "other"
    owner.assign_copy("")
    assert not owner
