from typing import Protocol, Self

from .smart_ptr import NonCopyable


class Lockable(Protocol):
    def acquire(self, *args, **kwargs) -> object: ...
    def release(self) -> None: ...


class LockGuard(NonCopyable):
    '''
    Holds `lock` from construction until the guard's scope is exited or the
    guard is destroyed. Acquisition blocks without timeout. There is no way to
    release early or to hand the lock over.
    '''
    def __init__(self, lock: Lockable):
        self.__lock = None
        lock.acquire()
        self.__lock = lock

    def __del__(self):
        self._release()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self._release()

    @property
    def locked(self) -> bool:
        return self.__lock is not None

    def _release(self) -> None:
        lock, self.__lock = self.__lock, None
        if lock is not None:
            lock.release()
