import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol, Self

from .smart_ptr import NonCopyable


logger = logging.getLogger(__name__)


class SubsystemState(Enum):
    UNINITIALIZED = "uninitialized"
    STARTED = "started"
    HOOK_INSTALLED = "hook-installed"
    SHUTTING_DOWN = "shutting-down"
    TERMINATED = "terminated"


class SubsystemInitGuard(NonCopyable):
    '''
    Starts a process-wide subsystem on construction and shuts it down once on
    close. `startup()` returns a token (a status code or a handle) which is
    passed back to `shutdown(token)`. Guards are neither reusable nor
    reentrant: keep one per subsystem, usually at process start-up.
    '''
    _name: str = "subsystem"
    _state = SubsystemState.UNINITIALIZED
    _startup: Callable[[], Any] | None = None
    _shutdown: Callable[[Any], Any] | None = None

    def __init__(self,
                 startup: Callable[[], Any] | None = None,
                 shutdown: Callable[[Any], Any] | None = None):
        self.__shutdown = shutdown if shutdown is not None else type(self)._shutdown
        startup = startup if startup is not None else type(self)._startup
        if startup is None or self.__shutdown is None:
            raise TypeError(f"{type(self).__name__} requires startup and shutdown functions")
        self.token = startup()
        self._state = SubsystemState.STARTED
        logger.debug("%s started (token: %r)", self._name, self.token)

    def __del__(self):
        self.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def state(self) -> SubsystemState:
        return self._state

    def close(self) -> None:
        if self._state not in (SubsystemState.STARTED, SubsystemState.HOOK_INSTALLED):
            return
        previous, self._state = self._state, SubsystemState.SHUTTING_DOWN
        try:
            self._before_shutdown(previous)
        finally:
            try:
                self.__shutdown(self.token)
                logger.debug("%s shut down", self._name)
            finally:
                self._state = SubsystemState.TERMINATED

    def _before_shutdown(self, state: SubsystemState) -> None:
        pass


class StartupOutput(Protocol):
    def install_hook(self) -> Any: ...
    def remove_hook(self, hook_token: Any) -> Any: ...


class HookedSubsystemInitGuard(SubsystemInitGuard):
    '''
    Subsystem whose startup can suppress its background worker thread. In that
    mode the caller drives the worker through a notification hook, which is
    installed right after startup and removed before shutdown.

    `startup(suppress_background_thread)` returns `(token, output)`, where
    `output` provides `install_hook()` and `remove_hook(hook_token)`.
    '''
    def __init__(self,
                 suppress_background_thread: bool = False,
                 startup: Callable[[bool], tuple[Any, StartupOutput]] | None = None,
                 shutdown: Callable[[Any], Any] | None = None):
        self.suppress_background_thread = suppress_background_thread
        self.hook_token = None
        self.__output: StartupOutput | None = None
        startup = startup if startup is not None else type(self)._startup
        if startup is None:
            raise TypeError(f"{type(self).__name__} requires startup and shutdown functions")
        super().__init__(lambda: self.__start(startup), shutdown)
        if suppress_background_thread:
            self.hook_token = self.__output.install_hook()
            self._state = SubsystemState.HOOK_INSTALLED
            logger.debug("%s notification hook installed", self._name)

    def __start(self, startup: Callable[[bool], tuple[Any, StartupOutput]]) -> Any:
        token, self.__output = startup(self.suppress_background_thread)
        return token

    def _before_shutdown(self, state: SubsystemState) -> None:
        if state is not SubsystemState.HOOK_INSTALLED:
            return
        self.__output.remove_hook(self.hook_token)
        logger.debug("%s notification hook removed", self._name)
