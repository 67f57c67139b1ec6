"""
Module: handlers.py
Description: Message handler and finish callback strategies.

The engine dispatches message bodies to a MessageHandler and calls a
FinishHandler once the queue is observed empty. Both may be implemented
synchronously or as coroutines; plain callables are adapted with
CallableHandler / CallableFinishHandler.
"""

import inspect
from typing import Any, Callable, List, Optional, Protocol, Union, runtime_checkable

Payload = Union[str, List[str]]


@runtime_checkable
class MessageHandler(Protocol):
    """Receives a single body (batch_size == 1) or a list of bodies."""

    def handle(self, payload: Payload) -> Any:
        ...


@runtime_checkable
class FinishHandler(Protocol):
    """Invoked once when the consumer loop finds the queue empty."""

    def finish(self) -> Any:
        ...


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class NoopHandler:
    """Default handler; accepts the payload and does nothing with it."""

    def handle(self, payload: Payload) -> None:
        return None


class NoopFinishHandler:
    """Default finish callback."""

    def finish(self) -> None:
        return None


class CallableHandler:
    """Adapts a plain function or coroutine function into a MessageHandler."""

    def __init__(self, func: Callable[[Payload], Any]):
        if not callable(func):
            raise ValueError("handler must be callable")
        self.func = func

    def handle(self, payload: Payload) -> Any:
        return self.func(payload)


class CallableFinishHandler:
    """Adapts a zero-argument function or coroutine function into a FinishHandler."""

    def __init__(self, func: Callable[[], Any]):
        if not callable(func):
            raise ValueError("on_finish must be callable")
        self.func = func

    def finish(self) -> Any:
        return self.func()


def as_message_handler(handler: Optional[Union[MessageHandler, Callable]]) -> MessageHandler:
    """Return a MessageHandler for a strategy object, a callable or None."""
    if handler is None:
        return NoopHandler()
    if isinstance(handler, MessageHandler):
        return handler
    return CallableHandler(handler)


def as_finish_handler(on_finish: Optional[Union[FinishHandler, Callable]]) -> FinishHandler:
    """Return a FinishHandler for a strategy object, a callable or None."""
    if on_finish is None:
        return NoopFinishHandler()
    if isinstance(on_finish, FinishHandler):
        return on_finish
    return CallableFinishHandler(on_finish)


async def dispatch(handler: MessageHandler, payload: Payload) -> Any:
    """Invoke the handler and await its result if it returned an awaitable."""
    return await _resolve(handler.handle(payload))


async def notify_finished(on_finish: FinishHandler) -> Any:
    """Invoke the finish callback and await its result if needed."""
    return await _resolve(on_finish.finish())
