from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .model import Edge, Vertex

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 8
_repr.maxtuple = 8
_repr.maxset = 8
_repr.maxdict = 8


def _safe_repr(value: Any, *, max_items: int = 6, max_length: int = 300) -> str:
    # graph entities are summarised by id so traces stay one line per call
    if isinstance(value, Edge):
        return f"Edge({value.id}: {value.start}-{value.end})"
    if isinstance(value, Vertex):
        return f"Vertex({value.id})"
    if isinstance(value, np.ndarray):
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
    if isinstance(value, (list, tuple, set, frozenset)):
        items = []
        for idx, item in enumerate(value):
            if idx >= max_items:
                items.append(f"... ({len(value)} total)")
                break
            items.append(_safe_repr(item))
        if isinstance(value, tuple):
            return "(" + ", ".join(items) + ")"
        if isinstance(value, (set, frozenset)):
            return "{" + ", ".join(items) + "}"
        return "[" + ", ".join(items) + "]"

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - repr of foreign objects
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = [_safe_repr(arg) for arg in args]
    parts.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that traces calls to ``func`` at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            enabled = logger.isEnabledFor(logging.DEBUG)
            if enabled:
                logger.debug("-> %s(%s)", qualname, _format_arguments(args, kwargs))
            result = func(*args, **kwargs)
            if enabled:
                if log_result:
                    logger.debug("<- %s = %s", qualname, _safe_repr(result))
                else:
                    logger.debug("<- %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public module-level functions of ``namespace`` with call tracing."""

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or [])

    for name, value in list(namespace.items()):
        if name.startswith("_") or name in skip_set:
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[name] = debug_log_call(logger, name=name)(value)


__all__ = ["apply_debug_logging", "debug_log_call"]
