"""
Guard for blocking wrappers that start their own event loop.
"""

from __future__ import annotations
import asyncio
import warnings


def warn_if_loop_running(caller: str, stacklevel: int = 1) -> bool:
    """
    Emit a RuntimeWarning when `caller` (a blocking entry point) is invoked while an
    event loop is running in this thread, and return whether one was found.

    stacklevel is passed through to warnings.warn, counted from the caller of this
    function, so the warning can point at user code rather than at the wrapper.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    warnings.warn(
        f"{caller} blocks inside a running event loop; "
        "await AnalyzerAsync from async code instead.",
        RuntimeWarning,
        stacklevel=stacklevel + 1,
    )
    return True
