"""
Exclusive ownership of a triangulation.

The engine must be the only party touching the triangulation while a run is
in progress. Passing a TriangulationHandle into Metropolis.run() moves the
triangulation out of it: the caller's handle is invalidated, and the
triangulation comes back in a fresh handle when the run returns.
"""

from __future__ import annotations
from typing import Generic, TypeVar

from cdtsim.core.errors import ConsumedHandleError

T = TypeVar("T")

_CONSUMED = object()


class TriangulationHandle(Generic[T]):
    """Owning wrapper around a triangulation."""

    __slots__ = ("_triangulation",)

    def __init__(self, triangulation: T):
        if triangulation is None:
            raise ValueError("cannot own a missing triangulation")
        self._triangulation = triangulation

    @property
    def valid(self) -> bool:
        """False once ownership has been transferred."""
        return self._triangulation is not _CONSUMED

    def get(self) -> T:
        """Borrow the triangulation without giving up ownership."""
        if not self.valid:
            raise ConsumedHandleError("triangulation was moved out of this handle")
        return self._triangulation

    def release(self) -> T:
        """Move the triangulation out. The handle is unusable afterwards."""
        triangulation = self.get()
        self._triangulation = _CONSUMED
        return triangulation

    def __repr__(self) -> str:
        if not self.valid:
            return "TriangulationHandle(<consumed>)"
        return f"TriangulationHandle({type(self._triangulation).__name__})"
