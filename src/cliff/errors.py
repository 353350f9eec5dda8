"""Exception hierarchy shared by the executor, dispatcher and tools."""

from __future__ import annotations


class CliffError(RuntimeError):
    """Base class for step failures that the executor can recover from."""


class ActionError(CliffError):
    """A leaf operation failed (I/O, bad glob, non-zero exit, network)."""


class ProtocolError(CliffError):
    """The planner answered with something other than what was requested."""


class PlannerError(CliffError):
    """The planner could not be reached or its response could not be parsed."""


class RecoveryError(RuntimeError):
    """No recovery plan could be obtained after a step failure.

    Not a :class:`CliffError`: it is never recorded as a step failure and
    always terminates the run, including from inside nested sub-plans.
    """
