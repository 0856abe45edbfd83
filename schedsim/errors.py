"""
Exceptions raised by the simulator.

Input and configuration errors derive from ``ValueError`` as well, so callers
that only care about "bad value" can keep catching that.
"""


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class WorkloadError(SchedulerError, ValueError):
    """The process set could not be loaded or is not a valid workload."""


class ConfigurationError(SchedulerError, ValueError):
    """A run was requested with an unknown policy or an invalid parameter."""
