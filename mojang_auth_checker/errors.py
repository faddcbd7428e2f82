class HostsError(Exception):
    """Base class for every failure raised while handling the hosts file."""


class ReadError(HostsError):
    """The hosts file is missing or could not be read as text."""


class CleanError(HostsError):
    """The hosts file could not be rewritten."""


class PermissionDenied(CleanError):
    """The process is not allowed to write the hosts file."""


class ElevationError(HostsError):
    """The elevated relaunch could not be started."""
