class SwaywsrError(Exception):
    """Base class for all errors of one update cycle."""


class IpcConnectionError(SwaywsrError):
    """The ipc socket could not be reached or broke down."""


class TreeFetchError(SwaywsrError):
    """The tree snapshot could not be fetched or parsed."""


class WorkspaceNotFoundError(SwaywsrError):
    """No workspace with focus exists in the tree snapshot."""


class MissingAttributeError(SwaywsrError):
    """The focused workspace lacks its name or number."""


class RenameCommandError(SwaywsrError):
    """The compositor rejected the rename command."""
