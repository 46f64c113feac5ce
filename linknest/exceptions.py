class LinkNestError(Exception):
    """Base class for errors raised by linknest."""


class StorageError(LinkNestError):
    """The link store could not complete a read or write.

    The underlying driver or I/O error is kept as ``__cause__``.
    """
