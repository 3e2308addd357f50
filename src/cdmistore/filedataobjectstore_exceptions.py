"""FileDataObjectStore custom exception module."""


class MalformedRequest(Exception):
    """Custom exception thrown when a logical object path cannot be split into
    a container path and an object name (ex. the path has no segments)."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class ConflictError(Exception):
    """Custom exception thrown when the state of the filesystem conflicts with
    the request: the container directory is missing on create, the content file
    already exists on create, or a metadata file exists without its content file
    on read."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class UnsupportedOperation(NotImplementedError):
    """Custom exception thrown when calling a data object operation that the
    store deliberately does not implement (ex. 'delete_by_path')."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class MetadataFormatError(ValueError):
    """Custom exception thrown when a metadata document is not valid JSON or is
    missing the structural fields required to rebuild a data object."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class ObjectWriteError(Exception):
    """Custom exception thrown when writing a data object (content or metadata)
    fails. The offending logical path is kept in `path` and the underlying
    exception in `errors`."""

    def __init__(self, message, path=None, errors=None):
        super().__init__(message)
        self.path = path
        self.errors = errors


class ObjectReadError(Exception):
    """Custom exception thrown when reading or parsing a stored data object fails."""

    def __init__(self, message, path=None, errors=None):
        super().__init__(message)
        self.path = path
        self.errors = errors
