# dupetree/core/errors.py


class DupeTreeError(Exception):
    """Base class for every error raised by dupetree."""


class InvalidPath(DupeTreeError):
    """The scan root is missing, not a directory, or inaccessible."""

    def __init__(self, message: str, path=None):
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)


class InvalidArgument(DupeTreeError, ValueError):
    """A scan argument (threshold, worker count, extension filter...) is malformed."""

    def __init__(self, message: str, name=None, value=None):
        self.name = name
        self.value = value
        if name is not None:
            message = f"{message} ({name}={value!r})"
        super().__init__(message)


class UnreadableEntry(DupeTreeError):
    """A file or directory could not be read while walking the tree. Non-fatal."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unreadable entry {path}: {reason}")


class HashFailure(DupeTreeError):
    """A file's content could not be fully read for fingerprinting. Non-fatal."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not hash {path}: {reason}")

    def __reduce__(self):
        # Keeps the exception picklable across process pool workers
        return (self.__class__, (self.path, self.reason))
