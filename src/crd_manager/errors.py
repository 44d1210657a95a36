"""Exceptions raised while installing CRDs."""


class CRDManagerError(Exception):
    """Base class for all crd-manager errors."""


class SetupError(CRDManagerError):
    """Client, configuration or bundle could not be prepared."""


class MalformedBundleError(CRDManagerError):
    """The CRD bundle could not be split into documents."""


class DecodeError(CRDManagerError):
    """A single bundle document is not a valid resource."""


class StoreError(CRDManagerError):
    """A cluster store call failed.

    Args:
        message: Human readable cause
        name: Name of the object the call was made for
        status: HTTP status reported by the API server, if any
    """

    def __init__(self, message, name=None, status=None):
        super().__init__(message)
        self.name = name
        self.status = status


class NotFoundError(StoreError):
    """The requested object does not exist."""


class ConflictError(StoreError):
    """The object's resourceVersion no longer matches the stored one."""


class CancelledError(StoreError):
    """The run was cancelled before the store call was issued."""
