class StorageError(Exception):
    """Raised when a storage backend cannot write, read or delete an object."""
