class KeyValueStoreError(Exception):
    """Raised when the key-value store cannot be read or written."""
