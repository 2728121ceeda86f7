class StoreError(Exception):
    """The hosted store rejected or failed an operation. Message is kept verbatim."""


class NotFoundError(StoreError):
    """A record the caller requires does not exist."""
