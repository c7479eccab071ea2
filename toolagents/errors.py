class NotFoundError(Exception):
    """Raised by a domain operation when a referenced resource does not exist."""
    pass


class CapacityError(Exception):
    """Raised when a bounded store cannot accept another item."""
    pass
