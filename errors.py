class DeliveryAppError(Exception):
    """Base class of every error the service layer raises to the handlers."""


class StorageError(DeliveryAppError):
    """Transaction or connection failure; the caller decides whether to retry."""


class NotFound(DeliveryAppError):
    """Parent row is absent, or a page of ids is empty."""


class UnknownCourierType(DeliveryAppError):
    """Courier type is not registered in the courier_types table."""


class OwnershipMismatch(DeliveryAppError):
    """Courier id of a completion request doesn't match the one recorded on the order."""


class DateRangeError(DeliveryAppError):
    """Date window of the metrics request can't be parsed or has zero length."""
