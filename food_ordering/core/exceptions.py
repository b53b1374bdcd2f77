"""Ordering error taxonomy.

Every error carries a suggested ``http_status`` and a machine-readable
``code`` so API handlers can turn it into a JSON payload without a lookup
table.
"""
from typing import Any, Mapping, Optional


class OrderingError(Exception):
    """Base class for all cart, pricing and checkout errors."""

    http_status = 400
    code = "ordering_error"
    default_message = "Ordering error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ItemNotFound(OrderingError):
    """Raised when an item id is not in the catalog."""

    http_status = 404
    code = "item_not_found"
    default_message = "Item not found"

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item {item_id} is not on the menu", {"item_id": item_id})


class InvalidQuantity(OrderingError):
    """Raised when a quantity is not a whole number."""

    http_status = 422
    code = "invalid_quantity"
    default_message = "Quantity must be a whole number"


class EmptyCartSubmission(OrderingError):
    http_status = 422
    code = "empty_cart"
    default_message = "Cannot place an order with an empty cart"


class MissingDeliveryAddress(OrderingError):
    http_status = 422
    code = "missing_delivery_address"
    default_message = "Please enter delivery address to continue"


class SubmissionInProgress(OrderingError):
    http_status = 409
    code = "submission_in_progress"
    default_message = "An order is already being placed"


class CatalogUnavailable(OrderingError):
    http_status = 503
    code = "catalog_unavailable"
    default_message = "Menu is currently unavailable"


class SubmissionRejected(OrderingError):
    """Raised by an order submission service that refuses an order."""

    http_status = 502
    code = "submission_rejected"
    default_message = "Order was rejected"


class SubmissionFailed(OrderingError):
    """Wraps the failure reason reported by the order submission service."""

    http_status = 502
    code = "submission_failed"
    default_message = "Order submission failed"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Order submission failed: {reason}", {"reason": reason})


class SubmissionTimeout(OrderingError):
    http_status = 504
    code = "timeout"
    default_message = "Order submission timed out"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        if timeout is None:
            super().__init__()
        else:
            super().__init__(f"Order submission timed out after {timeout:g}s", {"timeout": timeout})


class SessionNotFound(OrderingError):
    http_status = 404
    code = "session_not_found"
    default_message = "Order session not found"

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Order session '{session_id}' not found", {"session_id": session_id})
