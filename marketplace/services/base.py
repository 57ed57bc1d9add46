"""
Base classes and utilities for the service layer.

Services return a ServiceResult instead of raising for expected failures.
Each error code belongs to one failure kind (not found, forbidden, validation,
conflict, insufficient stock, internal) which the API layer maps to an HTTP
status.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(order)
        >>> if result.ok:
        ...     return Response({"success": True, "data": ...}, 200)

        >>> result = service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")
        >>> result.kind
        'not_found'
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None

    @property
    def kind(self) -> Optional[str]:
        """Failure kind of the error code, None on success."""
        if self.ok:
            return None
        return ErrorCodes.kind_of(self.error)

    def map(self, func: Callable[[T], Any]) -> "ServiceResult":
        """
        Transform the success value if ok=True, otherwise pass through error.
        """
        if self.ok:
            return service_ok(func(self.value))
        return self

    def flat_map(self, func: Callable[[T], "ServiceResult"]) -> "ServiceResult":
        """
        Chain service operations that return ServiceResult.
        """
        if self.ok:
            return func(self.value)
        return self

    def to_dict(self) -> dict:
        """
        Convert to the response envelope.

        Returns:
            {"success": True, "data": ...} or
            {"success": False, "message": ..., "error": <code>}
        """
        if self.ok:
            return {"success": True, "data": self.value}
        return {"success": False, "message": self.error_detail, "error": self.error}


def service_ok(value: T) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Example:
        >>> return service_ok(order_summary)
    """
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "order_not_found", "invalid_quantity")
        error_detail: Human-readable error message

    Example:
        >>> return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator

    Usage:
        class InventoryService(BaseService):
            @BaseService.log_performance
            def apply_delta(self, product_id, quantity_delta):
                self.logger.info(f"Applying {quantity_delta} to {product_id}")
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log duration and outcome of service methods.

        Exceptions are logged and re-raised.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


class ErrorKinds:
    """Failure kinds that error codes are grouped into."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    INSUFFICIENT_STOCK = "insufficient_stock"
    INTERNAL = "internal"


# Common error codes for marketplace services
class ErrorCodes:
    """Standard error codes used across marketplace services."""

    # Not found
    PRODUCT_NOT_FOUND = "product_not_found"
    CATEGORY_NOT_FOUND = "category_not_found"
    ORDER_NOT_FOUND = "order_not_found"
    USER_NOT_FOUND = "user_not_found"
    CART_ITEM_NOT_FOUND = "cart_item_not_found"

    # Forbidden
    PERMISSION_DENIED = "permission_denied"
    NOT_PRODUCT_OWNER = "not_product_owner"
    NOT_ORDER_PARTY = "not_order_party"
    NOT_ORDER_BUYER = "not_order_buyer"
    NOT_CART_OWNER = "not_cart_owner"
    NOT_PROFILE_OWNER = "not_profile_owner"

    # Validation
    VALIDATION_ERROR = "validation_error"
    INVALID_QUANTITY = "invalid_quantity"
    INVALID_STATUS = "invalid_status"
    INVALID_TRANSITION = "invalid_transition"
    INVALID_RATING = "invalid_rating"
    INVALID_PRODUCT_DATA = "invalid_product_data"
    SELLER_MISMATCH = "seller_mismatch"
    OWN_PRODUCT = "own_product"
    PRODUCT_SOLD = "product_sold"

    # Conflict
    DUPLICATE_REVIEW = "duplicate_review"
    PRODUCT_HAS_ORDERS = "product_has_orders"

    # Inventory
    INSUFFICIENT_STOCK = "insufficient_stock"

    # Internal
    INTERNAL_ERROR = "internal_error"

    _KINDS = {
        PRODUCT_NOT_FOUND: ErrorKinds.NOT_FOUND,
        CATEGORY_NOT_FOUND: ErrorKinds.NOT_FOUND,
        ORDER_NOT_FOUND: ErrorKinds.NOT_FOUND,
        USER_NOT_FOUND: ErrorKinds.NOT_FOUND,
        CART_ITEM_NOT_FOUND: ErrorKinds.NOT_FOUND,
        PERMISSION_DENIED: ErrorKinds.FORBIDDEN,
        NOT_PRODUCT_OWNER: ErrorKinds.FORBIDDEN,
        NOT_ORDER_PARTY: ErrorKinds.FORBIDDEN,
        NOT_ORDER_BUYER: ErrorKinds.FORBIDDEN,
        NOT_CART_OWNER: ErrorKinds.FORBIDDEN,
        NOT_PROFILE_OWNER: ErrorKinds.FORBIDDEN,
        VALIDATION_ERROR: ErrorKinds.VALIDATION,
        INVALID_QUANTITY: ErrorKinds.VALIDATION,
        INVALID_STATUS: ErrorKinds.VALIDATION,
        INVALID_TRANSITION: ErrorKinds.VALIDATION,
        INVALID_RATING: ErrorKinds.VALIDATION,
        INVALID_PRODUCT_DATA: ErrorKinds.VALIDATION,
        SELLER_MISMATCH: ErrorKinds.VALIDATION,
        OWN_PRODUCT: ErrorKinds.VALIDATION,
        PRODUCT_SOLD: ErrorKinds.VALIDATION,
        DUPLICATE_REVIEW: ErrorKinds.CONFLICT,
        PRODUCT_HAS_ORDERS: ErrorKinds.CONFLICT,
        INSUFFICIENT_STOCK: ErrorKinds.INSUFFICIENT_STOCK,
        INTERNAL_ERROR: ErrorKinds.INTERNAL,
    }

    @classmethod
    def kind_of(cls, code: Optional[str]) -> str:
        """Return the failure kind for an error code; unknown codes are internal."""
        return cls._KINDS.get(code, ErrorKinds.INTERNAL)
