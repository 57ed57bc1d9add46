from unittest.mock import Mock

import pytest
from rest_framework import status

from marketplace.api.responses import error_response, status_for, success_response
from marketplace.services import ErrorCodes, ErrorKinds, service_err, service_ok


@pytest.mark.unit
class TestServiceResult:
    def test_ok_result_has_no_kind(self):
        result = service_ok({"id": 1})

        assert result.ok
        assert result.kind is None
        assert result.to_dict() == {"success": True, "data": {"id": 1}}

    def test_error_result_envelope(self):
        result = service_err(ErrorCodes.ORDER_NOT_FOUND, "Order x not found")

        assert result.to_dict() == {"success": False, "message": "Order x not found", "error": "order_not_found"}

    def test_error_detail_defaults_to_code(self):
        assert service_err(ErrorCodes.INTERNAL_ERROR).error_detail == "internal_error"

    def test_map_and_flat_map(self):
        assert service_ok(2).map(lambda v: v * 3).value == 6
        assert service_ok(2).flat_map(lambda v: service_err(ErrorCodes.VALIDATION_ERROR)).ok is False

        failed = service_err(ErrorCodes.PRODUCT_NOT_FOUND)
        assert failed.map(Mock()) is failed

    @pytest.mark.parametrize(
        "code,kind",
        [
            (ErrorCodes.PRODUCT_NOT_FOUND, ErrorKinds.NOT_FOUND),
            (ErrorCodes.NOT_ORDER_PARTY, ErrorKinds.FORBIDDEN),
            (ErrorCodes.INVALID_RATING, ErrorKinds.VALIDATION),
            (ErrorCodes.DUPLICATE_REVIEW, ErrorKinds.CONFLICT),
            (ErrorCodes.INSUFFICIENT_STOCK, ErrorKinds.INSUFFICIENT_STOCK),
            ("something_unexpected", ErrorKinds.INTERNAL),
        ],
    )
    def test_kind_of(self, code, kind):
        assert ErrorCodes.kind_of(code) == kind


@pytest.mark.unit
class TestResponses:
    @pytest.mark.parametrize(
        "code,http_status",
        [
            (ErrorCodes.CART_ITEM_NOT_FOUND, status.HTTP_404_NOT_FOUND),
            (ErrorCodes.NOT_PRODUCT_OWNER, status.HTTP_403_FORBIDDEN),
            (ErrorCodes.INVALID_QUANTITY, status.HTTP_400_BAD_REQUEST),
            (ErrorCodes.DUPLICATE_REVIEW, status.HTTP_400_BAD_REQUEST),
            (ErrorCodes.INSUFFICIENT_STOCK, status.HTTP_400_BAD_REQUEST),
            (ErrorCodes.INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR),
        ],
    )
    def test_status_for(self, code, http_status):
        assert status_for(service_err(code)) == http_status

    def test_error_response_body(self):
        response = error_response(service_err(ErrorCodes.NOT_ORDER_PARTY, "Not authorized"))

        assert response.status_code == 403
        assert response.data == {"success": False, "message": "Not authorized", "error": "not_order_party"}

    def test_success_response_extras(self):
        response = success_response([1, 2], message="ok", count=2)

        assert response.status_code == 200
        assert response.data["success"] is True
        assert response.data["data"] == [1, 2]
        assert response.data["count"] == 2
