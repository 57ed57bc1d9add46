import uuid
from unittest.mock import MagicMock, Mock

import pytest

from marketplace.ordering.domain.services.order_service import MAX_ORDER_QUANTITY
from marketplace.services import ErrorCodes, ErrorKinds, InventoryService, OrderService, SellerRatingService


@pytest.mark.unit
class TestOrderServiceUnit:
    def setup_method(self):
        self.inventory = Mock(spec=InventoryService)
        self.rating = Mock(spec=SellerRatingService)
        self.service = OrderService(inventory_service=self.inventory, rating_service=self.rating)
        self.user = MagicMock()
        self.user.id = uuid.uuid4()

    @pytest.mark.parametrize("rating", [0, 6, -1, "5", 4.5, None, True])
    @pytest.mark.django_db
    def test_create_review_rejects_rating_before_any_read(self, rating):
        result = self.service.create_review(uuid.uuid4(), self.user, rating)

        assert not result.ok
        assert result.error == ErrorCodes.INVALID_RATING
        assert result.kind == ErrorKinds.VALIDATION
        self.rating.recompute.assert_not_called()

    @pytest.mark.parametrize("quantity", [0, -2, "2", 1.5, None])
    @pytest.mark.django_db
    def test_create_order_rejects_bad_quantity(self, quantity):
        result = self.service.create_order(self.user, uuid.uuid4(), quantity=quantity)

        assert not result.ok
        assert result.error == ErrorCodes.INVALID_QUANTITY
        self.inventory.apply_delta.assert_not_called()

    @pytest.mark.django_db
    def test_create_order_rejects_quantity_beyond_column(self):
        result = self.service.create_order(self.user, uuid.uuid4(), quantity=MAX_ORDER_QUANTITY + 1)

        assert result.error == ErrorCodes.INVALID_QUANTITY
        self.inventory.apply_delta.assert_not_called()

    @pytest.mark.django_db
    def test_update_status_rejects_unknown_status(self):
        result = self.service.update_status(uuid.uuid4(), self.user, "refunded")

        assert not result.ok
        assert result.error == ErrorCodes.INVALID_STATUS
        self.inventory.mark_sold.assert_not_called()

    def test_list_orders_rejects_unknown_status_filter(self):
        result = self.service.list_orders(self.user, status="lost")

        assert not result.ok
        assert result.error == ErrorCodes.INVALID_STATUS

    def test_default_collaborators_are_created(self):
        service = OrderService()

        assert isinstance(service.inventory_service, InventoryService)
        assert isinstance(service.rating_service, SellerRatingService)
