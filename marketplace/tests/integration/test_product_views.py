from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Product
from marketplace.tests.factories import (
    CategoryFactory,
    OrderFactory,
    ProductFactory,
    ReviewFactory,
    SellerFactory,
    SoldProductFactory,
    UserFactory,
)


class CategoryViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_list_and_retrieve(self):
        CategoryFactory(name="Kamera")
        elektronik = CategoryFactory(name="Elektronik")

        response = self.client.get(reverse("marketplace:category-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c["name"] for c in response.data["data"]], ["Elektronik", "Kamera"])

        response = self.client.get(reverse("marketplace:category-detail", args=[elektronik.id]))
        self.assertEqual(response.data["data"]["name"], "Elektronik")

        response = self.client.get(reverse("marketplace:category-detail", args=[99999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "category_not_found")


class ProductViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = SellerFactory(name="Toko Rani")
        self.category = CategoryFactory(name="Buku")
        self.list_url = reverse("marketplace:product-list")

    def _detail_url(self, product_id):
        return reverse("marketplace:product-detail", args=[product_id])

    def test_list_hides_sold_products(self):
        visible = ProductFactory(seller=self.seller, category=self.category)
        SoldProductFactory(seller=self.seller)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        row = response.data["data"][0]
        self.assertEqual(row["id"], str(visible.id))
        self.assertEqual(row["seller_name"], "Toko Rani")
        self.assertEqual(row["category_name"], "Buku")

    def test_list_filters_and_sort(self):
        cheap = ProductFactory(name="Novel Lama", price=Decimal("20000.00"), category=self.category, condition="fair")
        pricey = ProductFactory(name="Novel Baru", price=Decimal("90000.00"), category=self.category, condition="good")
        ProductFactory(name="Sepeda", price=Decimal("500000.00"))

        response = self.client.get(self.list_url, {"search": "novel", "sort": "price_high"})
        self.assertEqual([p["id"] for p in response.data["data"]], [str(pricey.id), str(cheap.id)])

        response = self.client.get(self.list_url, {"category_id": self.category.id, "max_price": "50000"})
        self.assertEqual([p["id"] for p in response.data["data"]], [str(cheap.id)])

        response = self.client.get(self.list_url, {"condition": "good", "category_id": self.category.id})
        self.assertEqual([p["id"] for p in response.data["data"]], [str(pricey.id)])

        # Malformed numeric filters are ignored
        response = self.client.get(self.list_url, {"min_price": "abc"})
        self.assertEqual(response.data["count"], 3)

    def test_retrieve_counts_views_and_shows_reviews(self):
        product = ProductFactory(seller=self.seller)
        ReviewFactory(order=OrderFactory(product=ProductFactory(seller=self.seller)), rating=4, comment="Cepat")

        response = self.client.get(self._detail_url(product.id))
        self.client.get(self._detail_url(product.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertEqual(data["seller"]["phone"], self.seller.phone)
        self.assertEqual(len(data["reviews"]), 1)
        self.assertEqual(data["reviews"][0]["comment"], "Cepat")
        product.refresh_from_db()
        self.assertEqual(product.view_count, 2)

        self.assertEqual(self.client.get(self._detail_url("missing")).status_code, status.HTTP_404_NOT_FOUND)

    def test_create_product(self):
        self.client.force_authenticate(user=self.seller)
        payload = {
            "name": "Gitar Akustik",
            "category_id": self.category.id,
            "price": "850000",
            "condition": "like_new",
            "images": ["https://img.example.com/gitar.jpg"],
            "stock": 1,
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        product = Product.objects.get(id=response.data["data"]["product_id"])
        self.assertEqual(product.seller, self.seller)
        self.assertEqual(product.price, Decimal("850000.00"))
        self.assertEqual(product.stock, 1)
        self.assertFalse(product.is_sold)

    def test_create_product_validation(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(self.list_url, {"name": "Tanpa Harga"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_product_data")

        payload = {"name": "X", "category_id": self.category.id, "price": "-5", "condition": "good"}
        self.assertEqual(self.client.post(self.list_url, payload, format="json").status_code, 400)

        payload.update(price="10", condition="broken")
        self.assertEqual(self.client.post(self.list_url, payload, format="json").status_code, 400)

    def test_create_requires_authentication(self):
        response = self.client.post(self.list_url, {"name": "Anon"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_product_owner_only(self):
        product = ProductFactory(seller=self.seller, stock=0, is_sold=True)

        self.client.force_authenticate(user=UserFactory())
        response = self.client.put(self._detail_url(product.id), {"name": "Dicuri"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.seller)
        response = self.client.put(self._detail_url(product.id), {"name": "Edisi Revisi", "stock": 3}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        product.refresh_from_db()
        self.assertEqual(product.name, "Edisi Revisi")
        self.assertEqual(product.stock, 3)
        self.assertFalse(product.is_sold)

    def test_delete_product(self):
        product = ProductFactory(seller=self.seller)
        ordered = ProductFactory(seller=self.seller)
        OrderFactory(product=ordered)
        self.client.force_authenticate(user=self.seller)

        self.assertEqual(self.client.delete(self._detail_url(product.id)).status_code, status.HTTP_200_OK)
        self.assertFalse(Product.objects.filter(id=product.id).exists())

        response = self.client.delete(self._detail_url(ordered.id))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "product_has_orders")

    def test_products_by_user_include_sold(self):
        ProductFactory(seller=self.seller)
        SoldProductFactory(seller=self.seller)
        ProductFactory()

        response = self.client.get(reverse("marketplace:product-by-user", args=[self.seller.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual(self.client.get(reverse("marketplace:product-by-user", args=["nobody"])).data["data"], [])
