import random
import uuid
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from faker import Faker

from marketplace.models import CartItem, Category, Order, Product, Review

User = get_user_model()
fake = Faker()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    name = factory.Faker("name")
    phone = factory.Faker("numerify", text="08##########")
    address = factory.Faker("street_address")
    city = factory.Faker("city")
    password = factory.django.Password("defaultpassword")
    is_active = True
    is_seller = False


class SellerFactory(UserFactory):
    username = factory.Sequence(lambda n: f"seller_{n}")
    email = factory.Sequence(lambda n: f"seller_{n}@example.com")
    is_seller = True


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    icon = "tag"


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    id = factory.LazyFunction(uuid.uuid4)
    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("paragraph", nb_sentences=3)
    price = factory.LazyFunction(lambda: Decimal(f"{random.randint(10, 500) * 1000}.00"))
    stock = factory.Faker("random_int", min=1, max=20)
    is_sold = False
    condition = factory.Iterator([choice[0] for choice in Product.CONDITION_CHOICES])
    images = factory.LazyFunction(lambda: [fake.image_url()])
    location = factory.Faker("city")

    seller = factory.SubFactory(SellerFactory)
    category = factory.SubFactory(CategoryFactory)


class SoldProductFactory(ProductFactory):
    stock = 0
    is_sold = True


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    id = factory.LazyFunction(uuid.uuid4)
    buyer = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)
    seller = factory.LazyAttribute(lambda o: o.product.seller)
    quantity = 1
    status = Order.PENDING
    payment_method = "transfer"
    shipping_address = factory.Faker("address")
    notes = ""

    @factory.lazy_attribute
    def total_price(self):
        return self.product.price * self.quantity


class ReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Review

    order = factory.SubFactory(OrderFactory, status=Order.DELIVERED)
    buyer = factory.LazyAttribute(lambda o: o.order.buyer)
    seller = factory.LazyAttribute(lambda o: o.order.seller)
    rating = factory.Faker("random_int", min=1, max=5)
    comment = factory.Faker("sentence", nb_words=8)


class CartItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartItem

    user = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = 1
