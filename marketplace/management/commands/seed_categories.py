"""
Django management command to create the default product categories
Usage: python manage.py seed_categories
"""

from django.core.management.base import BaseCommand

from marketplace.models import Category

DEFAULT_CATEGORIES = [
    {"name": "Electronics", "icon": "📱"},
    {"name": "Fashion", "icon": "👗"},
    {"name": "Furniture", "icon": "🪑"},
    {"name": "Books", "icon": "📚"},
    {"name": "Sports", "icon": "⚽"},
    {"name": "Toys", "icon": "🎮"},
    {"name": "Home & Kitchen", "icon": "🍳"},
    {"name": "Beauty", "icon": "💄"},
    {"name": "Automotive", "icon": "🚗"},
    {"name": "Other", "icon": "🏷️"},
]


class Command(BaseCommand):
    help = "Create the default product categories; existing ones are left untouched"

    def handle(self, *args, **options):
        created_count = 0
        for category_data in DEFAULT_CATEGORIES:
            category, created = Category.objects.get_or_create(
                name=category_data["name"],
                defaults={"icon": category_data["icon"]},
            )
            if created:
                created_count += 1
                self.stdout.write(f"Created category: {category.name}")

        if created_count == 0:
            self.stdout.write("No new categories to create.")

        self.stdout.write(
            self.style.SUCCESS(
                f"Categories seeded: {created_count} created, {Category.objects.count()} total"
            )
        )
