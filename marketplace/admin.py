from django.contrib import admin
from django.utils.html import format_html

from .models import CartItem, Category, Order, Product, Review


class ReviewInline(admin.StackedInline):
    model = Review
    extra = 0
    can_delete = False
    readonly_fields = ("buyer", "seller", "rating", "comment", "created_at")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "icon", "product_count", "created_at")
    search_fields = ("name",)
    readonly_fields = ("created_at",)

    def product_count(self, obj):
        return obj.products.filter(is_sold=False).count()

    product_count.short_description = "Unsold Products"


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "seller", "category", "price", "stock", "is_sold", "condition", "view_count", "created_at")
    list_filter = ("is_sold", "condition", "category", "created_at")
    search_fields = ("name", "description", "seller__email", "seller__name")
    # Stock and sold flag belong to the inventory ledger
    readonly_fields = ("id", "stock", "is_sold", "view_count", "created_at", "updated_at", "image_preview")

    fieldsets = (
        ("Basic Information", {"fields": ("id", "name", "description", "condition", "location")}),
        ("Seller & Category", {"fields": ("seller", "category")}),
        ("Pricing & Inventory", {"fields": ("price", "stock", "is_sold")}),
        ("Images", {"fields": ("images", "image_preview")}),
        ("Metrics", {"fields": ("view_count",), "classes": ("collapse",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("seller", "category")

    def image_preview(self, obj):
        if obj.images:
            return format_html('<img src="{}" width="100" height="100" />', obj.images[0])
        return "No Image"

    image_preview.short_description = "Preview"


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "buyer", "seller", "product", "quantity", "total_price", "status", "created_at")
    list_filter = ("status", "payment_method", "created_at")
    search_fields = ("id", "buyer__email", "seller__email", "product__name")
    # Orders change only through the status workflow
    readonly_fields = (
        "id",
        "buyer",
        "seller",
        "product",
        "quantity",
        "total_price",
        "payment_method",
        "status",
        "created_at",
        "updated_at",
    )

    inlines = [ReviewInline]

    fieldsets = (
        ("Order Information", {"fields": ("id", "buyer", "seller", "product", "status")}),
        ("Pricing", {"fields": ("quantity", "total_price", "payment_method")}),
        ("Shipping", {"fields": ("shipping_address", "notes")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("buyer", "seller", "product")


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("order", "buyer", "seller", "rating", "created_at")
    list_filter = ("rating", "created_at")
    search_fields = ("buyer__email", "seller__email", "comment")
    readonly_fields = ("order", "buyer", "seller", "rating", "created_at")


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ("user", "product", "quantity", "total_price", "added_at")
    list_filter = ("added_at",)
    search_fields = ("user__email", "product__name")
    readonly_fields = ("total_price", "added_at")
