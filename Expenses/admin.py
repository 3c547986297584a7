from django.contrib import admin

from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "title",
        "category",
        "amount",
        "date",
        "created_by",
    )

    list_filter = ("category", "date")
    search_fields = ("title", "description")
    date_hierarchy = "date"
    readonly_fields = ("created_at", "updated_at")
