from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserCreationForm as BaseUserCreationForm
from django.db.models import Count
from django.forms import ModelForm

from .constants import Role
from .models import User


# ----------------------------------
# ACCOUNT FORMS
# ----------------------------------
class AccountCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ("email", "name", "role")


class AccountChangeForm(ModelForm):
    class Meta:
        model = User
        fields = "__all__"


# ----------------------------------
# DASHBOARD ACCOUNTS (OWNER + SUB-ADMINS)
# ----------------------------------
@admin.register(User)
class AccountAdmin(BaseUserAdmin):
    form = AccountChangeForm
    add_form = AccountCreationForm
    model = User

    list_display = ("email", "name", "role", "is_active", "booking_count", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("email", "name")
    ordering = ("-created_at",)
    actions = ("deactivate_subadmins",)

    fieldsets = (
        ("Login", {"fields": ("email", "password", "last_login")}),
        ("Profile", {"fields": ("name", "role", "created_at")}),
        ("Django admin access", {
            "classes": ("collapse",),
            "fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions"),
        }),
    )
    readonly_fields = ("created_at", "last_login")

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "name", "role", "password1", "password2"),
        }),
    )

    filter_horizontal = ("groups", "user_permissions")

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_booking_count=Count("bookings"))

    @admin.display(description="Bookings", ordering="_booking_count")
    def booking_count(self, obj):
        return obj._booking_count

    @admin.action(description="Deactivate selected sub-admins")
    def deactivate_subadmins(self, request, queryset):
        updated = queryset.filter(role=Role.SUBADMIN).update(is_active=False)
        self.message_user(request, f"{updated} sub-admin(s) deactivated")
