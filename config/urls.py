from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/", include("Accounts.urls")),
    path("api/", include("Bookings.urls")),
    path("api/", include("Expenses.urls")),
    path("api/", include("Facility.urls")),
    path("api/", include("Dashboard.urls")),
    path("api/", include("slots.urls")),
]
