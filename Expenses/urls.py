from django.urls import path

from .views import ExpenseDetailView, ExpenseListCreateView

urlpatterns = [
    path("expenses/", ExpenseListCreateView.as_view(), name="expense-list"),
    path("expenses/<int:expense_id>/", ExpenseDetailView.as_view(), name="expense-detail"),
]
