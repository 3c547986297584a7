from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Expense
from .serializers import ExpenseListQuerySerializer, ExpenseSerializer
from .services import can_delete_expense, delete_expense, list_expenses


class ExpenseListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = ExpenseListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        expenses, pagination = list_expenses(**query.validated_data)

        return Response({
            "expenses": ExpenseSerializer(expenses, many=True).data,
            "pagination": pagination,
        })

    def post(self, request):
        serializer = ExpenseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save(created_by=request.user)

        return Response(serializer.data, status=status.HTTP_201_CREATED)


class ExpenseDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, expense_id):
        expense = get_object_or_404(Expense, id=expense_id)
        return Response(ExpenseSerializer(expense).data)

    def patch(self, request, expense_id):
        expense = get_object_or_404(Expense, id=expense_id)

        serializer = ExpenseSerializer(expense, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        return Response(serializer.data)

    def delete(self, request, expense_id):
        expense = get_object_or_404(Expense, id=expense_id)

        if not can_delete_expense(request.user, expense):
            raise PermissionDenied("Forbidden")

        delete_expense(expense, request.user)
        return Response({"message": "Expense deleted successfully"})
