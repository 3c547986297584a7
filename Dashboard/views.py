from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import DashboardSerializer
from .services import AdminDashboardService


class AdminDashboardView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        admin = request.user

        response_data = {
            "profile": AdminDashboardService.get_profile(admin),
            "analytics": {
                "summary": AdminDashboardService.get_financial_summary(),
                "weekly_stats": AdminDashboardService.get_weekly_stats(),
                "time_slot_popularity": AdminDashboardService.get_time_slot_popularity(),
                "status_breakdown": AdminDashboardService.get_status_breakdown(),
                "top_customers": AdminDashboardService.get_top_customers(),
                "monthly_revenue": AdminDashboardService.get_monthly_revenue(),
            },
        }

        serializer = DashboardSerializer(response_data)

        return Response(
            {"status": "success", "data": serializer.data},
            status=200
        )
