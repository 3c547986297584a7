from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from slots.serializers import SlotQuerySerializer
from slots.services import build_slots_response


class SlotListView(APIView):
    """
    Public API
    Two-hour availability blocks for the selected day and the next
    """
    permission_classes = [AllowAny]

    def get(self, request):
        query = SlotQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        data = build_slots_response(query.validated_data["date"])

        return Response({
            "status": "success",
            "data": data
        })
