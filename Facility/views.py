from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import FacilitySettingsSerializer, SportNameSerializer, TurfInfoSerializer
from .services import add_sport, get_settings, list_sport_names, remove_sport, update_settings


class FacilitySettingsView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = FacilitySettingsSerializer

    def get(self, request):
        return Response(self.serializer_class(get_settings()).data)

    def patch(self, request):
        serializer = self.serializer_class(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        settings_row = update_settings(serializer.validated_data)

        return Response({
            "success": True,
            **self.serializer_class(settings_row).data,
        })


class TurfInfoView(FacilitySettingsView):
    serializer_class = TurfInfoSerializer


class SportView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"sports": list_sport_names()})

    def post(self, request):
        serializer = SportNameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sport = add_sport(serializer.validated_data["name"])
        return Response({"name": sport.name}, status=status.HTTP_201_CREATED)

    def delete(self, request):
        serializer = SportNameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if not remove_sport(serializer.validated_data["name"]):
            raise NotFound("Sport not found")

        return Response({"success": True})
