# accounts/views.py
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from .permissions import IsOwner
from .serializers import LoginSerializer, ProfileSerializer, SubAdminCreateSerializer
from .services import create_subadmin, list_subadmins, remove_subadmin


class LoginView(TokenObtainPairView):
    permission_classes = [AllowAny]
    serializer_class = LoginSerializer


class ProfileView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = ProfileSerializer(request.user)
        return Response({
            "status": "success",
            "data": serializer.data
        }, status=status.HTTP_200_OK)


class SubAdminView(APIView):
    """
    Owner-only management of sub-admin accounts
    """
    permission_classes = [IsOwner]

    def get(self, request):
        serializer = ProfileSerializer(list_subadmins(), many=True)
        return Response({"subadmins": serializer.data})

    def post(self, request):
        serializer = SubAdminCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = create_subadmin(**serializer.validated_data)

        return Response(
            ProfileSerializer(user).data,
            status=status.HTTP_201_CREATED
        )

    def delete(self, request):
        user_id = request.query_params.get("id")

        if not user_id or not user_id.isdigit():
            return Response(
                {"error": "Missing user ID"},
                status=status.HTTP_400_BAD_REQUEST
            )

        if not remove_subadmin(int(user_id)):
            raise NotFound("User not found or not a sub-admin")

        return Response({"message": "Sub-admin removed successfully"})
