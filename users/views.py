import logging

from django.contrib.auth import get_user_model
from django.db.models import Q
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import RegistrationSerializer, UserSerializer
from .services import anonymize_account

logger = logging.getLogger(__name__)

User = get_user_model()


class RegisterView(generics.CreateAPIView):
    queryset = User.objects.all()
    permission_classes = (permissions.AllowAny,)
    serializer_class = RegistrationSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if User.objects.filter(Q(username__iexact=data['username']) | Q(email__iexact=data['email'])).exists():
            return Response({"message": "User already exists"}, status=status.HTTP_400_BAD_REQUEST)

        user = serializer.save()
        logger.info("Registered %s account %s", user.role, user.id)
        return Response(
            {"message": "User registered successfully", "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class MeView(APIView):
    """
    GET: The logged-in user.
    DELETE: Anonymize the account. Applications and job offers are kept.
    """
    permission_classes = (permissions.IsAuthenticated,)

    def get(self, request):
        return Response({"user": UserSerializer(request.user).data})

    def delete(self, request):
        summary = anonymize_account(request.user)
        return Response({"message": "Account deleted", "summary": summary})
