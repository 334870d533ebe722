from django.contrib.auth import get_user_model
from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from accounts.serializers.user_serializer import UserSerializer
from okr_app.permissions import IsAdmin

User = get_user_model()


class UserViewSet(viewsets.ModelViewSet):
    """
    • ADMIN            → full CRUD over users and their roles.
    • everybody else   → may only read their own account (``/users/me/``).
    """
    serializer_class = UserSerializer
    queryset = User.objects.all().order_by("username")
    lookup_field = "user_id"
    filter_backends = [filters.SearchFilter]
    search_fields = ["username", "email", "name"]

    def get_permissions(self):
        if self.action == "me":
            return [IsAuthenticated()]
        return [IsAdmin()]

    @action(detail=False, methods=["get"], url_path="me")
    def me(self, request):
        return Response(self.get_serializer(request.user).data)
