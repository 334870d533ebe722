from rest_framework_simplejwt.views import TokenObtainPairView
from okr_app.serializers.auth_serializers import EmailLoginSerializer


class EmailLoginView(TokenObtainPairView):
    serializer_class = EmailLoginSerializer
