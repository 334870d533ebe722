import logging

from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from okr_app.filters import KeyResultFilter
from okr_app.models import KeyResult
from okr_app.permissions import ReadOnlyOrOkrEditor
from okr_app.serializers.key_result_serializer import ActualValueSerializer, KeyResultSerializer
from okr_app.views.base import ScoringContextMixin

logger = logging.getLogger(__name__)


class KeyResultViewSet(ScoringContextMixin, viewsets.ModelViewSet):
    queryset           = KeyResult.objects.select_related("objective")
    serializer_class   = KeyResultSerializer
    permission_classes = [ReadOnlyOrOkrEditor]
    lookup_field       = "key_result_id"

    filter_backends  = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class  = KeyResultFilter
    search_fields    = ["name", "description"]
    ordering_fields  = ["created_at", "updated_at", "weight"]

    @action(detail=True, methods=["put", "patch"], url_path="actual-value")
    def actual_value(self, request, key_result_id=None):
        """Record a new measurement without touching the rest of the key result."""
        kr = self.get_object()
        payload = ActualValueSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        kr.actual_value = payload.validated_data["actual_value"].strip()
        kr.save(update_fields=["actual_value", "updated_at"])
        logger.info("Key result %s actual value set to %r by %s", kr.pk, kr.actual_value, request.user.pk)
        return Response(self.get_serializer(kr).data)
