from rest_framework import viewsets, filters
from django_filters.rest_framework import DjangoFilterBackend

from okr_app.filters import ObjectiveFilter
from okr_app.models import Objective
from okr_app.permissions import ReadOnlyOrOkrEditor
from okr_app.serializers.objective_serializer import ObjectiveSerializer
from okr_app.views.base import ScoringContextMixin


class ObjectiveViewSet(ScoringContextMixin, viewsets.ModelViewSet):
    queryset           = Objective.objects.select_related("department").prefetch_related("key_results")
    serializer_class   = ObjectiveSerializer
    permission_classes = [ReadOnlyOrOkrEditor]
    lookup_field       = "objective_id"

    filter_backends  = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class  = ObjectiveFilter
    search_fields    = ["name"]
    ordering_fields  = ["created_at", "updated_at", "weight"]
