from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db.models import Prefetch

from okr_app.models import Department, Objective
from okr_app.permissions import ReadOnlyOrAdmin
from okr_app.serializers.department_serializer import DepartmentSerializer
from okr_app.serializers.score_serializer import DepartmentScoreResultSerializer
from okr_app.services.evaluation_blend import calculate_department_score_with_evaluations
from okr_app.views.base import ScoringContextMixin


class DepartmentViewSet(ScoringContextMixin, viewsets.ModelViewSet):
    """
    • everybody authenticated → read departments with their scored OKR tree.
    • ADMIN                   → create / rename / delete departments.

    GET /departments/{id}/scores/ → automatic score blended with the
    submitted Director and HR evaluations.
    """
    queryset = Department.objects.prefetch_related(
        Prefetch("objectives", queryset=Objective.objects.prefetch_related("key_results")),
    )
    serializer_class   = DepartmentSerializer
    permission_classes = [ReadOnlyOrAdmin]
    lookup_field       = "department_id"
    filter_backends    = [filters.SearchFilter, filters.OrderingFilter]
    search_fields      = ["name"]
    ordering_fields    = ["name", "created_at"]

    @action(detail=True, methods=["get"], url_path="scores")
    def scores(self, request, department_id=None):
        department = self.get_object()
        result = calculate_department_score_with_evaluations(department, self.scoring_ctx)
        return Response(DepartmentScoreResultSerializer(result).data)
