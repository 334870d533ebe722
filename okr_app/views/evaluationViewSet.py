import logging

from rest_framework import mixins, status, viewsets, filters
from rest_framework.decorators import action
from rest_framework.exceptions import APIException
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from okr_app.filters import EvaluationFilter
from okr_app.models import Evaluation
from okr_app.permissions import IsEvaluator
from okr_app.serializers.evaluation_serializer import (
    EvaluationCreateSerializer,
    EvaluationSerializer,
    EvaluationTargetQuerySerializer,
)
from okr_app.services import evaluation_lifecycle

logger = logging.getLogger(__name__)


class EvaluationViewSet(mixins.ListModelMixin,
                        mixins.RetrieveModelMixin,
                        viewsets.GenericViewSet):
    """
    Permissions
    -----------
    • any authenticated user        → list / retrieve (filter by target_type,
                                      target_id, status, evaluator_type).
    • ADMIN / DIRECTOR / HR / BB    → create, submit and delete their own drafts;
                                      which evaluator type a role may file is
                                      decided by the lifecycle service.
    """
    queryset         = Evaluation.objects.select_related("evaluator")
    serializer_class = EvaluationSerializer
    lookup_field     = "evaluation_id"

    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = EvaluationFilter
    ordering_fields = ["created_at", "updated_at"]

    def get_permissions(self):
        if self.action in ("create", "submit", "destroy"):
            return [IsEvaluator()]
        return [IsAuthenticated()]

    def get_queryset(self):
        # one target's evaluations come from the lifecycle service
        if self.action == "list" and "target_id" in self.request.query_params:
            query = EvaluationTargetQuerySerializer(data=self.request.query_params)
            query.is_valid(raise_exception=True)
            return evaluation_lifecycle.evaluations_for_target(**query.validated_data)
        return super().get_queryset()

    def _run(self, operation, *args, **kwargs):
        try:
            return operation(*args, **kwargs)
        except APIException as exc:
            logger.warning("%s rejected for %s: %s", operation.__name__, self.request.user.pk, exc.detail)
            raise

    def create(self, request, *args, **kwargs):
        payload = EvaluationCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        evaluation = self._run(
            evaluation_lifecycle.create_evaluation,
            request.user.pk,
            **payload.validated_data,
        )
        return Response(self.get_serializer(evaluation).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, evaluation_id=None):
        self._run(evaluation_lifecycle.delete_evaluation, evaluation_id, request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="submit")
    def submit(self, request, evaluation_id=None):
        evaluation = self._run(evaluation_lifecycle.submit_evaluation, evaluation_id, request.user.pk)
        return Response(self.get_serializer(evaluation).data)

    @action(detail=False, methods=["get"], url_path="mine")
    def mine(self, request):
        qs = evaluation_lifecycle.evaluations_by_evaluator(
            request.user.pk,
            status=request.query_params.get("status"),
        )
        return Response(self.get_serializer(qs, many=True).data)
