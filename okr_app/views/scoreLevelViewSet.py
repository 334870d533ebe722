import logging

from django.db import transaction
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from okr_app.models import ScoreLevel
from okr_app.permissions import IsAdmin
from okr_app.serializers.score_level_serializer import ScoreLevelListSerializer, ScoreLevelSerializer
from okr_app.services.score_levels import DEFAULT_BANDS, ScoringContext

logger = logging.getLogger(__name__)


class ScoreLevelViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    GET  /score-levels/        → configured levels, or the built-in defaults
                                  when the directory is empty.
    PUT  /score-levels/bulk/   → replace the whole directory (ADMIN).
    POST /score-levels/reset/  → empty the directory so defaults apply (ADMIN).
    """
    queryset         = ScoreLevel.objects.all()
    serializer_class = ScoreLevelSerializer
    pagination_class = None

    def get_permissions(self):
        if self.action == "list":
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsAdmin()]

    def list(self, request, *args, **kwargs):
        ctx = ScoringContext.load()
        if ctx.is_default:
            data = [
                {
                    "score_level_id": None,
                    "name": band.name,
                    "score_value": band.score_value,
                    "color": band.color,
                    "display_order": band.display_order,
                }
                for band in DEFAULT_BANDS
            ]
            return Response({"is_default": True, "levels": data})
        levels = self.get_serializer(self.get_queryset(), many=True).data
        return Response({"is_default": False, "levels": levels})

    @action(detail=False, methods=["put"], url_path="bulk")
    def bulk(self, request):
        payload = ScoreLevelListSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        levels = payload.validated_data["levels"]

        with transaction.atomic():
            ScoreLevel.objects.all().delete()
            ScoreLevel.objects.bulk_create(ScoreLevel(**lv) for lv in levels)

        logger.info("Score level directory replaced by %s (%d levels)", request.user.pk, len(levels))
        data = self.get_serializer(ScoreLevel.objects.all(), many=True).data
        return Response({"is_default": False, "levels": data})

    @action(detail=False, methods=["post"], url_path="reset")
    def reset(self, request):
        deleted, _ = ScoreLevel.objects.all().delete()
        logger.info("Score level directory reset by %s (%d levels removed)", request.user.pk, deleted)
        return Response(status=status.HTTP_204_NO_CONTENT)
