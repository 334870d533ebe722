from rest_framework import serializers
from okr_app.models import Department
from okr_app.serializers.objective_serializer import ObjectiveSerializer
from okr_app.serializers.score_serializer import ScoreResultSerializer
from okr_app.services.objective_math import calculate_department_score


class DepartmentSerializer(serializers.ModelSerializer):
    """
    • Nested objectives and key results (read-only).
    • ``score`` is the automatic OKR score; blended scores live under /scores/.
    """
    department_id = serializers.UUIDField(read_only=True)
    objectives    = ObjectiveSerializer(many=True, read_only=True)
    score         = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model  = Department
        fields = ["department_id", "name", "score", "objectives", "created_at", "updated_at"]
        read_only_fields = ("department_id", "created_at", "updated_at")

    def get_score(self, obj):
        result = calculate_department_score(obj.objectives.all(), self.context.get("scoring_context"))
        return ScoreResultSerializer(result).data
