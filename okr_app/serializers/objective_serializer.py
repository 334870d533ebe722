from rest_framework import serializers
from okr_app.models import Department, Objective
from okr_app.serializers.key_result_serializer import KeyResultSerializer
from okr_app.serializers.score_serializer import ScoreResultSerializer
from okr_app.services.objective_math import calculate_objective_score


class ObjectiveSerializer(serializers.ModelSerializer):
    objective_id  = serializers.UUIDField(read_only=True)
    department_id = serializers.PrimaryKeyRelatedField(
        source="department",
        queryset=Department.objects.all(),
    )
    weight        = serializers.IntegerField(min_value=0, max_value=100, allow_null=True, required=False)
    key_results   = KeyResultSerializer(many=True, read_only=True)
    score         = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model  = Objective
        fields = [
            "objective_id",
            "department_id",
            "name",
            "weight",
            "score",
            "key_results",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("objective_id", "created_at", "updated_at")

    def get_score(self, obj):
        result = calculate_objective_score(obj.key_results.all(), self.context.get("scoring_context"))
        return ScoreResultSerializer(result).data
