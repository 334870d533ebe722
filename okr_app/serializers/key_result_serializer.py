from rest_framework import serializers
from okr_app.models import KeyResult, MetricType, Objective
from okr_app.serializers.score_serializer import ScoreResultSerializer
from okr_app.services.key_result_math import calculate_key_result_score
from okr_app.utils import LabelChoiceField


class ThresholdSerializer(serializers.Serializer):
    """Flattens the five threshold columns into one ``thresholds`` object."""
    below       = serializers.FloatField(source="threshold_below", allow_null=True, required=False)
    meets       = serializers.FloatField(source="threshold_meets", allow_null=True, required=False)
    good        = serializers.FloatField(source="threshold_good", allow_null=True, required=False)
    very_good   = serializers.FloatField(source="threshold_very_good", allow_null=True, required=False)
    exceptional = serializers.FloatField(source="threshold_exceptional", allow_null=True, required=False)


THRESHOLD_FIELDS = (
    "threshold_below",
    "threshold_meets",
    "threshold_good",
    "threshold_very_good",
    "threshold_exceptional",
)


class KeyResultSerializer(serializers.ModelSerializer):
    key_result_id = serializers.UUIDField(read_only=True)
    objective_id  = serializers.PrimaryKeyRelatedField(
        source="objective",
        queryset=Objective.objects.all(),
    )
    metric_type   = LabelChoiceField(choices=MetricType.choices, required=False)
    thresholds    = ThresholdSerializer(source="*", required=False)
    actual_value  = serializers.CharField(max_length=64, allow_blank=True, allow_null=True, required=False)
    score         = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model  = KeyResult
        fields = [
            "key_result_id",
            "objective_id",
            "name",
            "description",
            "metric_type",
            "unit",
            "weight",
            "thresholds",
            "actual_value",
            "score",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("key_result_id", "created_at", "updated_at")

    def validate_actual_value(self, value):
        return "" if value is None else value.strip()

    def validate(self, attrs):
        metric_type = attrs.get("metric_type") or getattr(self.instance, "metric_type", MetricType.HIGHER_BETTER)
        if metric_type != MetricType.QUALITATIVE:
            missing = [
                name.replace("threshold_", "")
                for name in THRESHOLD_FIELDS
                if attrs.get(name, getattr(self.instance, name, None)) is None
            ]
            if missing:
                raise serializers.ValidationError(
                    {"thresholds": f"Quantitative key results need every threshold; missing: {', '.join(missing)}"}
                )
        return attrs

    def get_score(self, obj):
        result = calculate_key_result_score(obj, self.context.get("scoring_context"))
        return ScoreResultSerializer(result).data


class ActualValueSerializer(serializers.Serializer):
    actual_value = serializers.CharField(max_length=64, allow_blank=True)
