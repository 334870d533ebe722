from rest_framework import serializers
from okr_app.models import Evaluation, EvaluationStatus, EvaluatorType, TargetType
from okr_app.services.evaluation_blend import numeric_to_stars
from okr_app.utils import LabelChoiceField


class EvaluationCreateSerializer(serializers.Serializer):
    """
    Request body of POST /evaluations/. Only shape is checked here, the
    business rules (roles, duplicates, rating ranges) live in
    services.evaluation_lifecycle.
    """
    evaluator_type = LabelChoiceField(choices=EvaluatorType.choices)
    target_type    = LabelChoiceField(choices=TargetType.choices, required=False, default=TargetType.DEPARTMENT)
    target_id      = serializers.UUIDField()
    numeric_rating = serializers.FloatField(required=False, allow_null=True)
    star_rating    = serializers.IntegerField(required=False, allow_null=True)
    letter_rating  = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=1)
    comment        = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_letter_rating(self, value):
        return value or None


class EvaluationSerializer(serializers.ModelSerializer):
    evaluation_id  = serializers.UUIDField(read_only=True)
    evaluator_id   = serializers.UUIDField(source="evaluator.user_id", read_only=True)
    evaluator_name = serializers.SerializerMethodField()
    evaluator_type = LabelChoiceField(choices=EvaluatorType.choices, read_only=True)
    target_type    = LabelChoiceField(choices=TargetType.choices, read_only=True)
    status         = LabelChoiceField(choices=EvaluationStatus.choices, read_only=True)
    star_rating    = serializers.SerializerMethodField()

    class Meta:
        model  = Evaluation
        fields = [
            "evaluation_id",
            "evaluator_id",
            "evaluator_name",
            "evaluator_type",
            "target_type",
            "target_id",
            "numeric_rating",
            "star_rating",
            "letter_rating",
            "comment",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_evaluator_name(self, obj):
        user = obj.evaluator
        return user.name or user.get_full_name() or user.username

    def get_star_rating(self, obj):
        if obj.evaluator_type != EvaluatorType.DIRECTOR:
            return None
        return numeric_to_stars(obj.numeric_rating)


class EvaluationTargetQuerySerializer(serializers.Serializer):
    """Query params of GET /evaluations/?target_id=...; target_type defaults to DEPARTMENT."""
    target_type = LabelChoiceField(choices=TargetType.choices, required=False, default=TargetType.DEPARTMENT)
    target_id   = serializers.UUIDField()
    status      = LabelChoiceField(choices=EvaluationStatus.choices, required=False, default=None, allow_null=True)
