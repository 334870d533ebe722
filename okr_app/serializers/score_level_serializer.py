from rest_framework import serializers
from okr_app.models import ScoreLevel
from okr_app.services.score_levels import normalize_level_name


class ScoreLevelSerializer(serializers.ModelSerializer):
    score_level_id = serializers.UUIDField(read_only=True)
    color          = serializers.RegexField(r"^#[0-9A-Fa-f]{3,8}$")

    class Meta:
        model  = ScoreLevel
        fields = ["score_level_id", "name", "score_value", "color", "display_order"]


class ScoreLevelListSerializer(serializers.Serializer):
    """
    Whole directory replacement. Levels without a display_order keep the
    position they were sent in; values must ascend with display order.
    """
    levels = ScoreLevelSerializer(many=True)

    def validate_levels(self, levels):
        if not levels:
            raise serializers.ValidationError("At least one score level is required.")

        for position, level in enumerate(levels, start=1):
            level.setdefault("display_order", position)
        ordered = sorted(levels, key=lambda lv: lv["display_order"])

        names = [normalize_level_name(lv["name"]) for lv in ordered]
        if len(set(names)) != len(names):
            raise serializers.ValidationError("Score level names must be unique.")

        values = [lv["score_value"] for lv in ordered]
        if any(b <= a for a, b in zip(values, values[1:])):
            raise serializers.ValidationError("Score values must increase with display order.")
        return ordered
