from rest_framework import serializers


class ScoreResultSerializer(serializers.Serializer):
    score      = serializers.FloatField()
    level      = serializers.CharField()
    color      = serializers.CharField()
    percentage = serializers.FloatField()


class DepartmentScoreResultSerializer(serializers.Serializer):
    """Read-only rendering of DepartmentScoreResult."""
    automatic_okr_score           = serializers.FloatField()
    automatic_okr_percentage      = serializers.FloatField()
    director_evaluation           = serializers.FloatField(allow_null=True)
    director_stars                = serializers.IntegerField(allow_null=True)
    director_comment              = serializers.CharField(allow_null=True)
    hr_evaluation_letter          = serializers.CharField(allow_null=True)
    hr_evaluation_numeric         = serializers.FloatField(allow_null=True)
    hr_comment                    = serializers.CharField(allow_null=True)
    business_block_evaluation     = serializers.FloatField(allow_null=True)
    business_block_comment        = serializers.CharField(allow_null=True)
    final_combined_score          = serializers.FloatField(allow_null=True)
    final_percentage              = serializers.FloatField(allow_null=True)
    score_level                   = serializers.CharField()
    color                         = serializers.CharField()
    has_director_evaluation       = serializers.BooleanField()
    has_hr_evaluation             = serializers.BooleanField()
    has_business_block_evaluation = serializers.BooleanField()
