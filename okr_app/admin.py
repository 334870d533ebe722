from django.contrib import admin
from . import models as m


# ───────────────────────────────
#  Inline helpers
# ───────────────────────────────
class ObjectiveInline(admin.TabularInline):
    model = m.Objective
    extra = 0
    fields = ("name", "weight")


class KeyResultInline(admin.StackedInline):
    model = m.KeyResult
    extra = 0
    fields = (
        "name", "metric_type", "unit", "weight", "actual_value",
        ("threshold_below", "threshold_meets", "threshold_good",
         "threshold_very_good", "threshold_exceptional"),
    )


# ───────────────────────────────
#  OKR tree
# ───────────────────────────────
@admin.register(m.Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display  = ("name", "created_at")
    search_fields = ("name",)
    inlines       = [ObjectiveInline]


@admin.register(m.Objective)
class ObjectiveAdmin(admin.ModelAdmin):
    list_display  = ("name", "department", "weight")
    list_filter   = ("department",)
    search_fields = ("name", "department__name")
    inlines       = [KeyResultInline]


@admin.register(m.KeyResult)
class KeyResultAdmin(admin.ModelAdmin):
    list_display  = ("name", "objective", "metric_type", "actual_value")
    list_filter   = ("metric_type",)
    search_fields = ("name", "objective__name")


# ───────────────────────────────
#  Scoring / evaluations
# ───────────────────────────────
@admin.register(m.ScoreLevel)
class ScoreLevelAdmin(admin.ModelAdmin):
    list_display = ("display_order", "name", "score_value", "color")
    ordering     = ("display_order",)


@admin.register(m.Evaluation)
class EvaluationAdmin(admin.ModelAdmin):
    list_display  = ("evaluator", "evaluator_type", "target_type", "target_id", "status", "created_at")
    list_filter   = ("evaluator_type", "target_type", "status")
    search_fields = ("evaluator__username", "evaluator__email", "comment")
    raw_id_fields = ("evaluator",)
