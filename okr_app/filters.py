import django_filters as filters
from okr_app.models import Evaluation, KeyResult, Objective


class ObjectiveFilter(filters.FilterSet):
    department_id = filters.UUIDFilter(field_name="department__department_id", lookup_expr="exact")

    class Meta:
        model = Objective
        fields = ["department_id"]

class KeyResultFilter(filters.FilterSet):
    objective_id  = filters.UUIDFilter(field_name="objective__objective_id", lookup_expr="exact")
    department_id = filters.UUIDFilter(field_name="objective__department__department_id", lookup_expr="exact")
    metric_type   = filters.CharFilter(field_name="metric_type", lookup_expr="exact")  # keys e.g. LOWER_BETTER

    class Meta:
        model = KeyResult
        fields = ["objective_id", "department_id", "metric_type"]

class EvaluationFilter(filters.FilterSet):
    # target_id is resolved by EvaluationViewSet.get_queryset
    target_type    = filters.CharFilter(field_name="target_type", lookup_expr="exact")
    status         = filters.CharFilter(field_name="status", lookup_expr="exact")   # DRAFT / SUBMITTED
    evaluator_type = filters.CharFilter(field_name="evaluator_type", lookup_expr="exact")

    class Meta:
        model = Evaluation
        fields = ["target_type", "status", "evaluator_type"]
