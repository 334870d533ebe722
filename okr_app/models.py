import uuid
from django.db import models
from django.utils import timezone
from django.conf import settings

# ── Lookup / Enum helpers ────────────────────────────────────────────────

class MetricType(models.TextChoices):
    HIGHER_BETTER = "HIGHER_BETTER", "Higher is better"
    LOWER_BETTER  = "LOWER_BETTER",  "Lower is better"
    QUALITATIVE   = "QUALITATIVE",   "Qualitative"

class EvaluatorType(models.TextChoices):
    DIRECTOR       = "DIRECTOR",       "Director"
    HR             = "HR",             "HR"
    BUSINESS_BLOCK = "BUSINESS_BLOCK", "Business Block"

class EvaluationStatus(models.TextChoices):
    DRAFT     = "DRAFT",     "Draft"
    SUBMITTED = "SUBMITTED", "Submitted"

class TargetType(models.TextChoices):
    DEPARTMENT = "DEPARTMENT", "Department"
    EMPLOYEE   = "EMPLOYEE",   "Employee"


# ── OKR tree ─────────────────────────────────────────────────────────────

class Department(models.Model):
    department_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name          = models.CharField(max_length=180)
    created_at    = models.DateTimeField(default=timezone.now)
    updated_at    = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "name"]

    def __str__(self):
        return self.name


class Objective(models.Model):
    objective_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    department   = models.ForeignKey(Department, on_delete=models.CASCADE, related_name="objectives")
    name         = models.CharField(max_length=255)
    weight       = models.PositiveSmallIntegerField(null=True, blank=True)  # % share of the department, null = even split
    created_at   = models.DateTimeField(default=timezone.now)
    updated_at   = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "objective_id"]

    def __str__(self):
        return self.name


class KeyResult(models.Model):
    key_result_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    objective     = models.ForeignKey(Objective, on_delete=models.CASCADE, related_name="key_results")
    name          = models.CharField(max_length=255)
    description   = models.TextField(blank=True)
    metric_type   = models.CharField(max_length=15, choices=MetricType.choices, default=MetricType.HIGHER_BETTER)
    unit          = models.CharField(max_length=40, blank=True)
    weight        = models.PositiveSmallIntegerField(null=True, blank=True)  # informational only

    # five interpolation anchors; for LOWER_BETTER exceptional is the smallest value
    threshold_below       = models.FloatField(null=True, blank=True)
    threshold_meets       = models.FloatField(null=True, blank=True)
    threshold_good        = models.FloatField(null=True, blank=True)
    threshold_very_good   = models.FloatField(null=True, blank=True)
    threshold_exceptional = models.FloatField(null=True, blank=True)

    actual_value  = models.CharField(max_length=64, blank=True, default="")  # number, or A-E when qualitative
    created_at    = models.DateTimeField(default=timezone.now)
    updated_at    = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "key_result_id"]

    def __str__(self):
        return self.name

    @property
    def thresholds(self):
        return (
            self.threshold_below,
            self.threshold_meets,
            self.threshold_good,
            self.threshold_very_good,
            self.threshold_exceptional,
        )


# ── Score level directory ───────────────────────────────────────────────

class ScoreLevel(models.Model):
    score_level_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name           = models.CharField(max_length=60)
    score_value    = models.FloatField()
    color          = models.CharField(max_length=20)
    display_order  = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["display_order"]

    def __str__(self):
        return f"{self.name} ({self.score_value})"


# ── Human evaluations ───────────────────────────────────────────────────

class Evaluation(models.Model):
    evaluation_id  = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    evaluator      = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="evaluations")
    evaluator_type = models.CharField(max_length=15, choices=EvaluatorType.choices)
    target_type    = models.CharField(max_length=12, choices=TargetType.choices, default=TargetType.DEPARTMENT)
    target_id      = models.UUIDField()
    numeric_rating = models.FloatField(null=True, blank=True)
    letter_rating  = models.CharField(max_length=1, blank=True, null=True)
    comment        = models.TextField(blank=True, default="")
    status         = models.CharField(max_length=10, choices=EvaluationStatus.choices, default=EvaluationStatus.DRAFT)
    created_at     = models.DateTimeField(default=timezone.now)
    updated_at     = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["evaluator", "target_type", "target_id", "evaluator_type"],
                name="uniq_evaluation_per_evaluator_target_type",
            )
        ]
        indexes = [
            models.Index(fields=["target_type", "target_id", "status"], name="eval_target_status_idx"),
        ]

    def __str__(self):
        return f"{self.evaluator_type} {self.target_type}:{self.target_id} ({self.status})"
