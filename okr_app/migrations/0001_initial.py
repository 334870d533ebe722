import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Department",
            fields=[
                ("department_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=180)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["created_at", "name"],
            },
        ),
        migrations.CreateModel(
            name="ScoreLevel",
            fields=[
                ("score_level_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=60)),
                ("score_value", models.FloatField()),
                ("color", models.CharField(max_length=20)),
                ("display_order", models.PositiveSmallIntegerField(default=0)),
            ],
            options={
                "ordering": ["display_order"],
            },
        ),
        migrations.CreateModel(
            name="Objective",
            fields=[
                ("objective_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("weight", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("department", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="objectives", to="okr_app.department")),
            ],
            options={
                "ordering": ["created_at", "objective_id"],
            },
        ),
        migrations.CreateModel(
            name="KeyResult",
            fields=[
                ("key_result_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("metric_type", models.CharField(choices=[("HIGHER_BETTER", "Higher is better"), ("LOWER_BETTER", "Lower is better"), ("QUALITATIVE", "Qualitative")], default="HIGHER_BETTER", max_length=15)),
                ("unit", models.CharField(blank=True, max_length=40)),
                ("weight", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("threshold_below", models.FloatField(blank=True, null=True)),
                ("threshold_meets", models.FloatField(blank=True, null=True)),
                ("threshold_good", models.FloatField(blank=True, null=True)),
                ("threshold_very_good", models.FloatField(blank=True, null=True)),
                ("threshold_exceptional", models.FloatField(blank=True, null=True)),
                ("actual_value", models.CharField(blank=True, default="", max_length=64)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("objective", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="key_results", to="okr_app.objective")),
            ],
            options={
                "ordering": ["created_at", "key_result_id"],
            },
        ),
        migrations.CreateModel(
            name="Evaluation",
            fields=[
                ("evaluation_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("evaluator_type", models.CharField(choices=[("DIRECTOR", "Director"), ("HR", "HR"), ("BUSINESS_BLOCK", "Business Block")], max_length=15)),
                ("target_type", models.CharField(choices=[("DEPARTMENT", "Department"), ("EMPLOYEE", "Employee")], default="DEPARTMENT", max_length=12)),
                ("target_id", models.UUIDField()),
                ("numeric_rating", models.FloatField(blank=True, null=True)),
                ("letter_rating", models.CharField(blank=True, max_length=1, null=True)),
                ("comment", models.TextField(blank=True, default="")),
                ("status", models.CharField(choices=[("DRAFT", "Draft"), ("SUBMITTED", "Submitted")], default="DRAFT", max_length=10)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("evaluator", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="evaluations", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [models.Index(fields=["target_type", "target_id", "status"], name="eval_target_status_idx")],
                "constraints": [models.UniqueConstraint(fields=("evaluator", "target_type", "target_id", "evaluator_type"), name="uniq_evaluation_per_evaluator_target_type")],
            },
        ),
    ]
