from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.models import Role
from okr_app import models as m

User = get_user_model()

DEMO_PASSWORD = "okr-demo-2024"

DEMO_USERS = [
    # username,      name,                role
    ("admin",        "Olivia Admin",      Role.ADMIN),
    ("director",     "Daniel Director",   Role.DIRECTOR),
    ("hr",           "Hannah Reyes",      Role.HR),
    ("business",     "Bruno Block",       Role.BUSINESS_BLOCK),
    ("pmo_leader",   "Priya Leader",      Role.DEPARTMENT_LEADER),
    ("employee",     "Eric Employee",     Role.EMPLOYEE),
]

# department -> [(objective, weight, [key results])]
# key result: (name, metric_type, unit, thresholds below..exceptional, actual)
DEMO_OKRS = {
    "PMO - Project Management Office": [
        ("Deliver the project portfolio on time", 60, [
            ("Projects closed on schedule", m.MetricType.HIGHER_BETTER, "%",
             (60, 75, 85, 92, 98), "88"),
            ("Average schedule slip", m.MetricType.LOWER_BETTER, "days",
             (30, 20, 12, 7, 3), "9"),
        ]),
        ("Raise delivery quality", 40, [
            ("Steering committee assessment", m.MetricType.QUALITATIVE, "",
             (None, None, None, None, None), "B"),
            ("Post-release defects per project", m.MetricType.LOWER_BETTER, "defects",
             (20, 12, 8, 5, 2), "11"),
        ]),
    ],
    "Customer Service": [
        ("Keep customers happy", None, [
            ("Net promoter score", m.MetricType.HIGHER_BETTER, "pts",
             (10, 25, 35, 45, 60), "41"),
            ("First response time", m.MetricType.LOWER_BETTER, "min",
             (120, 60, 30, 15, 5), "18"),
        ]),
        ("Grow self-service", None, [
            ("Tickets solved by the help centre", m.MetricType.HIGHER_BETTER, "%",
             (10, 20, 30, 40, 50), "27"),
        ]),
    ],
}


class Command(BaseCommand):
    help = "Seed the database with demo departments, OKRs and one user per role."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete departments, evaluations and non-superuser accounts first.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            m.Evaluation.objects.all().delete()
            m.Department.objects.all().delete()
            User.objects.filter(is_superuser=False).delete()
            self.stdout.write("Existing OKR data removed.")

        for username, name, role in DEMO_USERS:
            user, created = User.objects.get_or_create(
                username=username,
                defaults=dict(
                    name=name,
                    email=f"{username}@okr-tracker.local",
                    role=role,
                ),
            )
            if created:
                user.set_password(DEMO_PASSWORD)
                user.save(update_fields=["password"])

        kr_count = 0
        for dept_name, objectives in DEMO_OKRS.items():
            dept, _ = m.Department.objects.get_or_create(name=dept_name)
            for obj_name, weight, key_results in objectives:
                obj, _ = m.Objective.objects.get_or_create(
                    department=dept,
                    name=obj_name,
                    defaults=dict(weight=weight),
                )
                for kr_name, metric_type, unit, thresholds, actual in key_results:
                    below, meets, good, very_good, exceptional = thresholds
                    _, created = m.KeyResult.objects.get_or_create(
                        objective=obj,
                        name=kr_name,
                        defaults=dict(
                            metric_type=metric_type,
                            unit=unit,
                            threshold_below=below,
                            threshold_meets=meets,
                            threshold_good=good,
                            threshold_very_good=very_good,
                            threshold_exceptional=exceptional,
                            actual_value=actual,
                        ),
                    )
                    kr_count += created

        self.stdout.write(self.style.SUCCESS(
            f"✅ Demo data ready: {len(DEMO_OKRS)} departments, {kr_count} new key results, "
            f"{len(DEMO_USERS)} users (password '{DEMO_PASSWORD}')."
        ))
