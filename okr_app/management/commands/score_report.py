from django.core.management.base import BaseCommand

from okr_app.models import Department
from okr_app.services.evaluation_blend import calculate_department_score_with_evaluations
from okr_app.services.score_levels import scoring_context


def _fmt(value):
    return "-" if value is None else f"{value:.2f}"


class Command(BaseCommand):
    help = "Print the automatic and blended score of every department."

    def add_arguments(self, parser):
        parser.add_argument("--department", help="Only report departments whose name contains this text.")

    def handle(self, *args, **options):
        qs = Department.objects.order_by("name")
        if options.get("department"):
            qs = qs.filter(name__icontains=options["department"])

        count = 0
        with scoring_context() as ctx:
            if ctx.is_default:
                self.stdout.write("Score levels: built-in defaults")
            for dept in qs:
                result = calculate_department_score_with_evaluations(dept, ctx)
                self.stdout.write(
                    f"{dept.name}: okr={_fmt(result.automatic_okr_score)} "
                    f"({result.automatic_okr_percentage:.1f}%) "
                    f"director={_fmt(result.director_evaluation)} "
                    f"hr={result.hr_evaluation_letter or '-'} "
                    f"final={_fmt(result.final_combined_score)} "
                    f"level={result.score_level}"
                )
                count += 1

        self.stdout.write(self.style.SUCCESS(f"Scored {count} departments."))
