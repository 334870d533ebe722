import pytest
from uuid import uuid4
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from okr_app.exceptions import Conflict
from okr_app.models import Evaluation, EvaluationStatus
from okr_app.services import evaluation_lifecycle
from okr_app.services.evaluation_lifecycle import (
    create_evaluation,
    delete_evaluation,
    evaluations_by_evaluator,
    evaluations_for_target,
    stars_to_numeric,
    submit_evaluation,
)


class TestStars:
    @pytest.mark.parametrize("stars, numeric", [(1, 4.25), (2, 4.4375), (3, 4.625), (5, 5.0)])
    def test_stars_to_numeric(self, stars, numeric):
        assert stars_to_numeric(stars) == numeric

    @pytest.mark.parametrize("stars", [0, 6, -1])
    def test_out_of_range(self, stars):
        with pytest.raises(ValidationError):
            stars_to_numeric(stars)


@pytest.mark.django_db
class TestCreateEvaluation:
    def test_director_with_stars(self, create_user, create_department):
        director = create_user(role="DIRECTOR")
        dept = create_department()

        ev = create_evaluation(director.pk, evaluator_type="DIRECTOR", target_type="DEPARTMENT",
                               target_id=dept.pk, star_rating=3, comment="solid")
        assert ev.numeric_rating == 4.625
        assert ev.status == EvaluationStatus.DRAFT
        assert ev.comment == "solid"

    def test_hr_letter(self, create_user, create_department):
        hr = create_user(role="HR")
        ev = create_evaluation(hr.pk, evaluator_type="HR", target_type="DEPARTMENT",
                               target_id=create_department().pk, letter_rating="B")
        assert ev.letter_rating == "B"
        assert ev.numeric_rating is None

    def test_admin_may_file_any_type(self, create_user, create_department):
        admin = create_user(role="ADMIN")
        dept = create_department()
        for kind, extra in (("DIRECTOR", {"numeric_rating": 4.5}),
                            ("HR", {"letter_rating": "A"}),
                            ("BUSINESS_BLOCK", {"numeric_rating": 2.0})):
            create_evaluation(admin.pk, evaluator_type=kind, target_type="DEPARTMENT", target_id=dept.pk, **extra)
        assert Evaluation.objects.filter(evaluator=admin).count() == 3

    def test_unknown_evaluator(self, create_department):
        with pytest.raises(NotFound):
            create_evaluation(uuid4(), evaluator_type="HR", target_type="DEPARTMENT",
                              target_id=create_department().pk, letter_rating="A")

    @pytest.mark.parametrize("role, kind", [
        ("HR", "DIRECTOR"),
        ("DIRECTOR", "HR"),
        ("EMPLOYEE", "BUSINESS_BLOCK"),
        ("DEPARTMENT_LEADER", "DIRECTOR"),
    ])
    def test_role_must_match_evaluator_type(self, create_user, create_department, role, kind):
        user = create_user(role=role)
        with pytest.raises(PermissionDenied):
            create_evaluation(user.pk, evaluator_type=kind, target_type="DEPARTMENT",
                              target_id=create_department().pk, numeric_rating=4.5, letter_rating="A")

    def test_unknown_department(self, create_user):
        hr = create_user(role="HR")
        with pytest.raises(NotFound):
            create_evaluation(hr.pk, evaluator_type="HR", target_type="DEPARTMENT",
                              target_id=uuid4(), letter_rating="A")
        assert not Evaluation.objects.exists()

    def test_employee_targets_are_not_looked_up(self, create_user):
        hr = create_user(role="HR")
        ev = create_evaluation(hr.pk, evaluator_type="HR", target_type="EMPLOYEE",
                               target_id=uuid4(), letter_rating="A")
        assert ev.target_type == "EMPLOYEE"

    def test_business_block_only_rates_departments(self, create_user):
        bb = create_user(role="BUSINESS_BLOCK")
        with pytest.raises(PermissionDenied):
            create_evaluation(bb.pk, evaluator_type="BUSINESS_BLOCK", target_type="EMPLOYEE",
                              target_id=uuid4(), numeric_rating=4.0)

    def test_duplicate_is_a_conflict(self, create_user, create_department):
        hr = create_user(role="HR")
        dept = create_department()
        create_evaluation(hr.pk, evaluator_type="HR", target_type="DEPARTMENT", target_id=dept.pk, letter_rating="A")
        with pytest.raises(Conflict):
            create_evaluation(hr.pk, evaluator_type="HR", target_type="DEPARTMENT",
                              target_id=dept.pk, letter_rating="B")

    def test_duplicate_checked_before_rating(self, create_user, create_department):
        hr = create_user(role="HR")
        dept = create_department()
        create_evaluation(hr.pk, evaluator_type="HR", target_type="DEPARTMENT", target_id=dept.pk, letter_rating="A")
        with pytest.raises(Conflict):
            create_evaluation(hr.pk, evaluator_type="HR", target_type="DEPARTMENT",
                              target_id=dept.pk, letter_rating="Z")

    @pytest.mark.parametrize("kind, rating", [
        ("DIRECTOR", {"numeric_rating": 4.0}),
        ("DIRECTOR", {"numeric_rating": 5.1}),
        ("DIRECTOR", {}),
        ("HR", {"letter_rating": "E"}),
        ("HR", {"letter_rating": "a"}),
        ("HR", {}),
        ("BUSINESS_BLOCK", {"numeric_rating": 0.5}),
        ("BUSINESS_BLOCK", {"numeric_rating": 5.5}),
    ])
    def test_rating_ranges(self, create_user, create_department, kind, rating):
        admin = create_user(role="ADMIN")
        with pytest.raises(ValidationError):
            create_evaluation(admin.pk, evaluator_type=kind, target_type="DEPARTMENT",
                              target_id=create_department().pk, **rating)
        assert not Evaluation.objects.exists()

    def test_bad_stars(self, create_user, create_department):
        director = create_user(role="DIRECTOR")
        with pytest.raises(ValidationError):
            create_evaluation(director.pk, evaluator_type="DIRECTOR", target_type="DEPARTMENT",
                              target_id=create_department().pk, star_rating=7)


@pytest.fixture
def hr_draft(create_user, create_department):
    hr = create_user(role="HR")
    ev = create_evaluation(hr.pk, evaluator_type="HR", target_type="DEPARTMENT",
                           target_id=create_department().pk, letter_rating="C")
    return hr, ev


@pytest.mark.django_db
class TestSubmitAndDelete:
    def test_submit(self, hr_draft):
        hr, ev = hr_draft
        submitted = submit_evaluation(ev.pk, hr.pk)
        assert submitted.status == EvaluationStatus.SUBMITTED
        ev.refresh_from_db()
        assert ev.status == EvaluationStatus.SUBMITTED

    def test_only_owner_may_submit(self, hr_draft, create_user):
        _, ev = hr_draft
        other = create_user(role="HR")
        with pytest.raises(ValidationError, match="your own"):
            submit_evaluation(ev.pk, other.pk)

    def test_cannot_submit_twice(self, hr_draft):
        hr, ev = hr_draft
        submit_evaluation(ev.pk, hr.pk)
        with pytest.raises(ValidationError, match="draft"):
            submit_evaluation(ev.pk, hr.pk)

    def test_submit_unknown(self, create_user):
        with pytest.raises(NotFound):
            submit_evaluation(uuid4(), create_user().pk)

    def test_delete_draft(self, hr_draft):
        hr, ev = hr_draft
        delete_evaluation(ev.pk, hr.pk)
        assert not Evaluation.objects.filter(pk=ev.pk).exists()

    def test_submitted_cannot_be_deleted(self, hr_draft):
        hr, ev = hr_draft
        submit_evaluation(ev.pk, hr.pk)
        with pytest.raises(ValidationError):
            delete_evaluation(ev.pk, hr.pk)
        assert Evaluation.objects.filter(pk=ev.pk).exists()

    def test_delete_racing_a_submit_keeps_the_submitted_row(self, hr_draft, monkeypatch):
        hr, ev = hr_draft
        stale = Evaluation.objects.get(pk=ev.pk)        # read while still DRAFT
        submit_evaluation(ev.pk, hr.pk)
        monkeypatch.setattr(evaluation_lifecycle, "_get_evaluation", lambda pk: stale)

        with pytest.raises(ValidationError, match="draft"):
            delete_evaluation(ev.pk, hr.pk)
        assert Evaluation.objects.filter(pk=ev.pk, status=EvaluationStatus.SUBMITTED).exists()

    def test_submit_racing_a_delete_is_rejected(self, hr_draft, monkeypatch):
        hr, ev = hr_draft
        stale = Evaluation.objects.get(pk=ev.pk)
        delete_evaluation(ev.pk, hr.pk)
        monkeypatch.setattr(evaluation_lifecycle, "_get_evaluation", lambda pk: stale)

        with pytest.raises(ValidationError, match="draft"):
            submit_evaluation(ev.pk, hr.pk)
        assert not Evaluation.objects.exists()

    def test_only_owner_may_delete(self, hr_draft, create_user):
        _, ev = hr_draft
        with pytest.raises(ValidationError):
            delete_evaluation(ev.pk, create_user(role="HR").pk)


@pytest.mark.django_db
def test_queries_filter_by_status(hr_draft, create_user, create_department):
    hr, ev = hr_draft
    director = create_user(role="DIRECTOR")
    other = create_evaluation(director.pk, evaluator_type="DIRECTOR", target_type="DEPARTMENT",
                              target_id=ev.target_id, numeric_rating=4.5)
    submit_evaluation(other.pk, director.pk)

    assert evaluations_for_target("DEPARTMENT", ev.target_id).count() == 2
    assert list(evaluations_for_target("DEPARTMENT", ev.target_id, "SUBMITTED")) == [other]
    assert list(evaluations_by_evaluator(hr.pk)) == [ev]
    assert not evaluations_by_evaluator(hr.pk, "SUBMITTED").exists()
