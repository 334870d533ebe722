import pytest
from django.urls import reverse

from okr_app.models import Evaluation, EvaluationStatus, KeyResult, ScoreLevel


@pytest.mark.django_db
class TestDepartmentViewSet:
    def test_list_embeds_scored_tree(self, api_client, create_user, create_objective, create_key_result):
        obj = create_objective(weight=100)
        create_key_result(objective=obj, actual_value="92")

        api_client.force_authenticate(user=create_user())
        res = api_client.get(reverse("department-list"))

        assert res.status_code == 200
        dept = res.data[0]
        assert dept["score"]["score"] == 4.75
        assert dept["score"]["level"] == "very_good"
        objective = dept["objectives"][0]
        assert objective["score"]["score"] == 4.75
        kr = objective["key_results"][0]
        assert kr["score"] == {"score": 4.75, "level": "very_good", "color": "#28a745", "percentage": 87.5}
        assert kr["thresholds"]["exceptional"] == 98

    def test_only_admin_creates(self, api_client, create_user):
        api_client.force_authenticate(user=create_user(role="DIRECTOR"))
        res = api_client.post(reverse("department-list"), {"name": "Finance"}, format="json")
        assert res.status_code == 403

        api_client.force_authenticate(user=create_user(role="ADMIN"))
        res = api_client.post(reverse("department-list"), {"name": "Finance"}, format="json")
        assert res.status_code == 201
        assert res.data["score"]["score"] == 3.0

    def test_anonymous_is_rejected(self, api_client):
        assert api_client.get(reverse("department-list")).status_code == 401

    def test_scores_action(self, api_client, create_user, create_objective, create_key_result):
        obj = create_objective()
        create_key_result(objective=obj, actual_value="85")
        dept = obj.department
        hr = create_user(role="HR")
        Evaluation.objects.create(evaluator=hr, evaluator_type="HR", target_id=dept.pk,
                                  letter_rating="B", status=EvaluationStatus.SUBMITTED)

        api_client.force_authenticate(user=create_user())
        res = api_client.get(reverse("department-scores", kwargs={"department_id": dept.pk}))

        assert res.status_code == 200
        assert res.data["automatic_okr_score"] == 4.5
        assert res.data["hr_evaluation_letter"] == "B"
        assert res.data["has_hr_evaluation"] is True
        assert res.data["has_director_evaluation"] is False
        assert res.data["final_combined_score"] is None
        assert res.data["score_level"] == "good"


@pytest.mark.django_db
class TestKeyResultViewSet:
    def _payload(self, objective, **kw):
        data = {
            "objective_id": str(objective.pk),
            "name": "Churn",
            "metric_type": "Lower is better",
            "unit": "%",
            "thresholds": {"below": 10, "meets": 8, "good": 6, "very_good": 4, "exceptional": 2},
            "actual_value": "6",
        }
        data.update(kw)
        return data

    def test_leader_creates_key_result(self, api_client, create_user, create_objective):
        obj = create_objective()
        api_client.force_authenticate(user=create_user(role="DEPARTMENT_LEADER"))

        res = api_client.post(reverse("key-result-list"), self._payload(obj), format="json")

        assert res.status_code == 201, res.data
        kr = KeyResult.objects.get(pk=res.data["key_result_id"])
        assert kr.metric_type == "LOWER_BETTER"
        assert kr.threshold_very_good == 4
        assert res.data["score"]["score"] == 4.5

    def test_quantitative_needs_all_thresholds(self, api_client, create_user, create_objective):
        obj = create_objective()
        api_client.force_authenticate(user=create_user(role="ADMIN"))
        payload = self._payload(obj, thresholds={"below": 10, "meets": 8})

        res = api_client.post(reverse("key-result-list"), payload, format="json")

        assert res.status_code == 400
        assert "thresholds" in res.data

    def test_qualitative_without_thresholds(self, api_client, create_user, create_objective):
        obj = create_objective()
        api_client.force_authenticate(user=create_user(role="ADMIN"))
        payload = self._payload(obj, metric_type="QUALITATIVE", actual_value="b")
        payload.pop("thresholds")

        res = api_client.post(reverse("key-result-list"), payload, format="json")

        assert res.status_code == 201, res.data
        assert res.data["score"]["score"] == 4.75

    def test_employee_cannot_edit(self, api_client, create_user, create_objective):
        api_client.force_authenticate(user=create_user(role="EMPLOYEE"))
        res = api_client.post(reverse("key-result-list"), self._payload(create_objective()), format="json")
        assert res.status_code == 403

    def test_actual_value_update(self, api_client, create_user, create_key_result):
        kr = create_key_result(actual_value="60")
        api_client.force_authenticate(user=create_user(role="ADMIN"))

        url = reverse("key-result-actual-value", kwargs={"key_result_id": kr.pk})
        res = api_client.patch(url, {"actual_value": " 98 "}, format="json")

        assert res.status_code == 200
        kr.refresh_from_db()
        assert kr.actual_value == "98"
        assert res.data["score"]["score"] == 5.0

    def test_filter_by_objective(self, api_client, create_user, create_objective, create_key_result):
        mine = create_objective()
        create_key_result(objective=mine)
        create_key_result()
        api_client.force_authenticate(user=create_user())

        res = api_client.get(reverse("key-result-list"), {"objective_id": str(mine.pk)})

        assert res.status_code == 200
        assert len(res.data) == 1


@pytest.mark.django_db
class TestScoreLevelViewSet:
    LEVELS = [
        {"name": "Weak", "score_value": 1, "color": "#ff0000", "display_order": 1},
        {"name": "Okay", "score_value": 2, "color": "#ffff00", "display_order": 2},
        {"name": "Strong", "score_value": 3, "color": "#00ff00", "display_order": 3},
    ]

    def test_defaults_when_empty(self, api_client, create_user):
        api_client.force_authenticate(user=create_user())
        res = api_client.get(reverse("score-level-list"))
        assert res.status_code == 200
        assert res.data["is_default"] is True
        assert [lv["name"] for lv in res.data["levels"]] == ["below", "meets", "good", "very_good", "exceptional"]

    def test_bulk_replace_and_reset(self, api_client, create_user, create_key_result):
        kr = create_key_result(actual_value="98")
        api_client.force_authenticate(user=create_user(role="ADMIN"))

        res = api_client.put(reverse("score-level-bulk"), {"levels": self.LEVELS}, format="json")
        assert res.status_code == 200
        assert ScoreLevel.objects.count() == 3

        res = api_client.get(reverse("key-result-detail", kwargs={"key_result_id": kr.pk}))
        assert res.data["score"]["score"] == 3.0
        assert res.data["score"]["level"] == "strong"

        res = api_client.post(reverse("score-level-reset"))
        assert res.status_code == 204
        assert not ScoreLevel.objects.exists()

    def test_values_must_ascend(self, api_client, create_user):
        api_client.force_authenticate(user=create_user(role="ADMIN"))
        levels = [dict(lv) for lv in self.LEVELS]
        levels[2]["score_value"] = 1.5
        res = api_client.put(reverse("score-level-bulk"), {"levels": levels}, format="json")
        assert res.status_code == 400

    def test_non_admin_cannot_replace(self, api_client, create_user):
        api_client.force_authenticate(user=create_user(role="HR"))
        res = api_client.put(reverse("score-level-bulk"), {"levels": self.LEVELS}, format="json")
        assert res.status_code == 403


@pytest.mark.django_db
class TestEvaluationViewSet:
    def test_create_and_submit(self, api_client, create_user, create_department):
        director = create_user(role="DIRECTOR")
        dept = create_department()
        api_client.force_authenticate(user=director)

        res = api_client.post(reverse("evaluation-list"), {
            "evaluator_type": "DIRECTOR",
            "target_type": "DEPARTMENT",
            "target_id": str(dept.pk),
            "star_rating": 5,
        }, format="json")
        assert res.status_code == 201, res.data
        assert res.data["numeric_rating"] == 5.0
        assert res.data["star_rating"] == 5
        assert res.data["status"] == "DRAFT"

        url = reverse("evaluation-submit", kwargs={"evaluation_id": res.data["evaluation_id"]})
        res = api_client.post(url)
        assert res.status_code == 200
        assert res.data["status"] == "SUBMITTED"

    def test_duplicate_returns_409(self, api_client, create_user, create_department):
        api_client.force_authenticate(user=create_user(role="HR"))
        body = {"evaluator_type": "HR", "target_id": str(create_department().pk), "letter_rating": "A"}
        assert api_client.post(reverse("evaluation-list"), body, format="json").status_code == 201
        assert api_client.post(reverse("evaluation-list"), body, format="json").status_code == 409

    def test_wrong_role_returns_403(self, api_client, create_user, create_department):
        api_client.force_authenticate(user=create_user(role="HR"))
        body = {"evaluator_type": "DIRECTOR", "target_id": str(create_department().pk), "numeric_rating": 4.5}
        assert api_client.post(reverse("evaluation-list"), body, format="json").status_code == 403

    def test_employee_cannot_evaluate(self, api_client, create_user, create_department):
        api_client.force_authenticate(user=create_user(role="EMPLOYEE"))
        body = {"evaluator_type": "HR", "target_id": str(create_department().pk), "letter_rating": "A"}
        assert api_client.post(reverse("evaluation-list"), body, format="json").status_code == 403

    def test_bad_rating_returns_400(self, api_client, create_user, create_department):
        api_client.force_authenticate(user=create_user(role="BUSINESS_BLOCK"))
        body = {"evaluator_type": "BUSINESS_BLOCK", "target_id": str(create_department().pk), "numeric_rating": 9}
        res = api_client.post(reverse("evaluation-list"), body, format="json")
        assert res.status_code == 400
        assert "numeric_rating" in res.data

    def test_delete_own_draft_only(self, api_client, create_user, create_department):
        owner = create_user(role="HR")
        ev = Evaluation.objects.create(evaluator=owner, evaluator_type="HR",
                                       target_id=create_department().pk, letter_rating="A")
        url = reverse("evaluation-detail", kwargs={"evaluation_id": ev.pk})

        api_client.force_authenticate(user=create_user(role="HR"))
        assert api_client.delete(url).status_code == 400

        api_client.force_authenticate(user=owner)
        assert api_client.delete(url).status_code == 204
        assert not Evaluation.objects.exists()

    def test_list_filters_and_mine(self, api_client, create_user, create_department):
        hr = create_user(role="HR")
        director = create_user(role="DIRECTOR")
        dept = create_department()
        Evaluation.objects.create(evaluator=hr, evaluator_type="HR", target_id=dept.pk,
                                  letter_rating="A", status=EvaluationStatus.SUBMITTED)
        Evaluation.objects.create(evaluator=director, evaluator_type="DIRECTOR", target_id=dept.pk,
                                  numeric_rating=4.5)

        api_client.force_authenticate(user=hr)
        res = api_client.get(reverse("evaluation-list"), {"target_id": str(dept.pk), "status": "SUBMITTED"})
        assert res.status_code == 200
        assert [row["evaluator_type"] for row in res.data] == ["HR"]

        res = api_client.get(reverse("evaluation-mine"))
        assert len(res.data) == 1
        assert res.data[0]["evaluator_name"] == "Test User"

    def test_target_listing_covers_every_status(self, api_client, create_user, create_department):
        hr = create_user(role="HR")
        dept, other = create_department(), create_department()
        Evaluation.objects.create(evaluator=hr, evaluator_type="HR", target_id=dept.pk, letter_rating="A",
                                  status=EvaluationStatus.SUBMITTED)
        Evaluation.objects.create(evaluator=create_user(role="DIRECTOR"), evaluator_type="DIRECTOR",
                                  target_id=dept.pk, numeric_rating=4.5)
        Evaluation.objects.create(evaluator=hr, evaluator_type="HR", target_id=other.pk, letter_rating="B")

        api_client.force_authenticate(user=hr)
        res = api_client.get(reverse("evaluation-list"), {"target_id": str(dept.pk)})
        assert res.status_code == 200
        assert sorted(row["evaluator_type"] for row in res.data) == ["DIRECTOR", "HR"]

        res = api_client.get(reverse("evaluation-list"), {"target_id": str(dept.pk), "evaluator_type": "DIRECTOR"})
        assert [row["status"] for row in res.data] == ["DRAFT"]

    def test_bad_target_id_returns_400(self, api_client, create_user):
        api_client.force_authenticate(user=create_user())
        res = api_client.get(reverse("evaluation-list"), {"target_id": "not-a-uuid"})
        assert res.status_code == 400
        assert "target_id" in res.data

    def test_unknown_department_returns_404(self, api_client, create_user):
        api_client.force_authenticate(user=create_user(role="HR"))
        body = {"evaluator_type": "HR", "target_id": "00000000-0000-0000-0000-000000000001", "letter_rating": "A"}
        assert api_client.post(reverse("evaluation-list"), body, format="json").status_code == 404


@pytest.mark.django_db
class TestAuth:
    def test_login_with_email(self, api_client, create_user):
        user = create_user(role="HR", email="hr@test.local", password="s3cret-pass")
        res = api_client.post(reverse("jwt-login"), {"email": "hr@test.local", "password": "s3cret-pass"},
                              format="json")
        assert res.status_code == 200, res.data
        assert res.data["role"] == "HR"
        assert res.data["user_id"] == str(user.user_id)
        assert "access" in res.data and "refresh" in res.data

    def test_login_with_username(self, api_client, create_user):
        create_user(username="director1", password="s3cret-pass", role="DIRECTOR")
        res = api_client.post(reverse("jwt-login"), {"username": "director1", "password": "s3cret-pass"},
                              format="json")
        assert res.status_code == 200
        assert res.data["role_label"] == "Director"

    def test_bad_password(self, api_client, create_user):
        create_user(email="x@test.local", password="s3cret-pass")
        res = api_client.post(reverse("jwt-login"), {"email": "x@test.local", "password": "nope"}, format="json")
        assert res.status_code == 400

    def test_users_me(self, api_client, create_user):
        user = create_user(role="DEPARTMENT_LEADER")
        api_client.force_authenticate(user=user)
        res = api_client.get(reverse("users-me"))
        assert res.status_code == 200
        assert res.data["role"] == "DEPARTMENT_LEADER"

    def test_users_list_is_admin_only(self, api_client, create_user):
        api_client.force_authenticate(user=create_user(role="HR"))
        assert api_client.get(reverse("users-list")).status_code == 403
        api_client.force_authenticate(user=create_user(role="ADMIN"))
        assert api_client.get(reverse("users-list")).status_code == 200
