import pytest
from uuid import uuid4
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from okr_app.models import Department, KeyResult, MetricType, Objective
from okr_app.services.score_levels import ScoringContext


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def default_ctx():
    return ScoringContext()


@pytest.fixture
def create_user(db):
    User = get_user_model()
    def _create_user(**kw):
        data = {
            "username": f"u_{uuid4().hex[:8]}",
            "email": f"{uuid4().hex[:8]}@test.local",
            "password": "pass12345",
            "name": "Test User",
            "role": "EMPLOYEE",
        }
        data.update(kw)
        return User.objects.create_user(**data)
    return _create_user


@pytest.fixture
def create_department(db):
    def _create_department(**kw):
        data = {"name": f"Dept {uuid4().hex[:6]}"}
        data.update(kw)
        return Department.objects.create(**data)
    return _create_department


@pytest.fixture
def create_objective(db, create_department):
    def _create_objective(**kw):
        dept = kw.pop("department", None) or create_department()
        data = {"department": dept, "name": "Grow revenue", "weight": None}
        data.update(kw)
        return Objective.objects.create(**data)
    return _create_objective


@pytest.fixture
def create_key_result(db, create_objective):
    """Higher-is-better key result with thresholds 60/75/85/92/98 unless overridden."""
    def _create_key_result(**kw):
        obj = kw.pop("objective", None) or create_objective()
        data = {
            "objective": obj,
            "name": "On-time delivery",
            "metric_type": MetricType.HIGHER_BETTER,
            "threshold_below": 60,
            "threshold_meets": 75,
            "threshold_good": 85,
            "threshold_very_good": 92,
            "threshold_exceptional": 98,
            "actual_value": "",
        }
        data.update(kw)
        return KeyResult.objects.create(**data)
    return _create_key_result
