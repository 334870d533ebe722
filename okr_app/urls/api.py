from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import (
    TokenRefreshView,      # POST /api/auth/refresh/
    TokenBlacklistView,    # POST /api/auth/logout/ (requires blacklist app)
)

from okr_app.views.auth import EmailLoginView
from okr_app.views.departmentViewSet import DepartmentViewSet
from okr_app.views.evaluationViewSet import EvaluationViewSet
from okr_app.views.keyResultViewSet import KeyResultViewSet
from okr_app.views.objectiveViewSet import ObjectiveViewSet
from okr_app.views.scoreLevelViewSet import ScoreLevelViewSet

router = DefaultRouter()

router.register("departments", DepartmentViewSet, basename="department")       # /api/departments/{id}/scores/
router.register("objectives", ObjectiveViewSet, basename="objective")
router.register("key-results", KeyResultViewSet, basename="key-result")        # /api/key-results/{id}/actual-value/
router.register("score-levels", ScoreLevelViewSet, basename="score-level")     # /api/score-levels/bulk/ & reset/
router.register("evaluations", EvaluationViewSet, basename="evaluation")       # /api/evaluations/mine/

urlpatterns = [
    # JWT
    path("auth/login/",   EmailLoginView.as_view(),     name="jwt-login"),
    path("auth/refresh/", TokenRefreshView.as_view(),   name="jwt-refresh"),
    path("auth/logout/",  TokenBlacklistView.as_view(), name="jwt-logout"),
    # REST resources
    *router.urls,
]
