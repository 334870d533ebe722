from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from accounts.models import Role
from okr_app.exceptions import Conflict
from okr_app.models import Department, Evaluation, EvaluationStatus, EvaluatorType, TargetType

logger = logging.getLogger(__name__)
User = get_user_model()


@dataclass(frozen=True)
class EvaluatorCapability:
    roles: FrozenSet[str]
    target_types: Optional[FrozenSet[str]] = None  # None = any target type
    denied_message: str = ""


# Who may file which kind of evaluation.
EVALUATOR_CAPABILITIES = {
    EvaluatorType.DIRECTOR: EvaluatorCapability(
        roles=frozenset({Role.DIRECTOR, Role.ADMIN}),
        denied_message="Only Directors can create Director evaluations",
    ),
    EvaluatorType.HR: EvaluatorCapability(
        roles=frozenset({Role.HR, Role.ADMIN}),
        denied_message="Only HR can create HR evaluations",
    ),
    EvaluatorType.BUSINESS_BLOCK: EvaluatorCapability(
        roles=frozenset({Role.BUSINESS_BLOCK, Role.ADMIN}),
        target_types=frozenset({TargetType.DEPARTMENT}),
        denied_message="Only Business Block leaders can create Business Block evaluations",
    ),
}

DIRECTOR_MIN_RATING = 4.25
DIRECTOR_MAX_RATING = 5.0
STAR_STEP = 0.1875                      # (5.0 - 4.25) / 4
HR_LETTERS = ("A", "B", "C", "D")
BUSINESS_BLOCK_MIN_RATING = 1.0
BUSINESS_BLOCK_MAX_RATING = 5.0


# ── conversions ─────────────────────────────────────────────────────────

def stars_to_numeric(stars: int) -> float:
    """Director 1..5 stars -> 4.25..5.0"""
    if not 1 <= stars <= 5:
        raise ValidationError({"star_rating": "Star rating must be between 1 and 5"})
    return DIRECTOR_MIN_RATING + (stars - 1) * STAR_STEP


# ── checks ──────────────────────────────────────────────────────────────

def check_evaluation_permissions(evaluator, evaluator_type: str, target_type: str) -> None:
    capability = EVALUATOR_CAPABILITIES.get(evaluator_type)
    if capability is None:
        raise ValidationError({"evaluator_type": f"Unknown evaluator type: {evaluator_type}"})
    if evaluator.role not in capability.roles:
        raise PermissionDenied(capability.denied_message)
    if capability.target_types is not None and target_type not in capability.target_types:
        allowed = ", ".join(sorted(t.lower() for t in capability.target_types))
        raise PermissionDenied(f"{EvaluatorType(evaluator_type).label} can only evaluate: {allowed}")


def validate_rating(evaluator_type: str, numeric_rating, letter_rating) -> None:
    if evaluator_type == EvaluatorType.DIRECTOR:
        if numeric_rating is None or not DIRECTOR_MIN_RATING <= numeric_rating <= DIRECTOR_MAX_RATING:
            raise ValidationError({"numeric_rating": "Director rating must be between 4.25 and 5.0"})
    elif evaluator_type == EvaluatorType.HR:
        if letter_rating not in HR_LETTERS:
            raise ValidationError({"letter_rating": "HR rating must be A, B, C, or D"})
    elif evaluator_type == EvaluatorType.BUSINESS_BLOCK:
        if numeric_rating is None or not BUSINESS_BLOCK_MIN_RATING <= numeric_rating <= BUSINESS_BLOCK_MAX_RATING:
            raise ValidationError({"numeric_rating": "Business Block rating must be between 1 and 5"})


def _get_evaluator(evaluator_id):
    try:
        return User.objects.get(pk=evaluator_id)
    except User.DoesNotExist:
        raise NotFound("Evaluator not found")


def _get_evaluation(evaluation_id) -> Evaluation:
    try:
        return Evaluation.objects.select_related("evaluator").get(pk=evaluation_id)
    except Evaluation.DoesNotExist:
        raise NotFound("Evaluation not found")


def _check_target_exists(target_type: str, target_id) -> None:
    if target_type == TargetType.DEPARTMENT and not Department.objects.filter(pk=target_id).exists():
        raise NotFound("Department not found")


def _duplicate_message(target_type: str) -> str:
    return f"You have already evaluated this {target_type.lower()}"


# ── lifecycle operations ────────────────────────────────────────────────

def create_evaluation(
    evaluator_id,
    *,
    evaluator_type: str,
    target_type: str,
    target_id,
    numeric_rating: float | None = None,
    star_rating: int | None = None,
    letter_rating: str | None = None,
    comment: str = "",
) -> Evaluation:
    """
    File a new DRAFT evaluation.

    Order of checks: evaluator exists, role may file this evaluator type,
    a DEPARTMENT target exists, no earlier evaluation for the same (evaluator, target, evaluator type),
    then the rating itself. A Director may send ``star_rating`` instead of
    ``numeric_rating``; stars win when both are given.
    """
    evaluator = _get_evaluator(evaluator_id)
    check_evaluation_permissions(evaluator, evaluator_type, target_type)
    _check_target_exists(target_type, target_id)

    duplicate = Evaluation.objects.filter(
        evaluator=evaluator,
        target_type=target_type,
        target_id=target_id,
        evaluator_type=evaluator_type,
    ).exists()
    if duplicate:
        raise Conflict(_duplicate_message(target_type))

    if star_rating is not None and evaluator_type == EvaluatorType.DIRECTOR:
        numeric_rating = stars_to_numeric(star_rating)

    validate_rating(evaluator_type, numeric_rating, letter_rating)

    try:
        with transaction.atomic():
            evaluation = Evaluation.objects.create(
                evaluator=evaluator,
                evaluator_type=evaluator_type,
                target_type=target_type,
                target_id=target_id,
                numeric_rating=numeric_rating,
                letter_rating=letter_rating,
                comment=comment or "",
                status=EvaluationStatus.DRAFT,
            )
    except IntegrityError:
        # a concurrent create for the same tuple won the race
        raise Conflict(_duplicate_message(target_type))

    logger.info("Evaluation %s created by %s (%s on %s:%s)",
                evaluation.pk, evaluator.pk, evaluator_type, target_type, target_id)
    return evaluation


def _check_owned_draft(evaluation: Evaluation, evaluator_id, verb: str, past: str) -> None:
    if str(evaluation.evaluator_id) != str(evaluator_id):
        raise ValidationError(f"You can only {verb} your own evaluations")
    if evaluation.status != EvaluationStatus.DRAFT:
        raise ValidationError(f"Only draft evaluations can be {past}")


def _drafts(evaluation_id):
    return Evaluation.objects.filter(pk=evaluation_id, status=EvaluationStatus.DRAFT)


def submit_evaluation(evaluation_id, evaluator_id) -> Evaluation:
    """
    DRAFT -> SUBMITTED. Only the evaluator who filed it may submit.

    The write only matches a row that is still DRAFT, so a concurrent
    submit or delete turns into a ValidationError instead of a lost update.
    """
    evaluation = _get_evaluation(evaluation_id)
    _check_owned_draft(evaluation, evaluator_id, "submit", "submitted")

    now = timezone.now()
    with transaction.atomic():
        updated = _drafts(evaluation.pk).update(status=EvaluationStatus.SUBMITTED, updated_at=now)
    if not updated:
        raise ValidationError("Only draft evaluations can be submitted")

    evaluation.status = EvaluationStatus.SUBMITTED
    evaluation.updated_at = now
    logger.info("Evaluation %s submitted", evaluation.pk)
    return evaluation


def delete_evaluation(evaluation_id, evaluator_id) -> None:
    """Drafts only, and only by their evaluator."""
    evaluation = _get_evaluation(evaluation_id)
    _check_owned_draft(evaluation, evaluator_id, "delete", "deleted")

    with transaction.atomic():
        deleted, _ = _drafts(evaluation.pk).delete()
    if not deleted:
        raise ValidationError("Only draft evaluations can be deleted")
    logger.info("Evaluation %s deleted", evaluation_id)


# ── queries ─────────────────────────────────────────────────────────────

def evaluations_for_target(target_type: str, target_id, status: str | None = None):
    qs = Evaluation.objects.select_related("evaluator").filter(target_type=target_type, target_id=target_id)
    if status:
        qs = qs.filter(status=status)
    return qs


def evaluations_by_evaluator(evaluator_id, status: str | None = None):
    qs = Evaluation.objects.select_related("evaluator").filter(evaluator_id=evaluator_id)
    if status:
        qs = qs.filter(status=status)
    return qs
