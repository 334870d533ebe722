from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsAdmin(BasePermission):
    def has_permission(self, request, view):
        return getattr(request.user, "role", None) == "ADMIN"

class ReadOnlyOrAdmin(BasePermission):
    """
    - SAFE methods (GET / HEAD / OPTIONS) → any authenticated user.
    - Mutating methods → Admin only.
    """
    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return getattr(request.user, "role", None) == "ADMIN"


class ReadOnlyOrOkrEditor(BasePermission):
    """
    Objectives and key results are maintained by Admins and Department Leaders,
    everybody else can read them.
    """
    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return request.user.role in ("ADMIN", "DEPARTMENT_LEADER")


class IsEvaluator(BasePermission):
    """Directors, HR and Business Block leaders (and Admin) may file evaluations."""
    def has_permission(self, request, view):
        return request.user and request.user.is_authenticated and request.user.role in (
            "ADMIN", "DIRECTOR", "HR", "BUSINESS_BLOCK"
        )
