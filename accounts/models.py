from django.db import models
import uuid
from django.utils import timezone
from django.contrib.auth.models import AbstractUser


class Role(models.TextChoices):
    ADMIN             = "ADMIN",             "Admin"
    DIRECTOR          = "DIRECTOR",          "Director"
    HR                = "HR",                "HR"
    BUSINESS_BLOCK    = "BUSINESS_BLOCK",    "Business Block"
    DEPARTMENT_LEADER = "DEPARTMENT_LEADER", "Department Leader"
    EMPLOYEE          = "EMPLOYEE",          "Employee"


class User(AbstractUser):
    user_id    = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name       = models.CharField(max_length=120, blank=True)
    email      = models.EmailField(unique=True)
    role       = models.CharField(max_length=20, choices=Role.choices, default=Role.EMPLOYEE)
    position   = models.CharField(max_length=120, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name or self.get_full_name() or self.username
