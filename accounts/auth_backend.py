import logging
from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model
from django.db.models import Q

logger = logging.getLogger(__name__)
User = get_user_model()


class FlexibleAuthBackend(ModelBackend):
    """
    Login for evaluators and OKR owners with either identifier.

    - ``email`` + password
    - ``username`` + password
    - a single login string that may be either one
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        email = kwargs.get("email")
        if not password or not (username or email):
            return None

        if username and email:
            lookup = Q(username=username, email__iexact=email)
        elif email:
            lookup = Q(email__iexact=email)
        else:
            # the login form sends whatever was typed as "username"
            lookup = Q(username=username) | Q(email__iexact=username)

        matches = list(User.objects.filter(lookup)[:2])
        if len(matches) != 1:
            logger.debug("Login rejected: %d accounts match", len(matches))
            return None

        user = matches[0]
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
