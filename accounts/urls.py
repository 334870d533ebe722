from rest_framework.routers import SimpleRouter
from accounts.views import UserViewSet

router = SimpleRouter()
router.register("users", UserViewSet, basename="users")  # GET /api/users/ & GET /api/users/me/

urlpatterns = router.urls
