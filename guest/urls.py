from rest_framework.routers import DefaultRouter

from guest.views import GuestViewSet

app_name = "guest"

router = DefaultRouter()
router.register("guests", GuestViewSet, basename="guests")

urlpatterns = router.urls
