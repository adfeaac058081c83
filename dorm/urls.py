from rest_framework.routers import DefaultRouter

from . import views as v

router = DefaultRouter()
router.register(r"buildings", v.BuildingViewSet)
router.register(r"rooms", v.RoomViewSet)
router.register(r"tenants", v.TenantViewSet)
router.register(r"contracts", v.ContractViewSet)

urlpatterns = router.urls
