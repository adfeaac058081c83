from rest_framework.routers import DefaultRouter

from . import views as v

router = DefaultRouter()
router.register(r"billing-cycles", v.BillingCycleViewSet)
router.register(r"utility-types", v.UtilityTypeViewSet)
router.register(r"utility-rates", v.UtilityRateViewSet)
router.register(r"meter-readings", v.MeterReadingViewSet)
router.register(r"bills", v.BillViewSet)

urlpatterns = router.urls
