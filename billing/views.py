# billing/views.py

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from dorm.models import Room
from dorm.permissions import IsAdmin, IsAdminOrReadOnly
from .filters import BillFilter, MeterReadingFilter
from .models import Bill, BillingCycle, MeterReading, UtilityRate, UtilityType
from .serializers import (
    BillCreateSerializer, BillListQuerySerializer, BillSerializer, BillStatusSerializer,
    BillingCycleSerializer, BillingRunSerializer, CycleCreateSerializer,
    LatestReadingsQuerySerializer, MeterReadingSerializer, RecordReadingsSerializer, UtilityRateSerializer,
    UtilityTypeSerializer,
)
from .services.aggregation import reconstruct, reconstruct_cycle
from .services.bills import create_bill, run_billing, update_bill_status
from .services.cycles import get_or_create_cycle
from .services.readings import latest_readings, record_reading


class BillingCycleViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          mixins.UpdateModelMixin,
                          viewsets.GenericViewSet):
    """Cycles are created lazily through get-or-create; only status is editable."""
    queryset = BillingCycle.objects.all()
    serializer_class = BillingCycleSerializer
    permission_classes = [IsAdminOrReadOnly]
    filterset_fields = ["billing_year", "billing_month", "status"]

    @extend_schema(request=CycleCreateSerializer, responses=BillingCycleSerializer)
    @action(detail=False, methods=["post"], url_path="get-or-create")
    def get_or_create(self, request):
        ser = CycleCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        cycle = get_or_create_cycle(
            data["year"], data["month"],
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            due_date=data.get("due_date"),
        )
        return Response(self.get_serializer(cycle).data, status=status.HTTP_200_OK)


class UtilityTypeViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = UtilityType.objects.all()
    serializer_class = UtilityTypeSerializer
    pagination_class = None


class UtilityRateViewSet(mixins.ListModelMixin,
                         mixins.RetrieveModelMixin,
                         mixins.CreateModelMixin,
                         viewsets.GenericViewSet):
    """Append-only: a new price is a new row, existing rows are never edited."""
    queryset = UtilityRate.objects.select_related("utility_type").all()
    serializer_class = UtilityRateSerializer
    permission_classes = [IsAdminOrReadOnly]
    filterset_fields = ["utility_type__code"]
    ordering_fields = ["effective_date"]


class MeterReadingViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          viewsets.GenericViewSet):
    queryset = MeterReading.objects.select_related("room", "cycle", "utility_type").order_by("room__room_number", "utility_type_id")
    serializer_class = MeterReadingSerializer
    permission_classes = [IsAdmin]
    filterset_class = MeterReadingFilter

    @extend_schema(request=RecordReadingsSerializer, responses=MeterReadingSerializer(many=True))
    def create(self, request):
        ser = RecordReadingsSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        saved = []
        for code in (UtilityType.ELECTRIC, UtilityType.WATER):
            values = data.get(code)
            if values:
                saved.append(record_reading(data["room"], data["cycle"], code, values["start"], values["end"]))
        return Response(MeterReadingSerializer(saved, many=True).data, status=status.HTTP_201_CREATED)

    @extend_schema(parameters=[LatestReadingsQuerySerializer])
    @action(detail=False, methods=["get"])
    def latest(self, request):
        ser = LatestReadingsQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        room = get_object_or_404(Room, pk=ser.validated_data["room_id"])
        return Response(latest_readings(room))


class BillViewSet(mixins.ListModelMixin,
                  mixins.RetrieveModelMixin,
                  viewsets.GenericViewSet):
    queryset = Bill.objects.select_related(
        "cycle", "contract", "contract__tenant", "contract__room", "contract__room__building",
    ).order_by("contract__room__room_number", "contract__tenant_id")
    serializer_class = BillSerializer
    permission_classes = [IsAdmin]
    filterset_class = BillFilter
    search_fields = ["contract__room__room_number", "contract__tenant__first_name_th", "contract__tenant__last_name_th"]

    @extend_schema(request=BillCreateSerializer, responses=BillSerializer)
    def create(self, request):
        ser = BillCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        bill = create_bill(
            data["contract"].pk, data["cycle"].pk,
            maintenance_fee=data.get("maintenance_fee"),
            status=data["status"],
        )
        return Response(BillSerializer(bill).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=BillStatusSerializer, responses=BillSerializer)
    def partial_update(self, request, pk=None):
        bill = self.get_object()
        ser = BillStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        update_bill_status(bill, ser.validated_data["status"])
        return Response(BillSerializer(bill).data)

    @extend_schema(request=BillingRunSerializer)
    @action(detail=False, methods=["post"])
    def run(self, request):
        ser = BillingRunSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        created = run_billing(data["year"], data["month"], data.get("maintenance_fee"))
        cycle = BillingCycle.objects.get(billing_year=data["year"], billing_month=data["month"])
        return Response({
            "detail": "Billing completed.",
            "bills_created": created,
            "cycle_id": cycle.pk,
            "year": data["year"],
            "month": data["month"],
        })

    @extend_schema(parameters=[BillListQuerySerializer])
    @action(detail=False, methods=["get"])
    def detailed(self, request):
        ser = BillListQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        return Response(reconstruct_cycle(data["year"], data["month"], data.get("room_id")))

    @action(detail=True, methods=["get"])
    def reconstruct(self, request, pk=None):
        bill = self.get_object()
        return Response(reconstruct(bill.contract_id, bill.cycle_id))
