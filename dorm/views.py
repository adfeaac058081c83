from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import Building, Room, Tenant, Contract
from .permissions import IsAdmin, IsAdminOrReadOnly
from .serializers import (
    BuildingSerializer, RoomSerializer, TenantSerializer,
    ContractSerializer, EndContractSerializer,
)


class BuildingViewSet(viewsets.ModelViewSet):
    queryset = Building.objects.all()
    serializer_class = BuildingSerializer
    permission_classes = [IsAdminOrReadOnly]


class RoomViewSet(viewsets.ModelViewSet):
    queryset = Room.objects.select_related("building").all()
    serializer_class = RoomSerializer
    permission_classes = [IsAdminOrReadOnly]
    filterset_fields = ["building", "status", "floor_no"]
    search_fields = ["room_number"]


class TenantViewSet(viewsets.ModelViewSet):
    queryset = Tenant.objects.all()
    serializer_class = TenantSerializer
    permission_classes = [IsAdmin]
    search_fields = ["first_name_th", "last_name_th", "email", "phone"]


class ContractViewSet(viewsets.ModelViewSet):
    queryset = Contract.objects.select_related("tenant", "room").all().order_by("-start_date", "id")
    serializer_class = ContractSerializer
    permission_classes = [IsAdmin]
    filterset_fields = ["room", "tenant", "status"]

    @action(detail=True, methods=["post"])
    def end(self, request, pk=None):
        contract = self.get_object()
        ser = EndContractSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        if contract.status == Contract.Status.ENDED:
            return Response({"detail": "Contract already ended."}, status=status.HTTP_400_BAD_REQUEST)
        contract.end(ser.validated_data.get("end_date"))
        return Response(self.get_serializer(contract).data)
