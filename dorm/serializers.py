from rest_framework import serializers

from .models import Building, Room, Tenant, Contract


class BuildingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Building
        fields = ["id", "name_th", "name_en"]


class RoomSerializer(serializers.ModelSerializer):
    building_name = serializers.CharField(source="building.name_th", read_only=True)
    active_tenants = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Room
        fields = ["id", "building", "building_name", "room_number", "floor_no", "status", "active_tenants"]
        read_only_fields = ["id"]

    def get_active_tenants(self, obj):
        return obj.active_contracts().count()


class TenantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tenant
        fields = ["id", "first_name_th", "last_name_th", "email", "phone", "status"]


class ContractSerializer(serializers.ModelSerializer):
    tenant_name = serializers.CharField(source="tenant.full_name", read_only=True)
    room_number = serializers.CharField(source="room.room_number", read_only=True)

    class Meta:
        model = Contract
        fields = [
            "id", "tenant", "tenant_name", "room", "room_number",
            "start_date", "end_date", "status",
        ]
        read_only_fields = ["id"]

    def validate(self, data):
        start_date = data.get("start_date", getattr(self.instance, "start_date", None))
        end_date = data.get("end_date", getattr(self.instance, "end_date", None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError("end_date must not be before start_date.")
        return data


class EndContractSerializer(serializers.Serializer):
    end_date = serializers.DateField(required=False)
