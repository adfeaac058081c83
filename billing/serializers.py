from django.conf import settings
from rest_framework import serializers

from dorm.models import Contract, Room
from .models import Bill, BillingCycle, MeterReading, UtilityRate, UtilityType


class BillingCycleSerializer(serializers.ModelSerializer):
    class Meta:
        model = BillingCycle
        fields = ["id", "billing_year", "billing_month", "start_date", "end_date", "due_date", "status"]
        read_only_fields = ["id", "billing_year", "billing_month", "start_date", "end_date", "due_date"]


class CyclePeriodSerializer(serializers.Serializer):
    """(year, month) with the year in the Buddhist era, e.g. 2568 / 10."""
    year = serializers.IntegerField(min_value=2400, max_value=3000)
    month = serializers.IntegerField(min_value=1, max_value=12)


class CycleCreateSerializer(CyclePeriodSerializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)

    def validate(self, data):
        start_date, end_date = data.get("start_date"), data.get("end_date")
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError("end_date must not be before start_date.")
        return data


class UtilityTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = UtilityType
        fields = ["id", "code", "name_th"]


class UtilityRateSerializer(serializers.ModelSerializer):
    utility_type = serializers.SlugRelatedField(slug_field="code", queryset=UtilityType.objects.all())

    class Meta:
        model = UtilityRate
        fields = ["id", "utility_type", "rate_per_unit", "effective_date", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_rate_per_unit(self, value):
        if value < 0:
            raise serializers.ValidationError("rate_per_unit must not be negative.")
        return value


class MeterReadingSerializer(serializers.ModelSerializer):
    utility_type = serializers.SlugRelatedField(slug_field="code", read_only=True)
    room_number = serializers.CharField(source="room.room_number", read_only=True)

    class Meta:
        model = MeterReading
        fields = ["id", "room", "room_number", "cycle", "utility_type", "meter_start", "meter_end", "created_at", "updated_at"]


class MeterValuesSerializer(serializers.Serializer):
    # meter columns are 32-bit integers
    start = serializers.IntegerField(min_value=0, max_value=2147483647)
    end = serializers.IntegerField(min_value=0, max_value=2147483647)


class RecordReadingsSerializer(serializers.Serializer):
    """
    Ingestion edge for meter values: everything past this point is an int.
    Electric meters only show four digits, so values must stay below the
    odometer modulus; an end below the start is a rollover, not an error.
    """
    room = serializers.PrimaryKeyRelatedField(queryset=Room.objects.all())
    cycle = serializers.PrimaryKeyRelatedField(queryset=BillingCycle.objects.all())
    electric = MeterValuesSerializer(required=False)
    water = MeterValuesSerializer(required=False)

    def validate_electric(self, value):
        modulus = settings.DORM_ELECTRIC_METER_MODULUS
        for key in ("start", "end"):
            if value[key] >= modulus:
                raise serializers.ValidationError(f"electric meter values must be below {modulus}.")
        return value

    def validate(self, data):
        if not data.get("electric") and not data.get("water"):
            raise serializers.ValidationError("Provide at least one of electric or water readings.")
        return data


class BillSerializer(serializers.ModelSerializer):
    tenant_id = serializers.IntegerField(source="contract.tenant_id", read_only=True)
    tenant_name = serializers.CharField(source="contract.tenant.full_name", read_only=True)
    room_id = serializers.IntegerField(source="contract.room_id", read_only=True)
    room_number = serializers.CharField(source="contract.room.room_number", read_only=True)
    building_name = serializers.CharField(source="contract.room.building.name_th", read_only=True)
    billing_year = serializers.IntegerField(source="cycle.billing_year", read_only=True)
    billing_month = serializers.IntegerField(source="cycle.billing_month", read_only=True)
    due_date = serializers.DateField(source="cycle.due_date", read_only=True)

    class Meta:
        model = Bill
        fields = [
            "id", "contract", "cycle", "tenant_id", "tenant_name",
            "room_id", "room_number", "building_name",
            "billing_year", "billing_month", "due_date",
            "maintenance_fee", "electric_amount", "water_amount", "total_amount",
            "tenant_count", "rate_missing", "status", "created_at",
        ]
        read_only_fields = fields


class BillCreateSerializer(serializers.Serializer):
    contract = serializers.PrimaryKeyRelatedField(queryset=Contract.objects.all())
    cycle = serializers.PrimaryKeyRelatedField(queryset=BillingCycle.objects.all())
    maintenance_fee = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    status = serializers.ChoiceField(choices=Bill.Status.choices, default=Bill.Status.DRAFT)


class BillStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Bill.Status.choices)


class BillingRunSerializer(CyclePeriodSerializer):
    maintenance_fee = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)


class BillListQuerySerializer(CyclePeriodSerializer):
    room_id = serializers.IntegerField(required=False, min_value=1)


class LatestReadingsQuerySerializer(serializers.Serializer):
    room_id = serializers.IntegerField(min_value=1)
