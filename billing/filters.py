import django_filters

from .models import Bill, MeterReading


class BillFilter(django_filters.FilterSet):
    year = django_filters.NumberFilter(field_name="cycle__billing_year")
    month = django_filters.NumberFilter(field_name="cycle__billing_month")
    room_id = django_filters.NumberFilter(field_name="contract__room_id")
    tenant_id = django_filters.NumberFilter(field_name="contract__tenant_id")

    class Meta:
        model = Bill
        fields = ["year", "month", "room_id", "tenant_id", "cycle", "contract", "status", "rate_missing"]


class MeterReadingFilter(django_filters.FilterSet):
    utility_type = django_filters.CharFilter(field_name="utility_type__code")
    year = django_filters.NumberFilter(field_name="cycle__billing_year")
    month = django_filters.NumberFilter(field_name="cycle__billing_month")

    class Meta:
        model = MeterReading
        fields = ["cycle", "room", "utility_type", "year", "month"]
