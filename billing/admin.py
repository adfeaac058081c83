from django.contrib import admin

from .models import BillingCycle, UtilityType, UtilityRate, MeterReading, Bill


@admin.register(BillingCycle)
class BillingCycleAdmin(admin.ModelAdmin):
    list_display = ("id", "billing_year", "billing_month", "start_date", "end_date", "due_date", "status")
    list_filter = ("status", "billing_year")

@admin.register(UtilityType)
class UtilityTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "name_th")

@admin.register(UtilityRate)
class UtilityRateAdmin(admin.ModelAdmin):
    list_display = ("id", "utility_type", "rate_per_unit", "effective_date")
    list_filter = ("utility_type",)

    def has_change_permission(self, request, obj=None):
        return False

@admin.register(MeterReading)
class MeterReadingAdmin(admin.ModelAdmin):
    list_display = ("id", "room", "cycle", "utility_type", "meter_start", "meter_end", "updated_at")
    list_filter = ("cycle", "utility_type")
    search_fields = ("room__room_number",)

@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ("id", "contract", "cycle", "maintenance_fee", "electric_amount", "water_amount", "total_amount", "rate_missing", "status")
    list_filter = ("status", "cycle", "rate_missing")
    search_fields = ("contract__room__room_number", "contract__tenant__first_name_th", "contract__tenant__last_name_th")
    readonly_fields = ("contract", "cycle", "maintenance_fee", "electric_amount", "water_amount", "total_amount", "tenant_count", "rate_missing")
