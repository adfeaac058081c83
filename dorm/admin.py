from django.contrib import admin

from .models import Building, Room, Tenant, Contract


@admin.register(Building)
class BuildingAdmin(admin.ModelAdmin):
    list_display = ("id", "name_th", "name_en")
    search_fields = ("name_th", "name_en")

@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("id", "building", "room_number", "floor_no", "status")
    list_filter = ("building", "status")
    search_fields = ("room_number",)

@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("id", "first_name_th", "last_name_th", "phone", "status")
    list_filter = ("status",)
    search_fields = ("first_name_th", "last_name_th", "email", "phone")

@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    list_display = ("id", "tenant", "room", "start_date", "end_date", "status")
    list_filter = ("status", "room__building")
    search_fields = ("tenant__first_name_th", "tenant__last_name_th", "room__room_number")
