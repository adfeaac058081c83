from django.db import models
from django.utils import timezone


class Building(models.Model):
    name_th = models.CharField(max_length=150)
    name_en = models.CharField(max_length=150, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        db_table = "buildings"
        ordering = ["name_th"]
    def __str__(self): return self.name_th


class Room(models.Model):
    STATUS_CHOICES = [("available", "ว่าง"), ("occupied", "มีผู้เช่า"), ("maintenance", "ปิดซ่อม")]
    building = models.ForeignKey(Building, on_delete=models.PROTECT, related_name="rooms")
    room_number = models.CharField(max_length=20)
    floor_no = models.PositiveSmallIntegerField(blank=True, null=True)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default="available")
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        db_table = "rooms"
        ordering = ["building_id", "room_number"]
        constraints = [
            models.UniqueConstraint(fields=["building", "room_number"], name="uniq_room_number_per_building"),
        ]
    def __str__(self): return f"{self.building} {self.room_number}"

    def active_contracts(self):
        return Contract.objects.active().filter(room=self)


class Tenant(models.Model):
    STATUS_CHOICES = [("active", "ใช้งาน"), ("inactive", "ไม่ใช้งาน")]
    first_name_th = models.CharField(max_length=100)
    last_name_th = models.CharField(max_length=100)
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=30, blank=True, null=True)
    status = models.CharField(max_length=8, choices=STATUS_CHOICES, default="active")
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        db_table = "tenants"
        ordering = ["first_name_th", "last_name_th"]
    def __str__(self): return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name_th} {self.last_name_th}".strip()


class ContractQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=Contract.Status.ACTIVE)


class Contract(models.Model):
    """
    A tenant's occupancy of a room. Several active contracts may point at
    the same room; their count drives utility cost splitting.
    """
    class Status(models.TextChoices):
        ACTIVE = "active", "ใช้งาน"
        ENDED = "ended", "สิ้นสุด"

    tenant = models.ForeignKey(Tenant, on_delete=models.PROTECT, related_name="contracts")
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name="contracts")
    start_date = models.DateField()
    end_date = models.DateField(blank=True, null=True)
    status = models.CharField(max_length=6, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = ContractQuerySet.as_manager()

    class Meta:
        db_table = "contracts"
        indexes = [models.Index(fields=["room", "status"], name="contracts_room_status_idx")]
    def __str__(self): return f"{self.tenant} @ {self.room} ({self.status})"

    def end(self, end_date=None):
        self.status = Contract.Status.ENDED
        self.end_date = end_date or timezone.localdate()
        self.save(update_fields=["status", "end_date"])
