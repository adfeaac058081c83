from django.db import models

from dorm.models import Contract, Room


class BillingCycle(models.Model):
    """
    A calendar-month billing period. ``billing_year`` is kept in the Thai
    Buddhist era (Gregorian + 543); the dates are plain Gregorian dates.
    """
    class Status(models.TextChoices):
        OPEN = "open", "เปิด"
        CLOSED = "closed", "ปิด"

    billing_year = models.PositiveIntegerField()
    billing_month = models.PositiveSmallIntegerField()
    start_date = models.DateField()
    end_date = models.DateField(blank=True, null=True)
    due_date = models.DateField()
    status = models.CharField(max_length=6, choices=Status.choices, default=Status.OPEN)
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        db_table = "billing_cycles"
        ordering = ["-billing_year", "-billing_month"]
        constraints = [
            models.UniqueConstraint(fields=["billing_year", "billing_month"], name="uniq_cycle_year_month"),
        ]
    def __str__(self): return f"{self.billing_month:02d}/{self.billing_year}"


class UtilityType(models.Model):
    ELECTRIC = "electric"
    WATER = "water"
    CODE_CHOICES = [(ELECTRIC, "ค่าไฟฟ้า"), (WATER, "ค่าน้ำ")]
    code = models.CharField(max_length=10, choices=CODE_CHOICES, unique=True)
    name_th = models.CharField(max_length=50)
    class Meta:
        db_table = "utility_types"
        ordering = ["id"]
    def __str__(self): return self.name_th


class UtilityRate(models.Model):
    """Append-only: a price change is a new row with a later effective date."""
    utility_type = models.ForeignKey(UtilityType, on_delete=models.PROTECT, related_name="rates")
    rate_per_unit = models.DecimalField(max_digits=10, decimal_places=4)
    effective_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        db_table = "utility_rates"
        ordering = ["utility_type_id", "-effective_date"]
        indexes = [models.Index(fields=["utility_type", "effective_date"], name="utility_rates_type_date_idx")]
    def __str__(self): return f"{self.utility_type.code} {self.rate_per_unit} @ {self.effective_date}"


class MeterReading(models.Model):
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="meter_readings")
    cycle = models.ForeignKey(BillingCycle, on_delete=models.PROTECT, related_name="meter_readings")
    utility_type = models.ForeignKey(UtilityType, on_delete=models.PROTECT, related_name="readings")
    meter_start = models.IntegerField()
    meter_end = models.IntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    class Meta:
        db_table = "bill_utility_readings"
        constraints = [
            models.UniqueConstraint(fields=["room", "cycle", "utility_type"], name="uniq_reading_room_cycle_utility"),
        ]
    def __str__(self): return f"{self.room} {self.cycle} {self.utility_type.code}: {self.meter_start}->{self.meter_end}"


class Bill(models.Model):
    """
    One bill per (contract, cycle). Amounts are frozen at creation; only
    ``status`` changes afterwards.
    """
    class Status(models.TextChoices):
        DRAFT = "draft", "ร่าง"
        SENT = "sent", "ส่งแล้ว"
        PAID = "paid", "ชำระแล้ว"

    contract = models.ForeignKey(Contract, on_delete=models.PROTECT, related_name="bills")
    cycle = models.ForeignKey(BillingCycle, on_delete=models.PROTECT, related_name="bills")
    maintenance_fee = models.DecimalField(max_digits=12, decimal_places=2)
    electric_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    water_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    tenant_count = models.PositiveSmallIntegerField(default=1)
    rate_missing = models.BooleanField(default=False, help_text="A reading was billed at rate 0 because no rate was in effect")
    status = models.CharField(max_length=5, choices=Status.choices, default=Status.DRAFT)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    class Meta:
        db_table = "bills"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["contract", "cycle"], name="uniq_bill_contract_cycle"),
        ]
    def __str__(self): return f"Bill {self.pk} {self.contract} {self.cycle}"
