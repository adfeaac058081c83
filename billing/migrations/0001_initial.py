import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("dorm", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="BillingCycle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("billing_year", models.PositiveIntegerField()),
                ("billing_month", models.PositiveSmallIntegerField()),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(blank=True, null=True)),
                ("due_date", models.DateField()),
                ("status", models.CharField(choices=[("open", "เปิด"), ("closed", "ปิด")], default="open", max_length=6)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "billing_cycles",
                "ordering": ["-billing_year", "-billing_month"],
                "constraints": [
                    models.UniqueConstraint(fields=("billing_year", "billing_month"), name="uniq_cycle_year_month"),
                ],
            },
        ),
        migrations.CreateModel(
            name="UtilityType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(choices=[("electric", "ค่าไฟฟ้า"), ("water", "ค่าน้ำ")], max_length=10, unique=True)),
                ("name_th", models.CharField(max_length=50)),
            ],
            options={
                "db_table": "utility_types",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="UtilityRate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("rate_per_unit", models.DecimalField(decimal_places=4, max_digits=10)),
                ("effective_date", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("utility_type", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="rates", to="billing.utilitytype")),
            ],
            options={
                "db_table": "utility_rates",
                "ordering": ["utility_type_id", "-effective_date"],
                "indexes": [models.Index(fields=["utility_type", "effective_date"], name="utility_rates_type_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="MeterReading",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("meter_start", models.IntegerField()),
                ("meter_end", models.IntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("cycle", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="meter_readings", to="billing.billingcycle")),
                ("room", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="meter_readings", to="dorm.room")),
                ("utility_type", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="readings", to="billing.utilitytype")),
            ],
            options={
                "db_table": "bill_utility_readings",
                "constraints": [
                    models.UniqueConstraint(fields=("room", "cycle", "utility_type"), name="uniq_reading_room_cycle_utility"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Bill",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("maintenance_fee", models.DecimalField(decimal_places=2, max_digits=12)),
                ("electric_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("water_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("tenant_count", models.PositiveSmallIntegerField(default=1)),
                ("rate_missing", models.BooleanField(default=False, help_text="A reading was billed at rate 0 because no rate was in effect")),
                ("status", models.CharField(choices=[("draft", "ร่าง"), ("sent", "ส่งแล้ว"), ("paid", "ชำระแล้ว")], default="draft", max_length=5)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("contract", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="bills", to="dorm.contract")),
                ("cycle", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="bills", to="billing.billingcycle")),
            ],
            options={
                "db_table": "bills",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("contract", "cycle"), name="uniq_bill_contract_cycle"),
                ],
            },
        ),
    ]
