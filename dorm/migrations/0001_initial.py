import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Building",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name_th", models.CharField(max_length=150)),
                ("name_en", models.CharField(blank=True, max_length=150, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "buildings",
                "ordering": ["name_th"],
            },
        ),
        migrations.CreateModel(
            name="Tenant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name_th", models.CharField(max_length=100)),
                ("last_name_th", models.CharField(max_length=100)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("phone", models.CharField(blank=True, max_length=30, null=True)),
                ("status", models.CharField(choices=[("active", "ใช้งาน"), ("inactive", "ไม่ใช้งาน")], default="active", max_length=8)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "tenants",
                "ordering": ["first_name_th", "last_name_th"],
            },
        ),
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("room_number", models.CharField(max_length=20)),
                ("floor_no", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("status", models.CharField(choices=[("available", "ว่าง"), ("occupied", "มีผู้เช่า"), ("maintenance", "ปิดซ่อม")], default="available", max_length=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("building", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="rooms", to="dorm.building")),
            ],
            options={
                "db_table": "rooms",
                "ordering": ["building_id", "room_number"],
                "constraints": [
                    models.UniqueConstraint(fields=("building", "room_number"), name="uniq_room_number_per_building"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Contract",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(blank=True, null=True)),
                ("status", models.CharField(choices=[("active", "ใช้งาน"), ("ended", "สิ้นสุด")], default="active", max_length=6)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("room", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contracts", to="dorm.room")),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contracts", to="dorm.tenant")),
            ],
            options={
                "db_table": "contracts",
                "indexes": [models.Index(fields=["room", "status"], name="contracts_room_status_idx")],
            },
        ),
    ]
