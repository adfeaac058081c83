from django.db import migrations

UTILITY_TYPES = (
    ("electric", "ค่าไฟฟ้า"),
    ("water", "ค่าน้ำ"),
)


def seed_utility_types(apps, schema_editor):
    UtilityType = apps.get_model("billing", "UtilityType")
    for code, name_th in UTILITY_TYPES:
        UtilityType.objects.get_or_create(code=code, defaults={"name_th": name_th})


class Migration(migrations.Migration):

    dependencies = [
        ("billing", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_utility_types, migrations.RunPython.noop),
    ]
