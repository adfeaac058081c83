from django.apps import AppConfig


class DormConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dorm"
    verbose_name = "Dormitory"
