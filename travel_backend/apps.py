from django.apps import AppConfig

class TravelBackendConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'travel_backend'
    verbose_name = 'TriPlanner Back Office'

    def ready(self):
        import travel_backend.signals  # noqa: F401
