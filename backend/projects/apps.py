from django.apps import AppConfig


class ProjectsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "projects"

    def ready(self):
        from django.conf import settings
        from motion import MotionTransfer

        from .jobs import ProcessingTrigger
        from .store import DatabaseProjectStore

        self.store = DatabaseProjectStore()
        self.trigger = ProcessingTrigger(
            self.store,
            delay_seconds=settings.PROCESSING_DELAY_SECONDS,
            transfer=MotionTransfer(settings.IDENTITY_FRAME_PLACEHOLDER_URL),
        )
