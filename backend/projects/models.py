from django.db import models


class Project(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        PROCESSING = "processing", "processing"
        COMPLETED = "completed", "completed"
        FAILED = "failed", "failed"

    # status -> statuses it may move to; anything else is a backwards or skipping move
    TRANSITIONS = {
        Status.PENDING: {Status.PROCESSING},
        Status.PROCESSING: {Status.COMPLETED, Status.FAILED},
        Status.COMPLETED: set(),
        Status.FAILED: set(),
    }

    original_video_url = models.TextField()
    identity_frame_url = models.TextField(null=True, blank=True)
    generated_video_url = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    error = models.TextField(blank=True, default="")
    completion_task_id = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "projects"

    def __str__(self):
        return f"Project #{self.id} ({self.status})"

    @classmethod
    def sources_for(cls, status):
        """Statuses from which a project may move to ``status``."""
        return [src for src, targets in cls.TRANSITIONS.items() if status in targets]

    @property
    def is_terminal(self):
        return not self.TRANSITIONS[self.status]
