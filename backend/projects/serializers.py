from django.conf import settings
from django.core.validators import FileExtensionValidator
from rest_framework import serializers

from .models import Project

VIDEO_EXTENSIONS = ["mp4", "mov", "webm"]


class ProjectSerializer(serializers.ModelSerializer):
    originalVideoUrl = serializers.CharField(source="original_video_url", read_only=True)
    identityFrameUrl = serializers.CharField(source="identity_frame_url", read_only=True, allow_null=True)
    generatedVideoUrl = serializers.CharField(source="generated_video_url", read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Project
        fields = ["id", "originalVideoUrl", "identityFrameUrl", "generatedVideoUrl", "status", "createdAt"]
        read_only_fields = ["id", "status"]


class ProjectUploadSerializer(serializers.Serializer):
    video = serializers.FileField(validators=[FileExtensionValidator(allowed_extensions=VIDEO_EXTENSIONS)])

    def validate_video(self, video):
        limit = settings.MAX_UPLOAD_SIZE
        if video.size > limit:
            raise serializers.ValidationError(f"video larger than {limit // (1024 * 1024)}MB")
        return video
