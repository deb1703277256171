from django.contrib import admin
from .models import Project

@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('id', 'created_at', 'status', 'error', 'video_name')
    list_filter = ('status',)
    search_fields = ('id',)
    readonly_fields = ('original_video_url', 'created_at', 'completion_task_id')

    @admin.display(description="Original Filename")
    def video_name(self, obj):
        return obj.original_video_url.split('/')[-1] if obj.original_video_url else 'N/A'
