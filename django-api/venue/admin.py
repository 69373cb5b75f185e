from django.contrib import admin

from venue.models import Snapshot, StreamLine


@admin.register(Snapshot)
class SnapshotAdmin(admin.ModelAdmin):
    list_display = ["key", "updated_at"]
    search_fields = ["key"]
    readonly_fields = ["updated_at"]


@admin.register(StreamLine)
class StreamLineAdmin(admin.ModelAdmin):
    list_display = ["key", "text", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["key", "text"]
