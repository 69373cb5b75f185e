"""Django ORM models (persistence layer).

These models back the DurableStore. Domain logic lives in venue/domain/.
"""

from django.db import models


class Snapshot(models.Model):
    """Latest JSON snapshot of one entity collection."""

    key = models.CharField(max_length=255, unique=True)
    value = models.JSONField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key


class StreamLine(models.Model):
    """One line of a ticket, notification or audit stream."""

    key = models.CharField(max_length=255)
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["key", "id"], name="venue_streamline_key_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.key}: {self.text[:40]}"
