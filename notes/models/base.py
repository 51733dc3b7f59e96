"""
Abstract bases shared by notes models.

Notes are never removed outright from the panel: deleting one flags it and
hides it from the default manager, so admins can bring it back. Bulk
operations live on the queryset so the admin and the API share them.
"""

from django.db import models
from django.utils import timezone


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True


class SoftDeleteQuerySet(models.QuerySet):
    def alive(self):
        return self.filter(is_deleted=False)

    def trashed(self):
        return self.filter(is_deleted=True)

    def soft_delete(self):
        """Flag every live row in the queryset as deleted. Returns the row count."""
        return self.alive().update(is_deleted=True, deleted_at=timezone.now())

    def restore(self):
        """Clear the deleted flag on every trashed row. Returns the row count."""
        return self.trashed().update(is_deleted=False, deleted_at=None)


class SoftDeleteManager(models.Manager):
    """Default manager: hides soft-deleted rows."""

    def get_queryset(self):
        return SoftDeleteQuerySet(self.model, using=self._db).alive()


class SoftDeleteModel(models.Model):
    is_deleted = models.BooleanField(default=False, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = SoftDeleteManager()
    all_objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        abstract = True

    def _save_flags(self):
        fields = ["is_deleted", "deleted_at"]
        if isinstance(self, TimeStampedModel):
            fields.append("updated_at")
        self.save(update_fields=fields)

    def delete(self, using=None, keep_parents=False, soft: bool = True):
        """
        Soft delete by default; ``soft=False`` removes the row from the database.
        """
        if not soft:
            return super().delete(using=using, keep_parents=keep_parents)
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self._save_flags()

    def restore(self):
        self.is_deleted = False
        self.deleted_at = None
        self._save_flags()
