import uuid
from django.db import models


TITLE_MAX_LENGTH = 200


class Task(models.Model):
    """
    A single to-do item.

    The primary key is store-assigned and never exposed as-is; callers see
    the string form produced by apps.tasks.identifiers.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    done = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        # Newest first; id breaks ties so ordering is total
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title
