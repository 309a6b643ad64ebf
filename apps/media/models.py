"""
Media library model.
"""

from django.db import models
from apps.core.models import BaseModel


class Media(BaseModel):
    """
    An uploaded image. Articles reference media by id and rely on the stored
    alt text for accessibility.
    """

    alt = models.CharField(
        max_length=500,
        verbose_name='Alt Text',
        help_text='Describes the image for screen readers and SEO'
    )

    file = models.FileField(
        upload_to='uploads/%Y/%m/',
        blank=True,
        verbose_name='File',
        help_text='Uploaded image file'
    )

    width = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Width'
    )

    height = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Height'
    )

    class Meta:
        db_table = 'media'
        verbose_name = 'Media'
        verbose_name_plural = 'Media'
        ordering = ['-created_at']

    def __str__(self):
        return self.alt or str(self.id)

    @property
    def url(self) -> str:
        return self.file.url if self.file else ''
