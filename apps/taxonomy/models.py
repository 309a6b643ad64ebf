"""
Author, category and tag collections.
"""

from django.db import models
from apps.core.models import BaseModel


class Author(BaseModel):
    """An article author shown on the front end."""

    name = models.CharField(
        max_length=200,
        verbose_name='Name'
    )

    email = models.EmailField(
        blank=True,
        verbose_name='Email'
    )

    bio = models.TextField(
        blank=True,
        verbose_name='Bio'
    )

    link = models.URLField(
        max_length=500,
        blank=True,
        verbose_name='Author URL'
    )

    class Meta:
        db_table = 'authors'
        ordering = ['name']

    def __str__(self):
        return self.name


class Category(BaseModel):
    name = models.CharField(max_length=200, verbose_name='Name')
    slug = models.SlugField(max_length=200, unique=True, verbose_name='Slug')
    description = models.TextField(blank=True, verbose_name='Description')

    class Meta:
        db_table = 'categories'
        verbose_name_plural = 'Categories'
        ordering = ['name']

    def __str__(self):
        return self.name


class Tag(BaseModel):
    name = models.CharField(max_length=200, verbose_name='Name')
    slug = models.SlugField(max_length=200, unique=True, verbose_name='Slug')
    description = models.TextField(blank=True, verbose_name='Description')

    class Meta:
        db_table = 'tags'
        ordering = ['name']

    def __str__(self):
        return self.name
