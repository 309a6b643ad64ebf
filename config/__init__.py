"""
LCDB content backend project package.

Loads the Celery app on Django startup so shared_task uses it.
"""

from .celery import app as celery_app

__all__ = ('celery_app',)
