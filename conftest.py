"""
Shared pytest fixtures.
"""

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.core.observability import metrics


@pytest.fixture(autouse=True)
def clear_metrics():
    metrics.clear()
    yield
    metrics.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user(username='editor', password='editor-pass-123', email='editor@example.com')


@pytest.fixture
def authenticated_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def media_with_alt(db):
    from apps.media.models import Media
    return Media.objects.create(alt='Chocolate cake on a plate')


@pytest.fixture
def media_without_alt(db):
    from apps.media.models import Media
    return Media.objects.create(alt='')
