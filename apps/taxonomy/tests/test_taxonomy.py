"""
Tests for the author, category and tag collections.
"""

import pytest

from apps.taxonomy.models import Author, Category, Tag


@pytest.mark.django_db
class TestCategoryAPI:
    url = '/api/categories/'

    def test_public_read_by_slug(self, api_client):
        Category.objects.create(name="Desserts", slug="desserts")

        response = api_client.get(f'{self.url}desserts/')

        assert response.status_code == 200
        assert response.json()["name"] == "Desserts"

    def test_create_requires_authentication(self, api_client):
        response = api_client.post(self.url, {"name": "Mains", "slug": "mains"}, format='json')

        assert response.status_code == 401

    def test_create_and_update(self, authenticated_client):
        response = authenticated_client.post(self.url, {"name": "Mains", "slug": "mains"}, format='json')
        assert response.status_code == 201

        response = authenticated_client.patch(
            f'{self.url}mains/', {"description": "Main courses"}, format='json'
        )

        assert response.status_code == 200
        assert Category.objects.get(slug="mains").description == "Main courses"

    def test_duplicate_slug_rejected(self, authenticated_client):
        Category.objects.create(name="Desserts", slug="desserts")

        response = authenticated_client.post(self.url, {"name": "Sweets", "slug": "desserts"}, format='json')

        assert response.status_code == 400
        assert "slug" in response.json()["error"]["details"]


@pytest.mark.django_db
class TestTagAPI:
    url = '/api/tags/'

    def test_list(self, api_client):
        Tag.objects.create(name="Chocolate", slug="chocolate")
        Tag.objects.create(name="Quick", slug="quick")

        body = api_client.get(self.url).json()

        assert body["count"] == 2
        assert {tag["slug"] for tag in body["results"]} == {"chocolate", "quick"}

    def test_delete(self, authenticated_client):
        Tag.objects.create(name="Quick", slug="quick")

        response = authenticated_client.delete(f'{self.url}quick/')

        assert response.status_code == 204
        assert not Tag.objects.exists()


@pytest.mark.django_db
class TestAuthorAPI:
    url = '/api/authors/'

    def test_create(self, authenticated_client):
        response = authenticated_client.post(
            self.url,
            {"name": "Julia", "email": "julia@example.com", "link": "https://example.com/julia"},
            format='json',
        )

        assert response.status_code == 201
        author = Author.objects.get()
        assert author.name == "Julia"
        assert response.json()["id"] == str(author.id)

    def test_invalid_link(self, authenticated_client):
        response = authenticated_client.post(self.url, {"name": "Julia", "link": "not a url"}, format='json')

        assert response.status_code == 400
        assert "link" in response.json()["error"]["details"]
