"""
Tests for the authenticated article preview.
"""

import pytest
from django.urls import reverse

from apps.articles.models import Article
from apps.articles.preview import BLOCK_RENDERERS, _gallery_media, build_preview_context
from apps.articles.blocks import BlockType
from apps.core.observability import metrics

from .factories import rich_text, recipe_block


@pytest.fixture
def logged_in_client(client, user):
    client.force_login(user)
    return client


@pytest.mark.django_db
class TestPreviewView:

    def test_requires_login(self, client):
        Article.objects.create(title="Cake", slug="cake")

        response = client.get(reverse('preview:article-preview', args=['cake']))

        assert response.status_code == 302
        assert response['Location'].startswith('/admin/login/')

    def test_unknown_slug_is_404(self, logged_in_client):
        response = logged_in_client.get(reverse('preview:article-preview', args=['missing']))

        assert response.status_code == 404

    def test_renders_modern_content(self, logged_in_client, media_with_alt):
        Article.objects.create(
            title="Cake",
            slug="cake",
            excerpt="Rich & dark.",
            content_v2=rich_text("Preheat the oven."),
            content_blocks=[
                {"blockType": "editorialNote", "title": "Tip", "tone": "tip", "body": rich_text("Use butter.")},
                {"blockType": "video"},
            ],
            recipe_blocks=[recipe_block()],
            image_blocks=[{"blockType": "imageGallery", "title": "Photos", "images": [{"image": str(media_with_alt.id)}]}],
            content="<p>Legacy body</p>",
        )

        response = logged_in_client.get(reverse('preview:article-preview', args=['cake']))

        html = response.content.decode()
        assert response.status_code == 200
        assert "Rich &amp; dark." in html
        assert "<p>Preheat the oven.</p>" in html
        assert '<p class="preview-kicker">tip</p>' in html
        assert "<strong>200 g</strong> dark chocolate (chopped)" in html
        assert "<li>Melt the chocolate.</li>" in html
        assert "Photos" in html
        assert "Legacy body" not in html

    def test_renders_legacy_content(self, logged_in_client):
        Article.objects.create(
            title="Old",
            slug="old",
            content="<p>Legacy <em>body</em></p>",
            featured_image={"url": "https://cdn.example.com/old.jpg", "alt": "Old photo"},
        )

        response = logged_in_client.get(reverse('preview:article-preview', args=['old']))

        html = response.content.decode()
        assert "<p>Legacy <em>body</em></p>" in html
        assert 'src="https://cdn.example.com/old.jpg"' in html
        assert 'alt="Old photo"' in html
        assert "preview-legacy" in html


class TestPreviewRenderers:

    def test_every_block_type_has_a_renderer(self):
        assert set(BLOCK_RENDERERS) == set(BlockType)

    @pytest.mark.django_db
    def test_featured_alt_falls_back_to_title(self):
        article = Article.objects.create(title="Plain", slug="plain", featured_image={"url": "/x.jpg"})

        context = build_preview_context(article)

        assert context["featured_url"] == "/x.jpg"
        assert context["featured_alt"] == "Plain"
        assert context["has_modern_content"] is False

    @pytest.mark.django_db
    def test_times_modern_render(self):
        article = Article.objects.create(title="Cake", slug="cake", content_v2=rich_text("A cake."))

        build_preview_context(article)

        histograms = metrics.get_all_metrics()["histograms"]
        assert histograms["articles.preview_render_duration_ms"]["count"] == 1


@pytest.mark.django_db
class TestGalleryMedia:

    def test_resolves_all_galleries_in_one_query(self, media_with_alt, media_without_alt, django_assert_num_queries):
        article = Article(image_blocks=[
            {"blockType": "imageGallery", "images": [{"image": str(media_with_alt.id)}, {"image": "not-a-uuid"}]},
            {"blockType": "imageGallery", "images": [{"image": {"id": str(media_without_alt.id)}}]},
            {"blockType": "recipeCard", "images": [{"image": "ignored"}]},
        ])

        with django_assert_num_queries(1):
            media_map = _gallery_media(article)

        assert media_map == {
            str(media_with_alt.id): media_with_alt,
            str(media_without_alt.id): media_without_alt,
        }

    def test_no_query_without_valid_ids(self, django_assert_num_queries):
        article = Article(image_blocks=[{"blockType": "imageGallery", "images": [{"image": "not-a-uuid"}]}])

        with django_assert_num_queries(0):
            assert _gallery_media(article) == {}
