"""
Tests for content block parsing and rich-text helpers.
"""

import pytest

from apps.articles.blocks import (
    BlockNotAllowed,
    BlockType,
    Difficulty,
    EditorialNoteBlock,
    EditorialTone,
    ImageGalleryBlock,
    RecipeCardBlock,
    UnknownBlockType,
    block_schema_errors,
    iter_blocks,
    parse_block,
    require_all_block_types,
)
from apps.articles.richtext import has_rich_text_content, render_rich_text

from .factories import rich_text, recipe_block


class TestParseBlock:

    def test_recipe_card(self):
        block = parse_block(recipe_block(preparationTimeMinutes="15", difficulty="hard"))

        assert isinstance(block, RecipeCardBlock)
        assert block.block_type is BlockType.RECIPE_CARD
        assert block.preparation_time_minutes == 15
        assert block.cooking_time_minutes == 35
        assert block.difficulty is Difficulty.HARD
        assert block.ingredients[0].item == "dark chocolate"
        assert block.steps[0].instruction == "Melt the chocolate."

    def test_tolerates_malformed_values(self):
        block = parse_block({
            "blockType": "recipeCard",
            "preparationTimeMinutes": -5,
            "difficulty": "extreme",
            "ingredients": "not a list",
            "steps": [None, "text"],
        })

        assert block.title is None
        assert block.preparation_time_minutes is None
        assert block.difficulty is None
        assert block.ingredients == ()
        assert [step.instruction for step in block.steps] == [None, None]

    def test_editorial_note_tone(self):
        block = parse_block({"blockType": "editorialNote", "title": "Tip", "tone": "variation"})

        assert isinstance(block, EditorialNoteBlock)
        assert block.tone is EditorialTone.VARIATION

    def test_default_used_when_block_type_missing(self):
        block = parse_block({"images": [{"image": "m1", "caption": "Top"}]}, default=BlockType.IMAGE_GALLERY)

        assert isinstance(block, ImageGalleryBlock)
        assert block.images[0].caption == "Top"

    def test_unknown_block_type_raises(self):
        with pytest.raises(UnknownBlockType) as exc_info:
            parse_block({"blockType": "video"})

        assert exc_info.value.block_type == "video"
        assert str(exc_info.value) == "Unknown block type 'video'."

    def test_missing_block_type_without_default_raises(self):
        with pytest.raises(UnknownBlockType):
            parse_block({"title": "x"})

    def test_iter_blocks_yields_errors_in_place(self):
        results = list(iter_blocks([{"blockType": "nope"}, {"title": "Intro"}], "contentBlocks"))

        assert results[0][0] == 0
        assert isinstance(results[0][1], UnknownBlockType)
        assert results[1][1].block_type is BlockType.INTRODUCTION

    def test_iter_blocks_ignores_non_lists(self):
        assert list(iter_blocks(None, "recipeBlocks")) == []
        assert list(iter_blocks({"blockType": "recipeCard"}, "recipeBlocks")) == []

    @pytest.mark.parametrize("field_name, raw", [
        ("contentBlocks", recipe_block()),
        ("recipeBlocks", {"blockType": "introduction", "title": "Intro"}),
        ("imageBlocks", {"blockType": "editorialNote", "images": []}),
    ])
    def test_iter_blocks_rejects_types_from_other_lists(self, field_name, raw):
        [(index, result)] = list(iter_blocks([raw], field_name))

        assert index == 0
        assert isinstance(result, BlockNotAllowed)
        assert result.field_name == field_name
        assert str(result) == f"Block type '{raw['blockType']}' is not allowed in {field_name}."

    def test_numeric_text_values_are_not_coerced(self):
        block = parse_block(recipe_block(servings=4, ingredients=[{"quantity": 2, "item": "eggs"}]))

        assert block.servings is None
        assert block.ingredients[0].quantity is None
        assert block.ingredients[0].item == "eggs"


class TestBlockSchemaErrors:

    def test_valid_lists_have_no_errors(self):
        assert block_schema_errors([recipe_block()], "recipeBlocks") == {}
        assert block_schema_errors([{"blockType": "editorialNote", "tone": "tip"}], "contentBlocks") == {}
        assert block_schema_errors(None, "imageBlocks") == {}

    def test_missing_values_are_left_to_the_checklist(self):
        block = recipe_block(preparationTimeMinutes=None, difficulty="", ingredients=None)

        assert block_schema_errors([block], "recipeBlocks") == {}

    def test_bad_recipe_values_are_keyed_by_index(self):
        block = recipe_block(
            difficulty="extreme",
            preparationTimeMinutes=-5,
            cookingTimeMinutes="soon",
        )

        errors = block_schema_errors([recipe_block(), block], "recipeBlocks")

        assert errors == {
            "1.preparationTimeMinutes": ["Enter a whole number of minutes (0 or more)."],
            "1.cookingTimeMinutes": ["Enter a whole number of minutes (0 or more)."],
            "1.difficulty": ["Must be one of: easy, medium, hard."],
        }

    @pytest.mark.parametrize("minutes", [True, 2.5, "15"])
    def test_minutes_must_be_integers(self, minutes):
        errors = block_schema_errors([recipe_block(cookingTimeMinutes=minutes)], "recipeBlocks")

        assert list(errors) == ["0.cookingTimeMinutes"]

    def test_bad_tone(self):
        errors = block_schema_errors([{"blockType": "editorialNote", "tone": "rant"}], "contentBlocks")

        assert errors == {"0.tone": ["Must be one of: note, tip, variation."]}

    def test_rows_must_be_objects(self):
        errors = block_schema_errors(
            [recipe_block(steps=["Mix."]), {"blockType": "imageGallery"}],
            "recipeBlocks",
        )

        assert errors == {
            "0.steps": ["Expected a list of objects."],
            "1.blockType": ["Block type 'imageGallery' is not allowed in recipeBlocks."],
        }

    def test_entries_must_be_objects_with_known_types(self):
        errors = block_schema_errors(["text", {"blockType": "video"}], "contentBlocks")

        assert errors == {
            "0": ["Expected a block object."],
            "1.blockType": ["Unknown block type 'video'."],
        }


class TestRequireAllBlockTypes:

    def test_incomplete_table_fails(self):
        with pytest.raises(TypeError, match="imageGallery"):
            require_all_block_types({
                BlockType.INTRODUCTION: None,
                BlockType.EDITORIAL_NOTE: None,
                BlockType.RECIPE_CARD: None,
            }, "test table")


class TestHasRichTextContent:

    @pytest.mark.parametrize("value", [
        None,
        "text",
        {},
        {"root": None},
        {"root": {"children": "nope"}},
        {"root": {"children": []}},
        {"root": {"children": [{"type": "paragraph", "children": [{"type": "text", "text": "  \n"}]}]}},
    ])
    def test_empty_documents(self, value):
        assert has_rich_text_content(value) is False

    @pytest.mark.parametrize("node_type", ["upload", "relationship", "block"])
    def test_embed_nodes_count(self, node_type):
        assert has_rich_text_content({"root": {"children": [{"type": node_type}]}}) is True

    def test_text_node(self):
        assert has_rich_text_content(rich_text("", "Hello")) is True

    def test_deeply_nested_document_does_not_recurse(self):
        node = {"type": "text", "text": "deep"}
        for _ in range(20000):
            node = {"type": "paragraph", "children": [node]}

        assert has_rich_text_content({"root": {"children": [node]}}) is True


class TestRenderRichText:

    def test_escapes_text(self):
        html = render_rich_text(rich_text("<script>alert(1)</script>"))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_formatting_and_structure(self):
        document = {"root": {"children": [
            {"type": "heading", "tag": "h3", "children": [{"type": "text", "text": "Method", "format": 1}]},
            {"type": "list", "listType": "number", "children": [
                {"type": "listitem", "children": [{"type": "text", "text": "Whisk"}]},
            ]},
            {"type": "paragraph", "children": [
                {"type": "link", "fields": {"url": "https://example.com"},
                 "children": [{"type": "text", "text": "site"}]},
                {"type": "link", "fields": {"url": "javascript:alert(1)"},
                 "children": [{"type": "text", "text": "bad"}]},
            ]},
        ]}}

        html = render_rich_text(document)

        assert "<h3><strong>Method</strong></h3>" in html
        assert "<ol><li>Whisk</li></ol>" in html
        assert '<a href="https://example.com">site</a>' in html
        assert "javascript:" not in html

    def test_empty_document_renders_nothing(self):
        assert render_rich_text(rich_text(" ")) == ""
