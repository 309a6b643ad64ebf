"""
Builders for article documents used across the article tests.
"""


def rich_text(*paragraphs):
    """A Lexical document with one paragraph per text."""
    return {
        "root": {
            "type": "root",
            "children": [
                {
                    "type": "paragraph",
                    "children": [{"type": "text", "text": text, "format": 0}],
                }
                for text in paragraphs
            ],
        }
    }


def recipe_block(**overrides):
    block = {
        "blockType": "recipeCard",
        "title": "Chocolate cake",
        "preparationTimeMinutes": 20,
        "cookingTimeMinutes": 35,
        "servings": "Serves 4",
        "difficulty": "medium",
        "ingredients": [{"quantity": "200 g", "item": "dark chocolate", "notes": "chopped"}],
        "steps": [{"instruction": "Melt the chocolate."}],
    }
    block.update(overrides)
    return block


def ready_document(**overrides):
    """A modern-content document that passes the checklist with an inline-alt image."""
    document = {
        "title": "Cake",
        "slug": "cake",
        "date": "2024-01-01",
        "readyForPublication": True,
        "contentV2": rich_text("A cake."),
        "excerpt": "A quick chocolate cake.",
        "featuredMedia": {"id": "media-1", "alt": "Cake on a plate"},
    }
    document.update(overrides)
    return document
