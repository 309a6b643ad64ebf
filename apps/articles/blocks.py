"""
Content block variants used by the article editor.

Articles carry three block lists (``contentBlocks``, ``recipeBlocks``,
``imageBlocks``). Each stored block is a JSON object tagged with
``blockType``. ``parse_block`` is the single place raw JSON becomes one of
the typed variants below; consumers dispatch over ``BlockType`` with a table
that must cover every member (see ``require_all_block_types``).

Parsing is tolerant for the publication checklist: missing or malformed
values become ``None`` / empty tuples so they can be reported. Writes go
through ``block_schema_errors``, which rejects badly typed values instead.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union


class BlockType(str, Enum):
    INTRODUCTION = "introduction"
    EDITORIAL_NOTE = "editorialNote"
    RECIPE_CARD = "recipeCard"
    IMAGE_GALLERY = "imageGallery"


class EditorialTone(str, Enum):
    NOTE = "note"
    TIP = "tip"
    VARIATION = "variation"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class BlockError(ValueError):
    """A stored block that cannot be used where it sits."""


class UnknownBlockType(BlockError):
    """Raised when a stored block carries a ``blockType`` we do not know."""

    def __init__(self, block_type: Any):
        self.block_type = block_type
        super().__init__(f"Unknown block type '{block_type}'.")


class BlockNotAllowed(BlockError):
    """A known block type stored in a list that does not accept it."""

    def __init__(self, block_type: "BlockType", field_name: str):
        self.block_type = block_type
        self.field_name = field_name
        super().__init__(f"Block type '{block_type.value}' is not allowed in {field_name}.")


# Block list fields on an article and the variant assumed when a stored
# block has no ``blockType`` tag.
BLOCK_FIELDS: Dict[str, BlockType] = {
    "contentBlocks": BlockType.INTRODUCTION,
    "recipeBlocks": BlockType.RECIPE_CARD,
    "imageBlocks": BlockType.IMAGE_GALLERY,
}

# Block types each list accepts.
ALLOWED_BLOCK_TYPES: Dict[str, FrozenSet[BlockType]] = {
    "contentBlocks": frozenset({BlockType.INTRODUCTION, BlockType.EDITORIAL_NOTE}),
    "recipeBlocks": frozenset({BlockType.RECIPE_CARD}),
    "imageBlocks": frozenset({BlockType.IMAGE_GALLERY}),
}


@dataclass(frozen=True)
class IntroductionBlock:
    title: Optional[str]
    body: Any = None

    block_type = BlockType.INTRODUCTION


@dataclass(frozen=True)
class EditorialNoteBlock:
    title: Optional[str]
    tone: Optional[EditorialTone] = None
    body: Any = None

    block_type = BlockType.EDITORIAL_NOTE


@dataclass(frozen=True)
class Ingredient:
    quantity: Optional[str]
    item: Optional[str]
    notes: Optional[str] = None


@dataclass(frozen=True)
class RecipeStep:
    instruction: Optional[str]


@dataclass(frozen=True)
class RecipeCardBlock:
    title: Optional[str]
    preparation_time_minutes: Optional[int] = None
    cooking_time_minutes: Optional[int] = None
    servings: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    ingredients: Tuple[Ingredient, ...] = ()
    steps: Tuple[RecipeStep, ...] = ()
    tips: Any = None
    personal_notes: Any = None

    block_type = BlockType.RECIPE_CARD


@dataclass(frozen=True)
class GalleryImage:
    image: Any
    caption: Optional[str] = None


@dataclass(frozen=True)
class ImageGalleryBlock:
    title: Optional[str]
    images: Tuple[GalleryImage, ...] = ()

    block_type = BlockType.IMAGE_GALLERY


Block = Union[IntroductionBlock, EditorialNoteBlock, RecipeCardBlock, ImageGalleryBlock]


# =============================================================================
# Parsing helpers
# =============================================================================

def as_list(value: Any) -> List[Any]:
    """Return ``value`` if it is a list, otherwise an empty list."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _minutes(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and value >= 0:
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _choice(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _parse_introduction(raw: Dict[str, Any]) -> IntroductionBlock:
    return IntroductionBlock(title=_text(raw.get("title")), body=raw.get("body"))


def _parse_editorial_note(raw: Dict[str, Any]) -> EditorialNoteBlock:
    return EditorialNoteBlock(
        title=_text(raw.get("title")),
        tone=_choice(EditorialTone, raw.get("tone")),
        body=raw.get("body"),
    )


def _parse_recipe_card(raw: Dict[str, Any]) -> RecipeCardBlock:
    ingredients = tuple(
        Ingredient(
            quantity=_text(row.get("quantity")),
            item=_text(row.get("item")),
            notes=_text(row.get("notes")),
        )
        for row in map(_mapping, as_list(raw.get("ingredients")))
    )
    steps = tuple(
        RecipeStep(instruction=_text(row.get("instruction")))
        for row in map(_mapping, as_list(raw.get("steps")))
    )
    return RecipeCardBlock(
        title=_text(raw.get("title")),
        preparation_time_minutes=_minutes(raw.get("preparationTimeMinutes")),
        cooking_time_minutes=_minutes(raw.get("cookingTimeMinutes")),
        servings=_text(raw.get("servings")),
        difficulty=_choice(Difficulty, raw.get("difficulty")),
        ingredients=ingredients,
        steps=steps,
        tips=raw.get("tips"),
        personal_notes=raw.get("personalNotes"),
    )


def _parse_image_gallery(raw: Dict[str, Any]) -> ImageGalleryBlock:
    images = tuple(
        GalleryImage(image=row.get("image"), caption=_text(row.get("caption")))
        for row in map(_mapping, as_list(raw.get("images")))
    )
    return ImageGalleryBlock(title=_text(raw.get("title")), images=images)


def require_all_block_types(table: Dict[BlockType, Any], owner: str) -> Dict[BlockType, Any]:
    """
    Check that a dispatch table handles every block variant.

    Called at import time by every module that dispatches over blocks, so a
    new ``BlockType`` member fails loudly until each consumer handles it.
    """
    missing = [block_type.value for block_type in BlockType if block_type not in table]
    if missing:
        raise TypeError(f"{owner} does not handle block types: {', '.join(missing)}")
    return table


_PARSERS = require_all_block_types({
    BlockType.INTRODUCTION: _parse_introduction,
    BlockType.EDITORIAL_NOTE: _parse_editorial_note,
    BlockType.RECIPE_CARD: _parse_recipe_card,
    BlockType.IMAGE_GALLERY: _parse_image_gallery,
}, "block parser")


def _block_type(raw: Dict[str, Any], default: Optional[BlockType]) -> BlockType:
    tag = raw.get("blockType") or default
    try:
        return BlockType(tag)
    except ValueError:
        raise UnknownBlockType(tag)


def parse_block(raw: Any, default: Optional[BlockType] = None) -> Block:
    """
    Build a typed block from stored JSON.

    Args:
        raw: The stored block mapping. Non-mappings parse as an empty block.
        default: Variant to assume when ``blockType`` is missing.

    Raises:
        UnknownBlockType: ``blockType`` is set to an unknown value, or is
            missing and no default was given.
    """
    raw = _mapping(raw)
    return _PARSERS[_block_type(raw, default)](raw)


def iter_blocks(value: Any, field_name: str) -> Iterable[Tuple[int, Union[Block, BlockError]]]:
    """
    Yield ``(index, block)`` for each entry of an article block list.

    Entries with an unknown type, or a type the list does not accept, are
    yielded as a ``BlockError`` instead of being raised so callers can report
    and continue.
    """
    default = BLOCK_FIELDS.get(field_name)
    allowed = ALLOWED_BLOCK_TYPES.get(field_name, frozenset(BlockType))
    for index, raw in enumerate(as_list(value)):
        try:
            block = parse_block(raw, default=default)
        except UnknownBlockType as exc:
            yield index, exc
            continue
        if block.block_type not in allowed:
            yield index, BlockNotAllowed(block.block_type, field_name)
            continue
        yield index, block


# =============================================================================
# Write-time schema checks
# =============================================================================

def _minutes_errors(raw, key):
    value = raw.get(key)
    if value is None:
        return []
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return [(key, "Enter a whole number of minutes (0 or more).")]
    return []


def _choice_errors(raw, key, enum_cls):
    value = raw.get(key)
    if value in (None, "") or _choice(enum_cls, value) is not None:
        return []
    choices = ", ".join(member.value for member in enum_cls)
    return [(key, f"Must be one of: {choices}.")]


def _list_errors(raw, key):
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(row, dict) for row in value):
        return [(key, "Expected a list of objects.")]
    return []


def _introduction_schema(raw):
    return []


def _editorial_note_schema(raw):
    return _choice_errors(raw, "tone", EditorialTone)


def _recipe_card_schema(raw):
    return (
        _minutes_errors(raw, "preparationTimeMinutes")
        + _minutes_errors(raw, "cookingTimeMinutes")
        + _choice_errors(raw, "difficulty", Difficulty)
        + _list_errors(raw, "ingredients")
        + _list_errors(raw, "steps")
    )


def _image_gallery_schema(raw):
    return _list_errors(raw, "images")


_SCHEMA_CHECKS = require_all_block_types({
    BlockType.INTRODUCTION: _introduction_schema,
    BlockType.EDITORIAL_NOTE: _editorial_note_schema,
    BlockType.RECIPE_CARD: _recipe_card_schema,
    BlockType.IMAGE_GALLERY: _image_gallery_schema,
}, "block schema")


def block_schema_errors(value: Any, field_name: str) -> Dict[str, List[str]]:
    """
    Strict checks for a block list about to be stored.

    Returns messages keyed by ``<index>.<key>`` (``<index>`` alone for an
    entry that is not an object); empty when the list is acceptable. Missing
    values are left to the publication checklist.
    """
    errors: Dict[str, List[str]] = {}
    default = BLOCK_FIELDS.get(field_name)
    allowed = ALLOWED_BLOCK_TYPES.get(field_name, frozenset(BlockType))

    for index, raw in enumerate(as_list(value)):
        if not isinstance(raw, dict):
            errors[str(index)] = ["Expected a block object."]
            continue
        try:
            block_type = _block_type(raw, default)
        except UnknownBlockType as exc:
            errors[f"{index}.blockType"] = [str(exc)]
            continue
        if block_type not in allowed:
            errors[f"{index}.blockType"] = [str(BlockNotAllowed(block_type, field_name))]
            continue
        for key, message in _SCHEMA_CHECKS[block_type](raw):
            errors.setdefault(f"{index}.{key}", []).append(message)

    return errors
