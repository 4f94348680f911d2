"""
Sandwich composition encoding

A composition is persisted only as the order's description text, e.g.

    Bread: Wheat (toasted); Cheese: Swiss, Cheddar; Meats: Turkey, Ham

encode_composition renders validated ingredient ids into that text and
decode_description parses it back into ids against the current catalog.
Decoding is best effort: names containing "," or ";", duplicate names within a
category and ingredients renamed after the order was written do not survive the
round trip.
"""
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from sandwich_api.core.exceptions import ValidationError
from sandwich_api.models.catalog import IngredientCategory
from sandwich_api.models.sandwich import CompositionSelection
from sandwich_api.services.catalog import CatalogStore

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Custom Sandwich"
BLOCK_SEPARATOR = "; "
ITEM_SEPARATOR = ", "
TOASTED_MARKER = "(toasted)"

_TOASTED_RE = re.compile(r"\(\s*toasted\s*\)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class CategoryField:
    category: IngredientCategory
    field: str  # attribute on CompositionSelection
    wire: str  # request body name, used as the error key
    label: str  # block label in the description
    missing: str  # validation message


BREAD = CategoryField(IngredientCategory.BREADS, "bread_id", "breadId", "Bread", "Bread not found")

# Description block order after the bread block
MULTI_FIELDS = (
    CategoryField(IngredientCategory.CHEESES, "cheese_ids", "cheeseIds", "Cheese", "One or more cheeses not found"),
    CategoryField(IngredientCategory.DRESSINGS, "dressing_ids", "dressingIds", "Dressing", "One or more dressings not found"),
    CategoryField(IngredientCategory.MEATS, "meat_ids", "meatIds", "Meats", "One or more meats not found"),
    CategoryField(IngredientCategory.TOPPINGS, "topping_ids", "toppingIds", "Toppings", "One or more toppings not found"),
)

# Accepted block labels when parsing, lower-cased
_LABELS = {
    "bread": BREAD,
    "cheese": MULTI_FIELDS[0],
    "dressing": MULTI_FIELDS[1],
    "meats": MULTI_FIELDS[2],
    "meat": MULTI_FIELDS[2],
    "toppings": MULTI_FIELDS[3],
    "topping": MULTI_FIELDS[3],
}


@dataclass
class EncodedComposition:
    name: str
    description: Optional[str]


def _present(names: List[str]) -> List[str]:
    return [n for n in names if n and n.strip()]


def resolve_selection(selection: CompositionSelection, catalog: CatalogStore):
    """Resolve every selected id to its name.

    Returns (bread name or None, {field: [names]}). Raises
    ValidationError naming every field that holds an unknown id.
    """
    errors: Dict[str, str] = {}
    bread: Optional[str] = None

    if selection.bread_id is not None:
        bread = catalog.resolve(BREAD.category, selection.bread_id)
        if bread is None:
            errors[BREAD.wire] = BREAD.missing

    names: Dict[str, List[str]] = {}
    for entry in MULTI_FIELDS:
        resolved = []
        for option_id in getattr(selection, entry.field) or []:
            name = catalog.resolve(entry.category, option_id)
            if name is None:
                errors[entry.wire] = entry.missing
                break
            resolved.append(name)
        names[entry.field] = resolved

    if errors:
        raise ValidationError(errors)
    return bread, names


def derive_name(bread: Optional[str], meats: List[str]) -> str:
    parts = []
    meats = _present(meats)
    if meats:
        parts.append("/".join(meats))
    if bread and bread.strip():
        parts.append("on " + bread)
    return " ".join(parts) if parts else DEFAULT_NAME


def derive_description(bread: Optional[str], toasted: Optional[bool], names: Dict[str, List[str]]) -> Optional[str]:
    blocks = []
    if bread and bread.strip():
        text = bread + (" " + TOASTED_MARKER if toasted else "")
        blocks.append(f"{BREAD.label}: {text}")
    for entry in MULTI_FIELDS:
        present = _present(names.get(entry.field, []))
        if present:
            blocks.append(f"{entry.label}: {ITEM_SEPARATOR.join(present)}")
    return BLOCK_SEPARATOR.join(blocks) if blocks else None


def encode_composition(
    selection: CompositionSelection,
    catalog: CatalogStore,
    name: Optional[str] = None,
) -> EncodedComposition:
    """Validate a selection and render its order name and description.

    An explicit non-blank name is kept as given; otherwise the name is derived
    from the meats and bread.
    """
    bread, names = resolve_selection(selection, catalog)
    derived = derive_name(bread, names["meat_ids"])
    return EncodedComposition(
        name=name.strip() if name and name.strip() else derived,
        description=derive_description(bread, selection.toasted, names),
    )


def _lookup(catalog: CatalogStore, entry: CategoryField, name: str) -> Optional[int]:
    ids = catalog.find_by_name(entry.category, name)
    if not ids:
        logger.debug(f"No {entry.category.value} named {name!r}")
        return None
    if len(ids) > 1:
        logger.warning(f"Ambiguous {entry.category.value} name {name!r} matches ids {ids}, using {ids[0]}")
    return ids[0]


def decode_description(description: Optional[str], catalog: CatalogStore) -> CompositionSelection:
    """Recover ingredient ids from a stored description.

    Never raises: unknown labels and names are skipped, and any failure returns
    whatever was decoded up to that point.
    """
    found = {"bread_id": None, "toasted": False}
    for entry in MULTI_FIELDS:
        found[entry.field] = []

    if not description or not description.strip():
        return CompositionSelection(**found)

    try:
        for segment in description.split(";"):
            segment = segment.strip()
            label, sep, rest = segment.partition(":")
            if not sep:
                continue
            entry = _LABELS.get(label.strip().lower())
            if entry is None:
                continue

            if entry is BREAD:
                rest, marked = _TOASTED_RE.subn("", rest.strip())
                if marked:
                    found["toasted"] = True
                bread_name = rest.strip()
                if bread_name and found["bread_id"] is None:
                    found["bread_id"] = _lookup(catalog, entry, bread_name)
                continue

            for token in rest.split(","):
                token = token.strip()
                if not token:
                    continue
                option_id = _lookup(catalog, entry, token)
                if option_id is not None:
                    found[entry.field].append(option_id)
    except Exception as e:
        logger.warning(f"Could not fully decode description {description!r}: {e}")

    return CompositionSelection(**found)
