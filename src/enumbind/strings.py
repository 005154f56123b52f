"""
String utility functions for enumbind.

Provides the name transformations used to derive constant names, method
names, localization paths and conventional enumeration class names.
"""

from __future__ import annotations

import keyword
import re

# Irregular plurals that don't follow standard rules, plural -> singular
_IRREGULAR_SINGULARS = {
    "people": "person",
    "children": "child",
    "men": "man",
    "women": "woman",
    "feet": "foot",
    "teeth": "tooth",
    "geese": "goose",
    "mice": "mouse",
    "oxen": "ox",
    "data": "datum",
    "media": "medium",
    "criteria": "criterion",
    "indices": "index",
    # Common domain-specific terms
    "statuses": "status",
    "addresses": "address",
}

# Words that look plural but are not
_UNCOUNTABLE = {"status", "news", "series", "species", "address", "bus", "class"}


def singularize(word: str) -> str:
    """
    Convert a plural English word to its singular form.

    Handles the common English rules in reverse:
    - Words ending in -ies (categories -> category)
    - Words ending in -ses, -xes, -zes, -ches, -shes (boxes -> box)
    - Words ending in -ves (leaves -> leaf)
    - Irregular plurals (people -> person)

    Args:
        word: Plural word (snake_case words singularize their last part)

    Returns:
        Singular form of the word, or the word unchanged if it does not
        look plural

    Examples:
        >>> singularize("categories")
        'category'
        >>> singularize("order_statuses")
        'order_status'
        >>> singularize("status")
        'status'
    """
    if not word:
        return word

    # snake_case - only the last word carries the plural
    if "_" in word.strip("_"):
        prefix, _, last = word.rpartition("_")
        return f"{prefix}_{singularize(last)}"

    lower_word = word.lower()

    if lower_word in _UNCOUNTABLE:
        return word

    if lower_word in _IRREGULAR_SINGULARS:
        singular = _IRREGULAR_SINGULARS[lower_word]
        if word[0].isupper():
            return singular.capitalize()
        return singular

    if lower_word.endswith("ies") and len(word) > 3:
        # categories -> category
        return word[:-3] + "y"
    elif lower_word.endswith(("sses", "xes", "zes", "ches", "shes")):
        # classes -> class, boxes -> box, churches -> church
        return word[:-2]
    elif lower_word.endswith(("elves", "alves", "olves", "eaves", "oaves", "arves")):
        # shelves -> shelf, halves -> half
        return word[:-3] + "f"
    elif lower_word.endswith(("heroes", "potatoes", "tomatoes", "echoes", "vetoes")):
        return word[:-2]
    elif lower_word.endswith("s") and not lower_word.endswith("ss"):
        return word[:-1]
    return word


def snake_case(name: str) -> str:
    """
    Convert PascalCase or camelCase to snake_case.

    Runs of capitals are kept together, so ``HTTPStatus`` becomes
    ``http_status``.

    Examples:
        >>> snake_case("CivilStatus")
        'civil_status'
        >>> snake_case("HTTPStatus")
        'http_status'
    """
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def pascal_case(name: str) -> str:
    """
    Convert snake_case to PascalCase.

    Examples:
        >>> pascal_case("civil_status")
        'CivilStatus'
    """
    return "".join(word[:1].upper() + word[1:] for word in name.split("_") if word)


def humanize(key: str) -> str:
    """
    Turn a key into a display label.

    Underscores become spaces and only the first letter is capitalized.

    Examples:
        >>> humanize("not_married")
        'Not married'
    """
    text = key.replace("_", " ").strip()
    if not text:
        return text
    return text[0].upper() + text[1:].lower()


def is_identifier(name: str) -> bool:
    """Return True if *name* can be used as a constant and method name."""
    return name.isidentifier() and not keyword.iskeyword(name)
