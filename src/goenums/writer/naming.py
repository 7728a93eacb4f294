# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier casing and English pluralisation for generated names."""

# ###############
# Public Interface
# ###############


def camel_case(text: str) -> str:
    """Convert an identifier to upper camel case.

    Underscore-separated parts are capitalised and joined. Parts written
    entirely in upper case are lowered first, so ``DOG_HOUSE`` and
    ``dog_house`` both become ``DogHouse``; mixed-case parts keep their
    inner capitals, so ``discountType`` becomes ``DiscountType``.
    """
    parts = [part for part in text.split("_") if part]
    return "".join(_capitalise_part(part) for part in parts)


def lower_first(text: str) -> str:
    return text[:1].lower() + text[1:]


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def is_plural(word: str) -> bool:
    """Return True if *word* already reads as an English plural."""
    last = _last_word(word).lower()
    return last in _IRREGULAR_PLURALS or is_regular_plural(last)


def is_regular_plural(word: str) -> bool:
    """Return True for words ending in a plural ``s`` (not ``ss``, ``us`` or ``is``)."""
    word = word.lower()
    if len(word) < 2:
        return False
    return word.endswith("s") and not word.endswith(("ss", "us", "is"))


def plural(word: str) -> str:
    """Pluralise the last word of an identifier, keeping its casing.

    Irregular nouns (``status``, ``person``, ``index``...) use their known
    plural. Words that are already plural are returned unchanged.
    """
    if not word:
        return ""
    last = _last_word(word)
    head = word[: len(word) - len(last)]
    lower = last.lower()
    if lower in _IRREGULAR_PLURALS or is_regular_plural(lower):
        return word
    if lower in _IRREGULAR:
        replacement = _IRREGULAR[lower]
    else:
        replacement = _regular_plural(lower)
    return head + _match_case(last, replacement)


def singular(word: str) -> str:
    """Reverse plural() for words that read as plurals; others are returned unchanged."""
    if not word or not is_plural(word):
        return word
    last = _last_word(word)
    head = word[: len(word) - len(last)]
    lower = last.lower()
    if lower in _IRREGULAR_PLURALS:
        replacement = _IRREGULAR_PLURALS[lower]
    elif lower.endswith("ies") and len(lower) > 3:
        replacement = lower[:-3] + "y"
    elif lower.endswith(("sses", "xes", "zes", "ches", "shes")):
        replacement = lower[:-2]
    else:
        replacement = lower[:-1]
    return head + _match_case(last, replacement)


# ################
# Implementation
# ################

_IRREGULAR: dict[str, str] = {
    "man": "men",
    "woman": "women",
    "child": "children",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "datum": "data",
    "medium": "media",
    "analysis": "analyses",
    "crisis": "crises",
    "status": "statuses",
}

_IRREGULAR_PLURALS: dict[str, str] = {many: one for one, many in _IRREGULAR.items()}

_VOWELS = frozenset("aeiou")


def _capitalise_part(part: str) -> str:
    if part.isupper():
        part = part.lower()
    return part[:1].upper() + part[1:]


def _last_word(word: str) -> str:
    """Return the final word of a snake_case or camelCase identifier."""
    if "_" in word:
        return word.rsplit("_", 1)[1]
    for idx in range(len(word) - 1, 0, -1):
        if word[idx].isupper() and word[idx - 1].islower():
            return word[idx:]
    return word


def _regular_plural(word: str) -> str:
    if len(word) < 2:
        return word + "s"
    if word.endswith("y") and word[-2] not in _VOWELS:
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "o", "ch", "sh")):
        return word + "es"
    return word + "s"


def _match_case(original: str, replacement: str) -> str:
    if original.isupper() and len(original) > 1:
        return replacement.upper()
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement
