"""
Splitting of author/editor statements into Person and Organization models.

Handles the common bibliographic shapes:
- "Surname, I., Surname, I. & Surname, I."   (APA, inverted with initials)
- "Surname, Firstname and Firstname Surname"  (Chicago/MLA)
- "Firstname Surname, Firstname Surname"      (plain lists)
- corporate authors such as "World Health Organization"
"""

import re
from typing import List

from ..core.models import Organization, Person

ROLE_MARKER_RE = re.compile(
    r"\(\s*(?:eds?|hrsg|dir|trans)\.?\s*\)|,?\s+\b(?:eds?|hrsg)\.(?=\s*$)",
    re.IGNORECASE,
)
ET_AL_RE = re.compile(r",?\s*\bet\s+al\b\.?", re.IGNORECASE)
CONJUNCTION_RE = re.compile(r"\s*,?\s*(?:&|\band\b|\bund\b|\bet\b|;)\s*", re.IGNORECASE)
INITIALS_RE = re.compile(r"^(?:[A-Z]\.\s?-?\s?)+$|^[A-Z]{1,3}$")

NAME_PARTICLES = {"van", "von", "der", "den", "de", "del", "della", "di", "da", "du", "le", "la"}

ORGANIZATION_WORDS = {
    "association",
    "agency",
    "board",
    "center",
    "centre",
    "commission",
    "committee",
    "consortium",
    "council",
    "department",
    "foundation",
    "group",
    "institute",
    "ministry",
    "office",
    "organization",
    "organisation",
    "society",
    "team",
    "university",
}


def has_role_marker(text: str) -> bool:
    """True when ``text`` carries an editor-style marker such as '(Eds.)'."""
    return bool(ROLE_MARKER_RE.search(text))


def parse_names(text: str) -> List[Person | Organization]:
    """Split a name statement into individual names.

    Args:
        text: The raw author or editor statement, e.g. ``"Smith, J., & Doe, A."``.

    Returns:
        The names in order; an empty list when nothing name-like is left.
    """
    text = ROLE_MARKER_RE.sub("", text or "")
    text = ET_AL_RE.sub("", text)
    text = " ".join(text.split()).strip(" ,;:")
    if not text:
        return []

    names: List[Person | Organization] = []
    for chunk in CONJUNCTION_RE.split(text):
        chunk = chunk.strip(" ,")
        if chunk:
            names.extend(_parse_chunk(chunk))
    return names


def _parse_chunk(chunk: str) -> List[Person | Organization]:
    parts = [p.strip() for p in chunk.split(",") if p.strip()]

    if len(parts) == 1:
        return [_name_from_words(parts[0])]

    # "John Smith, Jane Doe"
    if all(len(p.split()) >= 2 and p.split()[0].lower() not in NAME_PARTICLES for p in parts) and not any(
        INITIALS_RE.match(p.split()[-1]) for p in parts
    ):
        return [_name_from_words(p) for p in parts]

    # "Surname, I., Surname, I." and "Surname, Given, Surname, Given"
    if len(parts) % 2 == 0 and all(_looks_like_given(p) for p in parts[1::2]):
        return [_inverted(family, given) for family, given in zip(parts[0::2], parts[1::2])]

    # "Surname, Given, Given Surname" (only the first name is inverted)
    if _looks_like_given(parts[1]) and len(parts[0].split()) <= 2:
        head = [_inverted(parts[0], parts[1])]
        return head + [_name_from_words(p) for p in parts[2:]]

    return [_name_from_words(p) for p in parts]


def _looks_like_given(text: str) -> bool:
    if INITIALS_RE.match(text):
        return True
    words = text.split()
    return 0 < len(words) <= 3 and all(w[0].isupper() for w in words)


def _inverted(family: str, given: str) -> Person:
    particle, family = _split_particle(family)
    return Person(family=family, given=given, particle=particle)


def _split_particle(family: str):
    words = family.split()
    particle = []
    while len(words) > 1 and words[0].lower() in NAME_PARTICLES:
        particle.append(words.pop(0))
    return " ".join(particle) or None, " ".join(words)


def _name_from_words(text: str) -> Person | Organization:
    words = text.split()
    if any(w.lower().strip(".") in ORGANIZATION_WORDS for w in words) or len(words) > 4:
        return Organization(name=text)
    if len(words) == 1:
        return Person(family=text)

    # "Smith J." or "Smith JA"
    if INITIALS_RE.match(words[-1]) and not INITIALS_RE.match(words[0]):
        return _inverted(" ".join(words[:-1]), words[-1])

    given = []
    while len(words) > 1 and words[0].lower() not in NAME_PARTICLES:
        given.append(words.pop(0))
    particle, family = _split_particle(" ".join(words))
    return Person(given=" ".join(given) or None, family=family, particle=particle)
