"""Naming helpers shared by the type mapper, input generator and builder.

Wraps ``inflection`` so every derived GraphQL name goes through one place.
All helpers are pure and deterministic.
"""
from __future__ import annotations

import re

import inflection

__all__ = [
    'upper_first',
    'lower_first',
    'camel_case',
    'upper_camel',
    'to_singular',
    'to_plural',
    'to_input_name',
    'global_id_for',
    'is_uncountable',
    'UNCOUNTABLES',
]

_separator_pattern = re.compile(r'[^0-9a-zA-Z]+')
_word_pattern = re.compile(r'[A-Z]+(?![a-z])|[A-Z]?[a-z0-9]+')

# Words checked before inflection, which singularizes e.g. 'media' to 'medium'.
UNCOUNTABLES = frozenset({
    'adulthood', 'advice', 'agenda', 'aid', 'aircraft', 'alcohol', 'ammo',
    'analytics', 'anime', 'athletics', 'audio', 'bison', 'blood', 'bream',
    'buffalo', 'butter', 'carp', 'cash', 'chassis', 'chess', 'clothing',
    'cod', 'commerce', 'cooperation', 'corps', 'debris', 'diabetes',
    'digestion', 'elk', 'energy', 'equipment', 'excretion', 'expertise',
    'firmware', 'fish', 'flounder', 'fun', 'gallows', 'garbage', 'graffiti',
    'hardware', 'headquarters', 'health', 'herpes', 'highjinks', 'homework',
    'housework', 'information', 'jeans', 'justice', 'kudos', 'labour',
    'literature', 'machinery', 'mackerel', 'mail', 'manga', 'media', 'mews',
    'money', 'moose', 'mud', 'music', 'news', 'personnel', 'pike',
    'plankton', 'pliers', 'police', 'pollution', 'premises', 'rain',
    'research', 'rice', 'salmon', 'scissors', 'series', 'sewage',
    'shambles', 'sheep', 'shrimp', 'software', 'species', 'staff', 'swine',
    'tennis', 'traffic', 'transportation', 'trout', 'tuna', 'wealth',
    'welfare', 'whiting', 'wildebeest', 'wildlife',
})


def upper_first(name: str) -> str:
    if not name:
        return name
    return name[0].upper() + name[1:]


def lower_first(name: str) -> str:
    if not name:
        return name
    return name[0].lower() + name[1:]


def camel_case(name: str) -> str:
    """Convert any separated identifier to lowerCamelCase.

    'hero_section', 'hero-section' and 'heroSection' all become 'heroSection'.
    """
    if not name:
        return name
    cleaned = _separator_pattern.sub('_', str(name)).strip('_')
    if not cleaned:
        return ''
    return inflection.camelize(cleaned, uppercase_first_letter=False)


def upper_camel(name: str) -> str:
    """Convert any separated identifier to UpperCamelCase."""
    return upper_first(camel_case(name))


def _last_word(name: str) -> str:
    words = _word_pattern.findall(str(name))
    return words[-1].lower() if words else ''


def is_uncountable(name: str) -> bool:
    """True when the last word of ``name`` has no distinct singular/plural form.

    'SharedMedia', 'shared_media' and 'News' are uncountable.
    """
    return _last_word(name) in UNCOUNTABLES


def to_singular(name: str) -> str:
    """Singular lowerCamelCase form, e.g. 'BlogPosts' -> 'blogPost'."""
    if is_uncountable(name):
        return camel_case(name)
    return camel_case(inflection.singularize(name))


def to_plural(name: str) -> str:
    """Plural lowerCamelCase form, e.g. 'category' -> 'categories'."""
    if is_uncountable(name):
        return camel_case(name)
    return camel_case(inflection.pluralize(name))


def to_input_name(name: str) -> str:
    return f"{upper_first(to_singular(name))}Input"


def global_id_for(name: str) -> str:
    """Default GraphQL type name for a model name ('shared.link' -> 'SharedLink')."""
    return upper_camel(name)
