"""Heuristics for text that must be echoed back untranslated.

Pure data (prices, dimensions, contact details) is never sent to a provider:
translating it risks corrupting it and wastes a paid call.
"""
import re

_CURRENCIES = r'(?:€|EUR|£|GBP|\$|USD|CHF|¥|JPY|₽|PLN|CZK|HUF|SEK|NOK|DKK)'

NUMERIC_RX = re.compile(
    rf'^\s*{_CURRENCIES}?\s*[\d\s.,:+\-/%()]*\s*{_CURRENCIES}?\s*$',
    re.IGNORECASE,
)

DIMENSION_RX = re.compile(
    r'^\s*\d+(?:[.,]\d+)?\s*(?:[x×*]\s*\d+(?:[.,]\d+)?\s*){1,2}'
    r'(?:mm|cm|m|km|in|inch|ft|"|px)?\s*$',
    re.IGNORECASE,
)

EMAIL_RX = re.compile(r'^\s*[\w.+\-]+@[\w\-]+(?:\.[\w\-]+)+\s*$')

URL_RX = re.compile(r'^\s*(?:https?://|www\.)\S+\s*$', re.IGNORECASE)

PHONE_RX = re.compile(
    r'^\s*(?:(?:tel|tél|phone|gsm|mobile)\s*\.?\s*:?\s*)?\+?\(?\d[\d\s().\-/]{6,}\d\s*$',
    re.IGNORECASE,
)

# "12 rue de la Paix", "221B Baker Street"
_STREET_WORDS = (
    r'rue|avenue|av\.|boulevard|bd|chemin|place|all[ée]e|impasse|route|quai|chauss[ée]e|'
    r'street|st\.|road|rd\.|lane|drive|strasse|straße|platz'
)
STREET_FIRST_RX = re.compile(
    rf'^\s*\d{{1,5}}\s?[a-z]?,?\s+(?:[\w\-\']+\s+){{0,2}}(?:{_STREET_WORDS})(?=[\s,]|$).*$',
    re.IGNORECASE,
)

# "Keizersgracht 123", "Hauptstraße 5, 10115 Berlin"
STREET_SUFFIX_RX = re.compile(
    r'^\s*[\w\-\']*(?:straat|laan|weg|plein|gracht|kade|dreef|strasse|straße|platz)'
    r'\s+\d{1,5}\s?[a-z]?(?:,.*)?$',
    re.IGNORECASE,
)

# "75002 Paris", "1012 AB Amsterdam"; case-sensitive so city names must be capitalized
POSTCODE_CITY_RX = re.compile(
    r'^\s*\d{4,5}(?:\s?[A-Z]{2})?\s+[A-ZÀ-Ý][a-zà-ÿ\'\-]+(?:[\s\-][A-ZÀ-Ý][a-zà-ÿ\'\-]+){0,2}\s*$'
)

BYPASS_CHECKS = [
    ('numeric', NUMERIC_RX),
    ('dimension', DIMENSION_RX),
    ('email', EMAIL_RX),
    ('url', URL_RX),
    ('phone', PHONE_RX),
    ('address', STREET_FIRST_RX),
    ('address', STREET_SUFFIX_RX),
    ('address', POSTCODE_CITY_RX),
]


def bypass_reason(source_text, source_lang=None, target_lang=None):
    """Name of the rule that lets ``source_text`` skip translation, or None."""
    if source_lang and target_lang and source_lang.strip().lower() == target_lang.strip().lower():
        return 'same-language'
    text = source_text or ''
    for name, pattern in BYPASS_CHECKS:
        if pattern.match(text):
            return name
    return None
