"""Unit tests for LanguageResolver."""
from processor.models import EventRequest
from resources.language import LanguageResolver


def request_with(header):
    return EventRequest(headers={'Accept-Language': header})


def test_missing_header_uses_default():
    resolver = LanguageResolver('en', ['en', 'fr'])

    assert resolver(EventRequest()) == 'en'


def test_primary_subtag_is_matched():
    resolver = LanguageResolver('en', ['en', 'fr'])

    assert resolver(request_with('fr-CA')) == 'fr'


def test_highest_quality_supported_language_wins():
    resolver = LanguageResolver('en', ['en', 'fr', 'de'])

    assert resolver(request_with('es;q=1.0, de;q=0.5, fr;q=0.8')) == 'fr'


def test_unsupported_languages_fall_back_to_default():
    resolver = LanguageResolver('en', ['en'])

    assert resolver(request_with('es, it;q=0.9, *;q=0.1')) == 'en'


def test_header_name_is_case_insensitive():
    resolver = LanguageResolver('en', ['en', 'nl'])
    request = EventRequest(headers={'accept-language': 'nl'})

    assert resolver(request) == 'nl'


def test_zero_quality_is_ignored():
    resolver = LanguageResolver('en', ['en', 'fr'])

    assert resolver(request_with('fr;q=0')) == 'en'
