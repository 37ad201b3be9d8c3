"""Current language resolution for incoming requests."""
from typing import Iterable

from processor.models import EventRequest


class LanguageResolver:
    """Picks the request language from the Accept-Language header."""

    def __init__(self, default_language: str, supported_languages: Iterable[str] = ()):
        self.default_language = default_language.lower()
        self.supported_languages = {lang.lower() for lang in supported_languages}
        self.supported_languages.add(self.default_language)

    def __call__(self, request: EventRequest) -> str:
        """
        Resolve the language of a request.

        Entries are tried in order of their q-value; the first one whose
        primary subtag is supported wins.

        Args:
            request: Current request

        Returns:
            Language id, falling back to the default language
        """
        header = ''
        for name, value in request.headers.items():
            if name.lower() == 'accept-language':
                header = value or ''
                break

        for language in self._parse_header(header):
            if language in self.supported_languages:
                return language

        return self.default_language

    def _parse_header(self, header: str) -> list[str]:
        weighted = []
        for position, entry in enumerate(header.split(',')):
            parts = entry.strip().split(';')
            tag = parts[0].strip().lower()
            if not tag or tag == '*':
                continue

            quality = 1.0
            for param in parts[1:]:
                key, _, value = param.strip().partition('=')
                if key == 'q':
                    try:
                        quality = float(value)
                    except ValueError:
                        quality = 0.0

            if quality > 0:
                weighted.append((-quality, position, tag.split('-')[0]))

        return [language for _, _, language in sorted(weighted)]
