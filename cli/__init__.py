"""Command-line interface for i18n-json-translator."""
