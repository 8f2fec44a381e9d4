"""Exceptions raised across the parser boundary.

Only document conversion failures abort a parse. Missing dates, titles,
attendees or sections are reported in-band as empty fields.
"""


class PVParserError(Exception):
    """Base class for parser errors."""


class DocumentConversionError(PVParserError):
    """The input bytes could not be converted to text or HTML."""


class UnsupportedDocumentError(DocumentConversionError):
    """No converter is registered for the declared media type."""


class RosterError(PVParserError):
    """A member roster file is present but malformed."""
