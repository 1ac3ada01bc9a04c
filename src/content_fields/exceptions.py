__all__ = (
    "ContentFieldsError",
    "ConfigurationError",
    "ExtractionError",
    "DateParseError",
)


class ContentFieldsError(Exception):
    """Base Content Fields Error"""


class ConfigurationError(ContentFieldsError):
    """Invalid rule configuration"""


class ExtractionError(ContentFieldsError):
    """Error during field extraction"""


class DateParseError(ExtractionError):
    """None of the date patterns of a field could parse its value"""

    def __init__(self, field: str, value: str, patterns=()):
        self.field = field
        self.value = value
        self.patterns = tuple(patterns)
        super().__init__(f"Unparseable {field} date: {value!r} (patterns: {', '.join(self.patterns)})")
