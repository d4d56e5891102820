class LinkValidationError(Exception):
    """Base error for fatal link validation failures."""


class DatasetError(LinkValidationError):
    """Dataset file is missing, malformed or empty."""


class SettingsError(LinkValidationError):
    """An environment override could not be parsed."""
