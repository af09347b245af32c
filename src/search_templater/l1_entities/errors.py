"""Domain error types."""


class TemplateIdExhaustedError(Exception):
    """Raised when no unique template id could be generated within the retry bound."""


class UrlBuildError(Exception):
    """Raised when a substituted template cannot be parsed as a URL, even relative to the base origin."""


class SettingsImportError(Exception):
    """Raised when an imported settings file is not a JSON object."""
