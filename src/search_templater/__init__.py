"""search-templater -- reusable ChatGPT search templates for selected text."""

__version__ = '0.3.0'
