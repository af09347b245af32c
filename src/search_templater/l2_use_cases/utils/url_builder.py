"""Pure URL construction: query substitution, encoding, and runtime query parameters."""

from __future__ import annotations

from urllib.parse import quote, unquote_plus, urljoin, urlsplit, urlunsplit

from search_templater.l1_entities.errors import UrlBuildError
from search_templater.l1_entities.execution import BuiltUrl, RuntimeOptions
from search_templater.l1_entities.template_spec import BASE_ORIGIN, DEFAULT_QUERY_TEMPLATE, DEFAULT_TEMPLATE_URL
from search_templater.l2_use_cases.utils.placeholders import apply_placeholders

# Same unreserved set as JavaScript's encodeURIComponent: spaces become %20.
_COMPONENT_SAFE = "-_.!~*'()"
_URL_UNSAFE = ' "<>`'


def encode_component(value: str) -> str:
    """Percent-encode *value* for use inside a single URL component."""
    return quote(value, safe=_COMPONENT_SAFE)


def _escape_unsafe(part: str) -> str:
    return ''.join(
        quote(ch, safe='') if ch in _URL_UNSAFE or not 0x20 < ord(ch) < 0x7F else ch for ch in part
    )


def _parse(candidate: str) -> tuple[str, str, str, str, str]:
    """Split *candidate* into URL parts, retrying relative input against the base origin.

    Stricter and looser than a browser parser: a host is required, so ``about:blank`` and
    ``mailto:`` are rejected, while ports are not validated.
    """
    try:
        parts = urlsplit(candidate)
        if parts.scheme and parts.netloc:
            return parts
        parts = urlsplit(urljoin(BASE_ORIGIN, candidate))
    except ValueError as e:
        raise UrlBuildError(f'Cannot parse template URL {candidate!r}: {e}') from e
    if not parts.scheme or not parts.netloc:
        raise UrlBuildError(f'Cannot parse template URL {candidate!r}')
    return parts


def set_query_param(query: str, key: str, value: str) -> str:
    """Drop any existing *key* entries from *query* and append ``key=value``.

    Other pairs are kept byte-for-byte so already-encoded values are not re-encoded.
    """
    kept = [pair for pair in query.split('&') if pair and unquote_plus(pair.split('=', 1)[0]) != key]
    kept.append(f'{encode_component(key)}={encode_component(value)}')
    return '&'.join(kept)


def build_chatgpt_url(
    template_url: str,
    query_template: str,
    raw_text: str,
    runtime_options: RuntimeOptions,
) -> BuiltUrl:
    """Build the destination URL. Raises UrlBuildError when the result is not a URL."""
    base_template = template_url.strip() or DEFAULT_TEMPLATE_URL
    # A non-empty query template keeps its whitespace; it may be a multi-line prompt.
    base_query_template = query_template if query_template.strip() else DEFAULT_QUERY_TEMPLATE

    query = apply_placeholders(base_query_template, raw_text)
    encoded_query = encode_component(query)
    substituted = apply_placeholders(base_template, encoded_query)

    scheme, netloc, path, url_query, fragment = _parse(substituted)
    path = _escape_unsafe(path) or '/'
    url_query = _escape_unsafe(url_query)
    fragment = _escape_unsafe(fragment)

    if runtime_options.hints_search:
        url_query = set_query_param(url_query, 'hints', 'search')
    if runtime_options.temporary_chat:
        url_query = set_query_param(url_query, 'temporary-chat', 'true')
    model = (runtime_options.model or '').strip()
    if model:
        url_query = set_query_param(url_query, 'model', model)

    url = urlunsplit((scheme, netloc, path, url_query, fragment))
    return BuiltUrl(url=url, query=query, encoded_query=encoded_query)
