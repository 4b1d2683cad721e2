"""Message bundles, message resolution and locale negotiation."""

from porest_core.i18n.display import describe_display_types
from porest_core.i18n.locale import negotiate_locale, resolve_request_locale
from porest_core.i18n.message_resolver import (
    MessageCatalog,
    MessageResolver,
    get_message_resolver,
)

__all__ = [
    "MessageCatalog",
    "MessageResolver",
    "describe_display_types",
    "get_message_resolver",
    "negotiate_locale",
    "resolve_request_locale",
]
