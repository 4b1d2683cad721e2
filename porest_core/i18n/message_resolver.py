"""YAML-backed message catalog and the resolver used for API messages.

Bundles are flat ``key: text`` YAML files named ``messages.<locale>.yaml``.
The package ships Korean and English bundles; services add their own
directories, whose entries override the bundled ones.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from loguru import logger

from porest_core.core.config import settings
from porest_core.core.error_codes import ErrorCodeProvider
from porest_core.core.messages import MessageKey
from porest_core.core.types import DisplayType

DEFAULT_MESSAGES_DIR = Path(__file__).resolve().parent / "messages"
BUNDLE_PREFIX = "messages."
BUNDLE_SUFFIX = ".yaml"

MessageSource = Union[str, MessageKey, ErrorCodeProvider, DisplayType]


def normalize_locale(locale: str) -> str:
    """Return a lower-case, hyphen-separated locale tag (``en_US`` -> ``en-us``)."""
    return locale.strip().replace("_", "-").lower()


class MessageCatalog:
    """In-memory message bundles keyed by locale.

    Loaded once and only read afterwards, so one instance can be shared
    between concurrent requests.
    """

    def __init__(
        self,
        message_dirs: Iterable[Path] = (),
        default_locale: str = "ko",
        include_defaults: bool = True,
    ) -> None:
        self.default_locale = normalize_locale(default_locale)
        self._bundles: Dict[str, Dict[str, str]] = {}
        dirs = [DEFAULT_MESSAGES_DIR] if include_defaults else []
        dirs.extend(Path(path) for path in message_dirs)
        for directory in dirs:
            self._load_dir(directory)

    @classmethod
    def from_mapping(
        cls, bundles: Dict[str, Dict[str, str]], default_locale: str = "ko"
    ) -> "MessageCatalog":
        """Build a catalog from in-memory bundles instead of YAML files."""
        catalog = cls(default_locale=default_locale, include_defaults=False)
        for locale, entries in bundles.items():
            catalog._merge(locale, entries)
        return catalog

    @property
    def locales(self) -> list[str]:
        return sorted(self._bundles)

    def _load_dir(self, directory: Path) -> None:
        if not directory.is_dir():
            logger.warning("Message directory not found", directory=str(directory))
            return
        for path in sorted(directory.glob(f"{BUNDLE_PREFIX}*{BUNDLE_SUFFIX}")):
            locale = path.name[len(BUNDLE_PREFIX) : -len(BUNDLE_SUFFIX)]
            with path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
            if not isinstance(data, dict):
                logger.warning("Ignoring malformed message bundle", path=str(path))
                continue
            self._merge(locale, data)
            logger.debug("Loaded message bundle", path=str(path), entries=len(data))

    def _merge(self, locale: str, entries: Dict[Any, Any]) -> None:
        bundle = self._bundles.setdefault(normalize_locale(locale), {})
        bundle.update({str(k): str(v) for k, v in entries.items()})

    def _candidates(self, locale: str | None) -> list[str]:
        candidates: list[str] = []
        if locale:
            tag = normalize_locale(locale)
            candidates.append(tag)
            language = tag.split("-", 1)[0]
            if language != tag:
                candidates.append(language)
        if self.default_locale not in candidates:
            candidates.append(self.default_locale)
        return candidates

    def get(self, key: str, locale: str | None = None) -> str | None:
        """Look up a message: exact locale, then its language, then the default.

        Returns:
            The raw template, or ``None`` when no bundle defines ``key``.
        """
        for candidate in self._candidates(locale):
            template = self._bundles.get(candidate, {}).get(key)
            if template is not None:
                return template
        return None


class MessageResolver:
    """Resolve message keys and error codes to localized text.

    Never raises for a missing key: the key itself (or, for error codes, the
    code) is returned instead, since it is usually called while handling
    another error.
    """

    def __init__(self, catalog: MessageCatalog, default_locale: str | None = None) -> None:
        self.catalog = catalog
        self.default_locale = default_locale or catalog.default_locale

    def resolve(self, source: MessageSource, *args: Any, locale: str | None = None) -> str:
        """Return the localized text for ``source``.

        Args:
            source: Raw key, ``MessageKey`` member, error code or display enum.
            *args: Positional values substituted for ``{0}``, ``{1}``, ...
            locale: Active locale; the default locale when omitted.

        Returns:
            Formatted message, or the fallback text when no bundle has it.
        """
        if isinstance(source, MessageKey):
            key = fallback = source.key
        elif isinstance(source, str):
            key = fallback = source
        else:
            key, fallback = source.message_key, source.code

        template = self.catalog.get(key, locale or self.default_locale)
        if template is None:
            return fallback
        return self._format(key, template, args)

    def _format(self, key: str, template: str, args: Sequence[Any]) -> str:
        if not args:
            return template
        try:
            return template.format(*args)
        except (IndexError, KeyError, ValueError, AttributeError, TypeError) as exc:
            logger.warning(
                "Message arguments did not match template", key=key, error=str(exc)
            )
            return template


@lru_cache
def get_message_resolver() -> MessageResolver:
    """Return the process-wide resolver built from settings."""
    catalog = MessageCatalog(
        message_dirs=settings.MESSAGE_DIRS,
        default_locale=settings.DEFAULT_LOCALE,
    )
    return MessageResolver(catalog)


__all__ = [
    "DEFAULT_MESSAGES_DIR",
    "MessageCatalog",
    "MessageResolver",
    "get_message_resolver",
    "normalize_locale",
]
