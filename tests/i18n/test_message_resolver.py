"""Tests for message catalog lookups and the resolver fallback chain."""

from __future__ import annotations

from pathlib import Path

import pytest

from porest_core.core.error_codes import ErrorCode
from porest_core.core.messages import MessageKey
from porest_core.core.types import CountryCode
from porest_core.i18n.message_resolver import (
    DEFAULT_MESSAGES_DIR,
    MessageCatalog,
    MessageResolver,
)


class TestMessageCatalog:
    def test_exact_locale_then_language_then_default(self, catalog: MessageCatalog) -> None:
        assert catalog.get("error.common.not.found", "en") == "Not found."
        assert catalog.get("error.common.not.found", "en-US") == "Not found."
        assert catalog.get("error.common.not.found", "en_GB") == "Not found."
        # Unsupported locales fall back to the default locale.
        assert catalog.get("error.common.not.found", "ja") == "대상을 찾을 수 없습니다."

    def test_key_missing_in_locale_falls_back_to_default_locale(
        self, catalog: MessageCatalog
    ) -> None:
        assert catalog.get("error.common.forbidden", "ko") is None
        assert catalog.get("error.common.invalid.input", "en") == "Invalid input."
        catalog_en_default = MessageCatalog.from_mapping(
            {"en": {"only.en": "English"}, "ko": {}}, default_locale="en"
        )
        assert catalog_en_default.get("only.en", "ko") == "English"

    def test_unknown_key_returns_none(self, catalog: MessageCatalog) -> None:
        assert catalog.get("no.such.key", "en") is None

    def test_bundled_yaml_messages_are_loaded(self) -> None:
        bundled = MessageCatalog()

        assert set(bundled.locales) >= {"en", "ko"}
        for key in ("error.common.not.found", "error.common.404", "error.file.notfound"):
            assert bundled.get(key, "en")
            assert bundled.get(key, "ko")

    def test_every_catalog_key_has_a_bundled_message(self) -> None:
        bundled = MessageCatalog()
        keys = (
            [entry.message_key for entry in ErrorCode]
            + [k.key for k in MessageKey]
            + [country.message_key for country in CountryCode]
        )

        for locale in ("en", "ko"):
            missing = [key for key in keys if bundled.get(key, locale) is None]
            assert missing == [], f"{locale} bundle is missing {missing}"

    def test_extra_directories_override_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "messages.en.yaml").write_text(
            'error.common.not.found: "Nothing here."\n'
            'error.order.not.found: "Order {0} not found."\n',
            encoding="utf-8",
        )

        merged = MessageCatalog(message_dirs=[tmp_path], default_locale="ko")

        assert merged.get("error.common.not.found", "en") == "Nothing here."
        assert merged.get("error.order.not.found", "en") == "Order {0} not found."
        assert merged.get("error.common.forbidden", "en") is not None

    def test_malformed_and_missing_bundles_are_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "messages.en.yaml").write_text("- just\n- a list\n", encoding="utf-8")

        catalog = MessageCatalog(
            message_dirs=[tmp_path, tmp_path / "missing"],
            include_defaults=False,
            default_locale="en",
        )

        assert catalog.get("anything", "en") is None

    def test_default_messages_dir_ships_with_package(self) -> None:
        assert (DEFAULT_MESSAGES_DIR / "messages.en.yaml").is_file()
        assert (DEFAULT_MESSAGES_DIR / "messages.ko.yaml").is_file()


class TestMessageResolver:
    def test_resolve_raw_key(self, resolver: MessageResolver) -> None:
        assert resolver.resolve("error.common.not.found", locale="en") == "Not found."

    def test_resolve_message_key_member(self, resolver: MessageResolver) -> None:
        assert resolver.resolve(MessageKey.COMMON_404, locale="en") == "No such route."

    def test_resolve_error_code(self, resolver: MessageResolver) -> None:
        assert resolver.resolve(ErrorCode.NOT_FOUND, locale="en") == "Not found."

    def test_default_locale_used_without_locale(self, resolver: MessageResolver) -> None:
        assert resolver.resolve(ErrorCode.NOT_FOUND) == "대상을 찾을 수 없습니다."

    @pytest.mark.parametrize("locale", [None, "en", "ko", "xx"])
    def test_unknown_key_returns_key_unchanged(
        self, resolver: MessageResolver, locale: str | None
    ) -> None:
        assert resolver.resolve("no.such.key", locale=locale) == "no.such.key"

    def test_unknown_message_key_member_returns_its_key(
        self, resolver: MessageResolver
    ) -> None:
        assert resolver.resolve(MessageKey.FILE_MOVE, locale="en") == "error.file.move"

    def test_unknown_error_code_message_falls_back_to_code(
        self, resolver: MessageResolver
    ) -> None:
        assert resolver.resolve(ErrorCode.FILE_NOT_FOUND, locale="en") == "FILE_001"

    def test_positional_arguments(self, resolver: MessageResolver) -> None:
        assert (
            resolver.resolve(MessageKey.COMMON_INVALID_PARAMETER_VALUE, "page", locale="en")
            == "The value of parameter 'page' is invalid."
        )
        assert (
            resolver.resolve("error.user.duplicate", "kim", locale="en")
            == "User kim already exists."
        )

    def test_missing_argument_returns_template(
        self, resolver: MessageResolver, log_records: list
    ) -> None:
        catalog = MessageCatalog.from_mapping(
            {"en": {"two.args": "{0} and {1}", "named": "hello {name}"}},
            default_locale="en",
        )
        strict = MessageResolver(catalog)

        assert strict.resolve("two.args", "a") == "{0} and {1}"
        assert strict.resolve("named", "a") == "hello {name}"
        assert any(r["level"].name == "WARNING" for r in log_records)

    def test_argument_of_wrong_type_returns_template(self, log_records: list) -> None:
        catalog = MessageCatalog.from_mapping({"ko": {"indexed": "value {0[name]}"}})
        strict = MessageResolver(catalog)

        assert strict.resolve("indexed", "abc") == "value {0[name]}"
        warnings = [r for r in log_records if r["level"].name == "WARNING"]
        assert warnings and warnings[0]["extra"]["key"] == "indexed"

    def test_template_without_args_is_not_formatted(self) -> None:
        catalog = MessageCatalog.from_mapping(
            {"en": {"braces": "use {0} later"}}, default_locale="en"
        )

        assert MessageResolver(catalog).resolve("braces") == "use {0} later"
