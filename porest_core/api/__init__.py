"""API router shared by services built on porest-core."""

from fastapi import APIRouter

from porest_core.api.deps import LocaleDep, MessageResolverDep
from porest_core.core.config import settings
from porest_core.core.messages import MessageKey
from porest_core.core.types import CountryCode
from porest_core.i18n.display import describe_display_types
from porest_core.schemas.response import ApiResponse, DisplayTypeItem

api_router = APIRouter()


@api_router.get("/", tags=["root"], response_model=ApiResponse[dict[str, str]])
async def api_root(
    locale: LocaleDep, resolver: MessageResolverDep
) -> ApiResponse[dict[str, str]]:
    """Return API root metadata in the uniform envelope.

    Returns:
        Success envelope carrying the service name and negotiated locale.
    """
    return ApiResponse.ok(
        {"service": settings.PROJECT_NAME, "locale": locale},
        message=resolver.resolve(MessageKey.COMMON_SUCCESS, locale=locale),
    )


@api_router.get(
    "/types/country-codes",
    tags=["types"],
    response_model=ApiResponse[list[DisplayTypeItem]],
)
async def list_country_codes(
    locale: LocaleDep, resolver: MessageResolverDep
) -> ApiResponse[list[DisplayTypeItem]]:
    """List supported countries with labels in the request locale."""
    return ApiResponse.ok(
        describe_display_types(CountryCode, resolver, locale),
        message=resolver.resolve(MessageKey.COMMON_SUCCESS, locale=locale),
    )


__all__ = ["api_router"]
