"""
Site variant resolution

Decides, for one request, whether the visitor gets the mobile or the full site,
and what that implies: a redirect to the other domain, the theme to render
with, and the fullSite cookie to write. Nothing here touches the request or
response; the caller applies the returned Decision.

Precedence, first match wins:
    1. a redirect already happened for this request -> do nothing
    2. ?fullSite= in the query string replaces the cookie value
    3. a fullSite cookie forces the variant
    4. the request is on the mobile domain -> mobile
    5. mobile device, theme-only mode -> mobile theme on the same domain
    6. mobile device off the mobile domain, redirect mode -> redirect
    7. otherwise -> full site, theme left alone
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from utils.domain_matcher import on_mobile_domain
from utils.fullsite_cookie import (
    CookieWrite, CookieWriteMemo, FULL_SITE, DEFAULT_LEASE_DAYS
)
from utils.site_config import SiteConfig

logger = logging.getLogger(__name__)


class Variant(Enum):
    MOBILE = 'mobile'
    FULL = 'full'


@dataclass(frozen=True)
class RequestContext:
    host: str = ''
    query_override: Optional[int] = None
    existing_cookie: Optional[int] = None
    is_mobile_device: bool = False
    redirect_already_occurred: bool = False


@dataclass(frozen=True)
class Decision:
    variant: Optional[Variant] = None
    redirect_to: Optional[str] = None
    theme: Optional[str] = None
    cookie_write: Optional[CookieWrite] = None

    @property
    def is_mobile(self) -> bool:
        return self.variant is Variant.MOBILE

    @property
    def is_redirect(self) -> bool:
        return self.redirect_to is not None

    @property
    def is_noop(self) -> bool:
        return (self.variant is None and self.redirect_to is None
                and self.cookie_write is None)

    def as_dict(self) -> dict:
        return {
            'variant': self.variant.value if self.variant else None,
            'redirect_to': self.redirect_to,
            'theme': self.theme,
            'cookie_write': {
                'value': self.cookie_write.value,
                'max_age': self.cookie_write.max_age,
                'domain': self.cookie_write.domain,
            } if self.cookie_write else None,
        }


def _mobile(config: SiteConfig, cookie_write=None) -> Decision:
    return Decision(variant=Variant.MOBILE, theme=config.mobile_theme or None,
                    cookie_write=cookie_write)


def _redirect(url: str, variant: Variant, cookie_write=None) -> Decision:
    logger.info("Redirecting to %s site at %s", variant.value, url)
    return Decision(variant=variant, redirect_to=url, cookie_write=cookie_write)


def resolve(ctx: RequestContext, config: SiteConfig, memo: CookieWriteMemo,
            lease_days: float = DEFAULT_LEASE_DAYS) -> Decision:
    """
    Resolve the site variant for a request

    Args:
        ctx: what the request carries (host, override, cookie, device)
        config: current site configuration
        memo: last fullSite value written, consulted and updated for cookie writes
        lease_days: lease for the full site cookie

    Returns:
        Decision: variant, redirect target, theme and cookie write to apply
    """
    # If another step already redirected this request, don't redirect twice
    if ctx.redirect_already_occurred:
        logger.debug("Redirect already issued for %s, skipping variant resolution", ctx.host)
        return Decision()

    cookie_write = None
    effective_cookie = ctx.existing_cookie
    if ctx.query_override is not None:
        effective_cookie = ctx.query_override
        cookie_write = memo.plan(effective_cookie, config.full_site_domain, lease_days)

    mobile_domain = on_mobile_domain(ctx.host, config.mobile_domain)

    # Site is being forced via flag or cookie
    if effective_cookie is not None:
        if effective_cookie == FULL_SITE:
            # Renew the lease; a no-op when the override just wrote the same value
            cookie_write = memo.plan(effective_cookie, config.full_site_domain,
                                     lease_days) or cookie_write
            if mobile_domain and config.redirects_to_domain and config.full_site_domain:
                return _redirect(config.full_site_domain, Variant.FULL, cookie_write)
            logger.debug("fullSite=%s forces the full site", effective_cookie)
            return Decision(variant=Variant.FULL, theme=config.theme or None,
                            cookie_write=cookie_write)

        if not mobile_domain and config.redirects_to_domain and config.mobile_domain:
            return _redirect(config.mobile_domain, Variant.MOBILE, cookie_write)
        logger.debug("fullSite=%s forces the mobile site", effective_cookie)
        return _mobile(config, cookie_write)

    if mobile_domain:
        logger.debug("%s is the mobile domain", ctx.host)
        return _mobile(config)

    if ctx.is_mobile_device and config.mobile_theme_only:
        logger.debug("Mobile device, applying mobile theme without redirect")
        return _mobile(config)

    if ctx.is_mobile_device and config.redirects_to_domain and config.mobile_domain:
        return _redirect(config.mobile_domain, Variant.MOBILE)

    return Decision(variant=Variant.FULL)
