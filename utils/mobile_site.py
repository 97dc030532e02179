"""
Mobile site support for the Flask app

Resolves the site variant before each request, redirects when needed,
writes the fullSite cookie on the way out and exposes the result to templates.
"""

import logging
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from flask import current_app, g, request, redirect, render_template

from utils.device_detector import classify_user_agent
from utils.fullsite_cookie import (
    COOKIE_NAME, CookieWriteMemo, parse_flag, FULL_SITE, MOBILE_SITE, DEFAULT_LEASE_DAYS
)
from utils.site_config import SiteConfigStore
from utils.site_variant import RequestContext, resolve

logger = logging.getLogger(__name__)

EXTENSION_NAME = 'mobile_site'


class MobileSite:
    """Per-application state: the site config store and the cookie memo"""

    def __init__(self, store, memo_scope='request', lease_days=DEFAULT_LEASE_DAYS):
        if memo_scope not in ('process', 'request'):
            raise ValueError(f"FULL_SITE_COOKIE_MEMO must be 'process' or 'request', not {memo_scope!r}")
        self.store = store
        self.memo_scope = memo_scope
        self.lease_days = lease_days
        self.memo = CookieWriteMemo()

    def memo_for_request(self):
        if self.memo_scope == 'request':
            return CookieWriteMemo()
        return self.memo


def init_mobile_site(app, store=None):
    """Register the mobile site hooks on the given app"""
    mobile_site = MobileSite(
        store or SiteConfigStore(app.config),
        memo_scope=app.config.get('FULL_SITE_COOKIE_MEMO', 'request'),
        lease_days=app.config.get('FULL_SITE_COOKIE_EXPIRE_DAYS', DEFAULT_LEASE_DAYS),
    )
    app.extensions[EXTENSION_NAME] = mobile_site

    @app.before_request
    def _resolve_site_variant():
        device = classify_user_agent(request.headers.get('User-Agent', ''))
        g.device = device
        g.theme = current_app.config.get('DEFAULT_THEME')

        ctx = RequestContext(
            host=request.host,
            query_override=parse_flag(request.args.get(COOKIE_NAME)),
            existing_cookie=parse_flag(request.cookies.get(COOKIE_NAME)),
            is_mobile_device=device.is_mobile,
            redirect_already_occurred=g.get('redirected_to') is not None,
        )
        decision = resolve(ctx, mobile_site.store.current(),
                           mobile_site.memo_for_request(), mobile_site.lease_days)
        g.site_decision = decision

        if decision.is_redirect:
            return redirect(decision.redirect_to, 301)
        if decision.theme:
            g.theme = decision.theme
        return None

    @app.after_request
    def _write_fullsite_cookie(response):
        decision = g.get('site_decision')
        write = decision.cookie_write if decision else None
        if write is None:
            return response

        response.set_cookie(
            COOKIE_NAME,
            write.cookie_value,
            max_age=write.max_age,
            expires=write.expires(),
            domain=write.domain,
        )
        logger.info("Set %s=%s (max_age=%s, domain=%s)",
                    COOKIE_NAME, write.cookie_value, write.max_age, write.domain)
        return response

    @app.context_processor
    def _inject_mobile_site():
        return {
            'is_mobile': is_mobile,
            'full_site_link': build_full_site_link,
            'mobile_site_link': build_mobile_site_link,
            'is_iphone': is_iphone,
            'is_android': is_android,
            'is_opera_mini': is_opera_mini,
            'is_blackberry': is_blackberry,
            'current_theme': g.get('theme'),
        }

    return mobile_site


def mark_redirected(location):
    """Record that this request is being redirected, so nothing redirects it again"""
    g.redirected_to = location


def is_mobile():
    """
    Whether the mobile site is served for this request.
    Don't rely on the theme, both sites may use the same one.
    """
    decision = g.get('site_decision')
    return bool(decision and decision.is_mobile)


def _with_site_flag(base_url, value):
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != COOKIE_NAME]
    query.append((COOKIE_NAME, str(value)))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def build_full_site_link(base_url=None):
    """Link to the full site version of base_url (the current path by default)"""
    return _with_site_flag(request.path if base_url is None else base_url, FULL_SITE)


def build_mobile_site_link(base_url=None):
    """Link to the mobile site version of base_url (the current path by default)"""
    return _with_site_flag(request.path if base_url is None else base_url, MOBILE_SITE)


def _device():
    device = g.get('device')
    if device is None:
        device = classify_user_agent(request.headers.get('User-Agent', ''))
    return device


def is_iphone():
    return _device().is_iphone


def is_android():
    return _device().is_android


def is_opera_mini():
    return _device().is_opera_mini


def is_blackberry():
    return _device().is_blackberry


def render_themed(template_name, **context):
    """Render template_name from the active theme, falling back to the unthemed template"""
    theme = g.get('theme')
    candidates = [f'themes/{theme}/{template_name}'] if theme else []
    candidates.append(template_name)
    return render_template(candidates, **context)
