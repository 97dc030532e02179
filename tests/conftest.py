"""Shared fixtures for the mobile site test suite."""

import pytest

from app import create_app
from utils.fullsite_cookie import CookieWriteMemo
from utils.site_config import SiteConfig, MobileSiteType


IPHONE_UA = ('Mozilla/5.0 (iPhone; CPU iPhone OS 16_5 like Mac OS X) AppleWebKit/605.1.15 '
             '(KHTML, like Gecko) Version/16.5 Mobile/15E148 Safari/604.1')
ANDROID_UA = ('Mozilla/5.0 (Linux; Android 13; Pixel 7) AppleWebKit/537.36 '
              '(KHTML, like Gecko) Chrome/116.0.0.0 Mobile Safari/537.36')
OPERA_MINI_UA = 'Opera/9.80 (J2ME/MIDP; Opera Mini/9.80 (S60; SymbOS; Opera Mobi/23.348; U; en) Presto/2.5.25'
BLACKBERRY_UA = ('Mozilla/5.0 (BlackBerry; U; BlackBerry 9900; en) AppleWebKit/534.11+ '
                 '(KHTML, like Gecko) Version/7.1.0.346 Mobile Safari/534.11+')
DESKTOP_UA = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 Firefox/117.0'


@pytest.fixture
def app():
    """Application built with the testing configuration (redirect mode)."""
    app = create_app('testing')
    yield app


@pytest.fixture
def client(app):
    """Test client without a cookie jar; tests send the Cookie header themselves."""
    return app.test_client(use_cookies=False)


@pytest.fixture
def redirect_config():
    """Separate mobile and full site domains, redirecting between them."""
    return SiteConfig(
        mobile_domain='http://m.example.com',
        full_site_domain='http://www.example.com',
        mobile_theme='mobile',
        theme='default',
        mobile_site_type=MobileSiteType.REDIRECT_TO_DOMAIN,
    )


@pytest.fixture
def theme_only_config(redirect_config):
    """One domain, mobile devices only get the mobile theme."""
    return SiteConfig(
        mobile_domain=redirect_config.mobile_domain,
        full_site_domain=redirect_config.full_site_domain,
        mobile_theme='mobile',
        theme='default',
        mobile_site_type=MobileSiteType.MOBILE_THEME_ONLY,
    )


@pytest.fixture
def memo():
    return CookieWriteMemo()
