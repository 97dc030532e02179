"""
Site configuration store
Reads the mobile/full site settings from Supabase, falling back to the Flask config
"""

import time
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

from supabase import create_client, Client

logger = logging.getLogger(__name__)


class MobileSiteType(Enum):
    REDIRECT_TO_DOMAIN = 'RedirectToDomain'
    MOBILE_THEME_ONLY = 'MobileThemeOnly'
    UNSET = ''

    @classmethod
    def parse(cls, value) -> 'MobileSiteType':
        if isinstance(value, cls):
            return value
        for site_type in cls:
            if site_type.value and site_type.value == value:
                return site_type
        return cls.UNSET


@dataclass(frozen=True)
class SiteConfig:
    mobile_domain: str = ''
    full_site_domain: str = ''
    mobile_theme: str = ''
    theme: str = ''
    mobile_site_type: MobileSiteType = MobileSiteType.UNSET

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> 'SiteConfig':
        """
        Build a SiteConfig from a site_config row or from Flask config

        Args:
            mapping: keys either lower case (database columns) or upper case (Flask config)
        """
        def get(key):
            value = mapping.get(key)
            if value is None:
                value = mapping.get(key.upper())
            return value or ''

        return cls(
            mobile_domain=get('mobile_domain'),
            full_site_domain=get('full_site_domain'),
            mobile_theme=get('mobile_theme'),
            theme=get('theme'),
            mobile_site_type=MobileSiteType.parse(get('mobile_site_type')),
        )

    @property
    def redirects_to_domain(self) -> bool:
        return self.mobile_site_type is MobileSiteType.REDIRECT_TO_DOMAIN

    @property
    def mobile_theme_only(self) -> bool:
        return self.mobile_site_type is MobileSiteType.MOBILE_THEME_ONLY


class SiteConfigStore:
    """Current site configuration for an application"""

    def __init__(self, app_config, client: Optional[Client] = None):
        self.app_config = app_config
        self.table = app_config.get('SITE_CONFIG_TABLE', 'site_config')
        self.cache_seconds = app_config.get('SITE_CONFIG_CACHE_SECONDS', 60)
        self._lock = threading.Lock()
        self._cached = None
        self._cached_at = 0.0

        url = app_config.get('SUPABASE_URL')
        key = app_config.get('SUPABASE_ANON_KEY')
        if client is None and url and key:
            client = create_client(url, key)
        self.client = client
        if self.client is None:
            logger.info("Supabase not configured, site config comes from application config")

    def current(self) -> SiteConfig:
        if self.client is None:
            return self.from_app_config()

        with self._lock:
            if self._cached is not None and time.monotonic() - self._cached_at < self.cache_seconds:
                return self._cached

        site_config = self.fetch()
        with self._lock:
            self._cached = site_config
            self._cached_at = time.monotonic()
        return site_config

    def fetch(self) -> SiteConfig:
        try:
            result = self.client.table(self.table)\
                .select('*')\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.warning("Error fetching site config from %s: %s", self.table, e)
            return self.from_app_config()

        if not result.data:
            logger.warning("No rows in %s, using application config", self.table)
            return self.from_app_config()
        return SiteConfig.from_mapping(result.data[0])

    def from_app_config(self) -> SiteConfig:
        return SiteConfig.from_mapping(self.app_config)

    def invalidate(self):
        with self._lock:
            self._cached = None
            self._cached_at = 0.0
