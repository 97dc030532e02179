"""
fullSite cookie lifecycle

Works out what (if anything) to write to the fullSite preference cookie.
Choosing the full site writes a short lease cookie; choosing the mobile site
expires the cookie, since no cookie means mobile.
"""

import re
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from utils.domain_matcher import parse_host

logger = logging.getLogger(__name__)

COOKIE_NAME = 'fullSite'

FULL_SITE = 1
MOBILE_SITE = 0

# ~30 minutes, expressed in days
DEFAULT_LEASE_DAYS = 0.02
# Mobile selection expires the cookie
MOBILE_LEASE_SECONDS = -3600

_NUMERIC = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')


def parse_flag(value) -> Optional[int]:
    """
    Parse a fullSite query parameter or cookie value

    Returns:
        FULL_SITE or MOBILE_SITE for numeric values, None for anything else
    """
    if value is None:
        return None
    if isinstance(value, int):
        return FULL_SITE if value else MOBILE_SITE
    if isinstance(value, float):
        value = repr(value)
    if not isinstance(value, str) or not _NUMERIC.match(value):
        return None
    try:
        number = int(float(value))
    except (ValueError, OverflowError):
        return None
    return FULL_SITE if number else MOBILE_SITE


@dataclass(frozen=True)
class CookieWrite:
    """A Set-Cookie for the fullSite cookie"""
    value: int
    max_age: int
    domain: Optional[str] = None

    @property
    def cookie_value(self) -> str:
        return str(self.value)

    @property
    def deletes(self) -> bool:
        return self.max_age <= 0

    def expires(self, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now(timezone.utc)
        return now + timedelta(seconds=self.max_age)


def cookie_domain(full_site_domain: Optional[str]) -> Optional[str]:
    """
    Domain attribute for the cookie. When switching away from the mobile
    (sub)domain the cookie has to be visible on the full site domain,
    otherwise it would be scoped to the mobile domain.
    """
    host = parse_host(full_site_domain)
    if not host:
        return None
    return '.' + host


def lease_seconds(value: int, lease_days: float = DEFAULT_LEASE_DAYS) -> int:
    if value == MOBILE_SITE:
        return MOBILE_LEASE_SECONDS
    return int(round(timedelta(days=lease_days).total_seconds()))


def plan_cookie_write(new_value: int,
                      last_written_value: Optional[int],
                      full_site_domain: Optional[str] = None,
                      lease_days: float = DEFAULT_LEASE_DAYS) -> Optional[CookieWrite]:
    """
    Decide whether the fullSite cookie needs writing

    Args:
        new_value: FULL_SITE or MOBILE_SITE
        last_written_value: value written last time, None if never
        full_site_domain: configured full site domain (URL or host), may be empty
        lease_days: lease for the full site cookie

    Returns:
        CookieWrite, or None when the value is unchanged
    """
    if new_value == last_written_value:
        return None
    return CookieWrite(
        value=new_value,
        max_age=lease_seconds(new_value, lease_days),
        domain=cookie_domain(full_site_domain),
    )


class CookieWriteMemo:
    """Last fullSite value written, shared by every request that uses this memo"""

    def __init__(self):
        self._lock = threading.Lock()
        self._last_written_value = None

    @property
    def last_written_value(self) -> Optional[int]:
        with self._lock:
            return self._last_written_value

    def plan(self, new_value: int, full_site_domain: Optional[str] = None,
             lease_days: float = DEFAULT_LEASE_DAYS) -> Optional[CookieWrite]:
        with self._lock:
            write = plan_cookie_write(new_value, self._last_written_value,
                                      full_site_domain, lease_days)
            if write is not None:
                self._last_written_value = new_value
        if write is not None:
            logger.debug("Planned %s cookie write: value=%s max_age=%s domain=%s",
                         COOKIE_NAME, write.value, write.max_age, write.domain)
        return write

    def reset(self):
        with self._lock:
            self._last_written_value = None
