"""
Device detection utility for Flask app
Classifies the requesting device from its User-Agent
"""

import re
from dataclasses import dataclass
from typing import Optional

from flask import request, has_request_context


# Mobile device patterns
MOBILE_PATTERNS = [
    r'mobile',
    r'android',
    r'iphone',
    r'ipad',
    r'ipod',
    r'blackberry',
    r'bb10',
    r'windows phone',
    r'iemobile',
    r'kindle',
    r'silk',
    r'fennec',
    r'minimo',
    r'palm',
    r'pocket',
    r'psp',
    r'webos',
    r'maemo',
    r'netfront',
    r'opera mobi',
    r'opera mini',
    r'polaris',
    r'symbian',
    r'up\.browser',
    r'up\.link',
    r'vodafone',
    r'wap',
    r'windows ce',
    r'xda',
    r'xiino'
]

_MOBILE_RE = re.compile('|'.join(MOBILE_PATTERNS))
_IPHONE_RE = re.compile(r'iphone|ipod')
_ANDROID_RE = re.compile(r'android')
_OPERA_MINI_RE = re.compile(r'opera mini')
_BLACKBERRY_RE = re.compile(r'blackberry|bb10')


@dataclass(frozen=True)
class DeviceClassification:
    is_mobile: bool = False
    is_iphone: bool = False
    is_android: bool = False
    is_opera_mini: bool = False
    is_blackberry: bool = False

    @property
    def device_type(self) -> str:
        return 'mobile' if self.is_mobile else 'desktop'


def classify_user_agent(user_agent: Optional[str]) -> DeviceClassification:
    """
    Classify a User-Agent string
    An empty or missing User-Agent is a desktop
    """
    user_agent = (user_agent or '').lower()

    return DeviceClassification(
        is_mobile=bool(_MOBILE_RE.search(user_agent)),
        is_iphone=bool(_IPHONE_RE.search(user_agent)),
        is_android=bool(_ANDROID_RE.search(user_agent)),
        is_opera_mini=bool(_OPERA_MINI_RE.search(user_agent)),
        is_blackberry=bool(_BLACKBERRY_RE.search(user_agent)),
    )


def _current_user_agent():
    if not has_request_context():
        return ''
    return request.headers.get('User-Agent', '')


def is_mobile_device(user_agent=None):
    """
    Detect if the request is from a mobile device
    Uses the current request's User-Agent when none is given
    """
    if user_agent is None:
        user_agent = _current_user_agent()
    return classify_user_agent(user_agent).is_mobile


def get_device_type(user_agent=None):
    """
    Get device type as string
    Returns 'mobile' or 'desktop'
    """
    return 'mobile' if is_mobile_device(user_agent) else 'desktop'
