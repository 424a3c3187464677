"""
Gateway settings.

Values fall back to environment variables (a local .env file is loaded
first) when not passed explicitly:
    GATEWAY_MODE, GATEWAY_VENDOR_NAME, GATEWAY_REFERRER_ID, GATEWAY_BASE_URL
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

from .exceptions import ValidationError


MODE_TEST = 'test'
MODE_LIVE = 'live'

BASE_URLS = {
    MODE_TEST: 'https://sandbox.opayo.eu.elavon.com/api/v1/',
    MODE_LIVE: 'https://live.opayo.eu.elavon.com/api/v1/',
}


@dataclass(frozen=True)
class GatewaySettings:
    vendor_name: str | None = field(default=None)
    mode: str = field(default=MODE_TEST)
    referrer_id: str | None = field(default=None)
    base_url: str | None = field(default=None)

    def __post_init__(self):
        if self.mode not in BASE_URLS:
            raise ValidationError('mode', self.mode, accepted=list(BASE_URLS))

        if not self.base_url:
            object.__setattr__(self, 'base_url', BASE_URLS[self.mode])

    @classmethod
    def from_env(
        cls,
        vendor_name: str | None = None,
        mode: str | None = None,
        referrer_id: str | None = None,
        base_url: str | None = None,
    ) -> 'GatewaySettings':
        """Build settings from arguments, falling back to the environment."""
        load_dotenv(find_dotenv(usecwd=True))

        return cls(
            vendor_name=vendor_name or os.getenv('GATEWAY_VENDOR_NAME'),
            mode=(mode or os.getenv('GATEWAY_MODE') or MODE_TEST).lower(),
            referrer_id=referrer_id or os.getenv('GATEWAY_REFERRER_ID'),
            base_url=base_url or os.getenv('GATEWAY_BASE_URL'),
        )

    def endpoint_url(self, request) -> str:
        """Full URL a request is sent to, from its ``resource_path``."""
        return self.base_url.rstrip('/') + '/' + request.resource_path.lstrip('/')
