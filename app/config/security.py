# app/config/security.py
# Security headers added to every response

import os
from typing import Dict


class SecurityConfig:
    """Security configuration for the application"""

    SECURITY_HEADERS: Dict[str, str] = {
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'DENY',
        'X-XSS-Protection': '0',
        'Referrer-Policy': 'no-referrer',
        'Strict-Transport-Security': 'max-age=31536000; includeSubDomains',
        'Content-Security-Policy': "default-src 'self'",
    }

    ENABLED = os.getenv('SECURITY_HEADERS', 'true').lower() == 'true'

    @classmethod
    def apply(cls, headers) -> None:
        """Set any security header the route has not set itself"""
        if not cls.ENABLED:
            return
        for name, value in cls.SECURITY_HEADERS.items():
            headers.setdefault(name, value)
