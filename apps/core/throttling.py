"""
Rate limiting for the content API.

Rates come from ``REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']``:

    'translate': '60/minute',   # anonymous translation proxy
    'burst': '120/minute',      # authenticated write bursts
"""

from rest_framework.throttling import AnonRateThrottle, UserRateThrottle


class TranslateEndpointThrottle(AnonRateThrottle):
    """
    Throttle for the public translation proxy.

    Every call spends DeepL quota, so anonymous clients are keyed by IP.
    """
    scope = 'translate'

    def get_rate(self):
        try:
            return super().get_rate()
        except Exception:
            return '60/minute'


class BurstThrottle(UserRateThrottle):
    """
    Burst throttle to prevent rapid-fire writes.

    Default: 120 requests/minute
    """
    scope = 'burst'

    def get_rate(self):
        try:
            return super().get_rate()
        except Exception:
            return '120/minute'
