"""
Adapters package for the Roaming Service.

Contains the HTTP client wrapper for the upstream platform API. The adapter
encapsulates:

- Base URLs for the account and playurl hosts
- User-agent forwarding
- Mapping transport failures onto shared errors

No retries are performed; a failed call fails the request.
"""

from .bili_client import BiliApiClient

__all__ = ["BiliApiClient"]
