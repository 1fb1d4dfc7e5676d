"""
Domain utilities for the Roaming Service.

Includes the credential and identity models, the application-key secret
table, request signing, the allow-list gate, identity resolution and the
playurl request pipeline.
"""

from .allowlist import AllowList
from .identity_resolver import IdentityResolver
from .models import AccountInfoResponse, Credential, Identity
from .playurl import PlayUrlHandler
from .secrets import ANDROID_APPKEY, resolve_secret_key
from .signing import SignedQuery, sign_query

__all__ = [
    "ANDROID_APPKEY",
    "AccountInfoResponse",
    "AllowList",
    "Credential",
    "Identity",
    "IdentityResolver",
    "PlayUrlHandler",
    "SignedQuery",
    "resolve_secret_key",
    "sign_query",
]
