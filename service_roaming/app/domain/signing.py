"""
Request signing for the platform's app API.
"""

import hashlib
from dataclasses import dataclass


@dataclass(frozen=True)
class SignedQuery:
    """Origin query plus its MD5 signature."""
    origin: str
    sign: str

    @property
    def query(self) -> str:
        return f"{self.origin}&sign={self.sign}"


def build_origin_query(access_key: str, appkey: str, ts: int) -> str:
    return f"access_key={access_key}&appkey={appkey}&ts={ts}"


def sign_query(access_key: str, appkey: str, ts: int, secret: str) -> SignedQuery:
    """Sign the account-info query.

    The same ``ts`` feeds both the query and the digest input, so the signed
    string is exactly what upstream re-hashes.
    """
    origin = build_origin_query(access_key, appkey, ts)
    digest = hashlib.md5(f"{origin}{secret}".encode("utf-8")).hexdigest()
    return SignedQuery(origin=origin, sign=digest)
