"""
Application key to signing secret table.
"""

from types import MappingProxyType
from typing import Mapping

from shared.errors import FailedGetSecretKey


ANDROID_APPKEY = "1d8b6e7d45233436"

SECRET_KEYS: Mapping[str, str] = MappingProxyType({
    "9d5889cf67e615cd": "8fd9bb32efea8cef801fd895bef2713d",  # Ai4cCreatorAndroid
    ANDROID_APPKEY: "560c52ccd288fed045859ed18bffd973",  # Android
    "07da50c9a0bf829f": "25bdede4e1581c836cab73a48790ca6e",  # AndroidB
    "8d23902c1688a798": "710f0212e62bd499b8d3ac6e1db9302a",  # AndroidBiliThings
    "dfca71928277209b": "b5475a8825547a4fc26c7d518eaaa02e",  # AndroidHD
    "bb3101000e232e27": "36efcfed79309338ced0380abd824ac1",  # AndroidI
    "4c6e1021617d40d9": "e559a59044eb2701b7a8628c86aa12ae",  # AndroidMallTicket
    "c034e8b74130a886": "e4e8966b1e71847dc4a3830f2d078523",  # AndroidOttSdk
    "4409e2ce8ffd12b8": "59b43e04ad6965f34319062b478f83dd",  # AndroidTV
    "37207f2beaebf8d7": "e988e794d4d4b6dd43bc0e89d6e90c43",  # BiliLink
    "9a75abf7de2d8947": "35ca1c82be6c2c242ecc04d88c735f31",  # BiliScan
    "7d089525d3611b1c": "acd495b248ec528c2eed1e862d393126",  # BstarA
    "178cf125136ca8ea": "34381a26236dd1171185c0beb042e1c6",  # AndroidB
    "27eb53fc9058f8c3": "c2ed53a74eeefe3cf99fbd01d8c9c375",  # ios
    "57263273bc6b67f6": "a0488e488d1567960d3a765e8d129f90",  # Android
    "7d336ec01856996b": "a1ce6983bc89e20a36c37f40c4f1a0dd",  # AndroidB
    "85eb6835b0a1034e": "2ad42749773c441109bdc0191257a664",  # unknown
    "84956560bc028eb7": "94aba54af9065f71de72f5508f1cd42e",  # unknown
    "8e16697a1b4f8121": "f5dd03b752426f2e623d7badb28d190a",  # AndroidI
    "aae92bc66f3edfab": "af125a0d5279fd576c1b4418a3e8276d",  # PC uploader
    "ae57252b0c09105d": "c75875c596a69eb55bd119e74b07cfe3",  # AndroidI
    "bca7e84c2d947ac6": "60698ba2f68e01ce44738920a0ffe768",  # login
    "4ebafd7c4951b366": "8cb98205e9b2ad3669aad0fce12a4c13",  # iPhone
    "iVGUTjsxvpLeuDCf": "aHRmhWMLkdeMuILqORnYZocwMBpMEOdt",  # Android, stream only
    "YvirImLGlLANCLvM": "JNlZNgfNGKZEpaDTkCdPQVXntXhuiJEM",  # ios, stream only
})


def resolve_secret_key(appkey: str) -> str:
    """Return the signing secret paired with ``appkey``.

    Unknown keys are rejected with ``FailedGetSecretKey``; there is no default.
    """
    try:
        return SECRET_KEYS[appkey]
    except KeyError:
        raise FailedGetSecretKey() from None
