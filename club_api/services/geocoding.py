"""住所 → 座標（Nominatim search）

先頭候補の緯度経度のみを使う。リトライ・キャッシュはしない。
"""
import logging
from typing import NamedTuple, Optional

import requests

from .. import config
from ..exceptions import AddressNotFoundError, AddressRequiredError, GeocodingError
from .normalize import parse_number

logger = logging.getLogger(__name__)

NOMINATIM_HEADERS = {"User-Agent": config.NOMINATIM_USER_AGENT}

_session = requests.Session()


class GeoPoint(NamedTuple):
    lat: float
    lon: float


def build_query(address: str) -> str:
    """地域名を前置した検索文字列"""
    return config.LOCALITY_PREFIX + address.strip()


def geocode_address(address: Optional[str], *, session: Optional[requests.Session] = None) -> GeoPoint:
    """住所を座標に変換

    Raises:
        AddressRequiredError: 住所が空（通信しない）
        AddressNotFoundError: 候補が0件
        GeocodingError: 通信・レスポンス解析の失敗
    """
    if not address or not address.strip():
        raise AddressRequiredError("Введите адрес!")

    http = session or _session
    query = build_query(address)
    params = {"format": "json", "q": query}

    try:
        resp = http.get(
            config.NOMINATIM_URL,
            params=params,
            headers=NOMINATIM_HEADERS,
            timeout=config.HTTP_TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Geocoding request failed for {query!r}: {e}")
        raise GeocodingError(f"Geocoding failed: {e}") from e

    if not isinstance(data, list):
        logger.error(f"Geocoding response is not a list for {query!r}: {data!r}")
        raise GeocodingError("Unexpected geocoding response")
    if not data:
        raise AddressNotFoundError("Адрес не найден!")

    first = data[0] if isinstance(data[0], dict) else {}
    lat = parse_number(first.get("lat"))
    lon = parse_number(first.get("lon"))
    if lat is None or lon is None:
        logger.error(f"Geocoding result without coordinates for {query!r}: {data[0]!r}")
        raise GeocodingError("Geocoding result has no coordinates")

    logger.info(f"Geocoded {query!r} -> {lat}, {lon}")
    return GeoPoint(lat, lon)
