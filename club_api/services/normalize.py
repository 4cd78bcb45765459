"""クラブレコードの正規化

バックエンドのレコードはフィールド名が自然言語ラベルで、数値も文字列で届くことがある。
ここで正規名へ変換し、座標・評価が数値として解釈できないレコードは除外する。
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .. import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClubFieldMap:
    """正規名 → バックエンドのキー"""
    name: str = config.CLUB_FIELD_NAME
    address: str = config.CLUB_FIELD_ADDRESS
    hours: str = config.CLUB_FIELD_HOURS
    rating: str = config.CLUB_FIELD_RATING
    lat: str = config.CLUB_FIELD_LAT
    lon: str = config.CLUB_FIELD_LON


DEFAULT_FIELDS = ClubFieldMap()


@dataclass(frozen=True)
class Club:
    """正規化済みクラブ（lat/lon/ratingは有限な数値）"""
    lat: float
    lon: float
    rating: float
    name: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


def parse_number(value: Any) -> Optional[float]:
    """数値または数値文字列をfloatに変換。解釈できなければNone"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        # "57,15" のような小数点カンマ
        if value.count(",") == 1 and "." not in value:
            value = value.replace(",", ".")
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_club(raw: Any, fields: ClubFieldMap = DEFAULT_FIELDS) -> Optional[Club]:
    """1件を正規化。座標・評価のいずれかが不正ならNone"""
    if not isinstance(raw, dict):
        logger.warning(f"Club record is not an object, dropped: {raw!r}")
        return None

    lat = parse_number(raw.get(fields.lat))
    lon = parse_number(raw.get(fields.lon))
    rating = parse_number(raw.get(fields.rating))

    if lat is None or lon is None or rating is None:
        logger.warning(f"Club dropped (coordinates or rating missing): {raw!r}")
        return None
    if not (-90.0 <= lat <= 90.0) or not (-180.0 <= lon <= 180.0):
        logger.warning(f"Club dropped (coordinates out of range {lat}, {lon}): {raw!r}")
        return None

    club = Club(
        lat=lat,
        lon=lon,
        rating=rating,
        name=_text(raw.get(fields.name)),
        address=_text(raw.get(fields.address)),
        hours=_text(raw.get(fields.hours)),
        raw=raw,
    )
    logger.debug(f"Club normalized: {club.name} lat={lat} lon={lon} rating={rating}")
    return club


def normalize_clubs(raws: Iterable[Any], fields: ClubFieldMap = DEFAULT_FIELDS) -> List[Club]:
    """入力順を保ったまま正規化（不正なレコードは除外）"""
    clubs = []
    for raw in raws:
        club = normalize_club(raw, fields)
        if club is not None:
            clubs.append(club)
    return clubs
