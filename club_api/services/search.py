"""検索サービス — ジオコーディング → クラブ取得 → 正規化 → 距離・条件フィルタ"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

import requests

from ..exceptions import (
    AddressNotFoundError, AddressRequiredError, ClubDataShapeError,
    ClubSourceError, GeocodingError, InvalidCriteriaError,
)
from .club_source import fetch_all_clubs
from .geo import haversine
from .geocoding import GeoPoint, geocode_address
from .normalize import DEFAULT_FIELDS, Club, ClubFieldMap, normalize_clubs, parse_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterCriteria:
    """None はその条件なし"""
    min_rating: Optional[float] = None
    max_distance_km: Optional[float] = None


def _parse_threshold(name: str, value: Optional[str]) -> Optional[float]:
    if value is None or not str(value).strip():
        return None
    number = parse_number(value)
    if number is None:
        raise InvalidCriteriaError(f"{name} must be a number: {value!r}")
    return number


def parse_criteria(min_rating: Optional[str] = None, max_distance: Optional[str] = None) -> FilterCriteria:
    """入力欄の文字列から条件を作る（空欄は未指定）"""
    return FilterCriteria(
        min_rating=_parse_threshold("min_rating", min_rating),
        max_distance_km=_parse_threshold("max_distance", max_distance),
    )


def matches(criteria: FilterCriteria, rating: float, distance_km: float) -> bool:
    """評価は下限以上、距離は上限以下（いずれも境界を含む）"""
    rating_ok = criteria.min_rating is None or rating >= criteria.min_rating
    distance_ok = criteria.max_distance_km is None or distance_km <= criteria.max_distance_km
    return rating_ok and distance_ok


@dataclass(frozen=True)
class ClubMatch:
    club: Club
    distance_km: float


def filter_clubs(origin: GeoPoint, clubs: Iterable[Club], criteria: FilterCriteria) -> List[ClubMatch]:
    """条件を満たすクラブを入力順のまま返す"""
    results = []
    for club in clubs:
        dist = haversine(origin.lat, origin.lon, club.lat, club.lon)
        ok = matches(criteria, club.rating, dist)
        logger.debug(f"Club {club.name}: distance={dist:.3f} km rating={club.rating} pass={ok}")
        if ok:
            results.append(ClubMatch(club=club, distance_km=dist))
    return results


# === 検索結果 ===

@dataclass(frozen=True)
class SearchSucceeded:
    location: GeoPoint
    matches: List[ClubMatch] = field(default_factory=list)
    dropped: int = 0  # 正規化で除外した件数


@dataclass(frozen=True)
class SearchRejected:
    """入力エラー（通信なし）"""
    message: str


@dataclass(frozen=True)
class SearchNotFound:
    message: str


@dataclass(frozen=True)
class SearchFailed:
    kind: str  # "geocoding" / "club_source" / "data_shape" / "unexpected"
    message: str


SearchOutcome = Union[SearchSucceeded, SearchRejected, SearchNotFound, SearchFailed]


def run_search(
    address: Optional[str],
    criteria: FilterCriteria,
    *,
    session: Optional[requests.Session] = None,
    fields: ClubFieldMap = DEFAULT_FIELDS,
) -> SearchOutcome:
    """1回分の検索。例外は外に出さず、すべて結果として返す"""
    try:
        return _run_search(address, criteria, session, fields)
    except Exception as e:
        logger.exception(f"Search failed unexpectedly for {address!r}")
        return SearchFailed("unexpected", f"{type(e).__name__}: {e}")


def _run_search(address, criteria, session, fields):
    try:
        location = geocode_address(address, session=session)
    except AddressRequiredError as e:
        return SearchRejected(str(e))
    except AddressNotFoundError as e:
        logger.info(f"Address not found: {address!r}")
        return SearchNotFound(str(e))
    except GeocodingError as e:
        return SearchFailed("geocoding", str(e))

    try:
        raw_clubs = fetch_all_clubs(session=session)
    except ClubDataShapeError as e:
        return SearchFailed("data_shape", str(e))
    except ClubSourceError as e:
        return SearchFailed("club_source", str(e))

    clubs = normalize_clubs(raw_clubs, fields)
    dropped = len(raw_clubs) - len(clubs)
    if dropped:
        logger.warning(f"{dropped} of {len(raw_clubs)} clubs dropped (invalid coordinates or rating)")

    found = filter_clubs(location, clubs, criteria)
    logger.info(f"Search {address!r}: {len(found)} of {len(clubs)} clubs matched")
    return SearchSucceeded(location=location, matches=found, dropped=dropped)
