"""クラブ検索エンドポイント"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..exceptions import InvalidCriteriaError
from ..models import SportsClub
from ..schemas import ClubOut, LocationOut, MapConfigOut, SearchResponse
from ..services.normalize import DEFAULT_FIELDS
from ..services.search import (
    SearchFailed, SearchNotFound, SearchRejected, parse_criteria, run_search,
)

router = APIRouter(tags=["clubs"])

# 検索はここで実行する。既定のスレッドプールは /all-clubs 用に空けておく
search_executor = ThreadPoolExecutor(max_workers=config.SEARCH_WORKERS, thread_name_prefix="club-search")


def _club_to_raw(club: SportsClub) -> dict:
    """DBの行をバックエンド形式（自然言語キー）に戻す"""
    record = dict(club.raw_data or {})
    record.update({
        DEFAULT_FIELDS.name: club.name,
        DEFAULT_FIELDS.address: club.address,
        DEFAULT_FIELDS.hours: club.hours,
        DEFAULT_FIELDS.rating: club.rating,
        DEFAULT_FIELDS.lat: club.lat,
        DEFAULT_FIELDS.lon: club.lon,
    })
    return record


@router.get("/all-clubs")
def all_clubs(db: Session = Depends(get_db)):
    """全クラブ（加工なし）"""
    return [_club_to_raw(c) for c in db.query(SportsClub).order_by(SportsClub.id).all()]


@router.get("/api/v1/search", response_model=SearchResponse)
async def search_clubs(
    address: Optional[str] = Query(None, description="住所（地域名は自動で前置）"),
    min_rating: Optional[str] = Query(None, description="最低評価 (0-5)"),
    max_distance: Optional[str] = Query(None, description="最大距離 (km)"),
):
    try:
        criteria = parse_criteria(min_rating, max_distance)
    except InvalidCriteriaError as e:
        raise HTTPException(status_code=400, detail=str(e))

    loop = asyncio.get_running_loop()
    outcome = await loop.run_in_executor(search_executor, partial(run_search, address, criteria))

    if isinstance(outcome, SearchRejected):
        raise HTTPException(status_code=400, detail=outcome.message)
    if isinstance(outcome, SearchNotFound):
        raise HTTPException(status_code=404, detail=outcome.message)
    if isinstance(outcome, SearchFailed):
        raise HTTPException(status_code=502, detail=f"{outcome.kind}: {outcome.message}")

    return SearchResponse(
        user_location=LocationOut(lat=outcome.location.lat, lon=outcome.location.lon),
        total=len(outcome.matches),
        dropped=outcome.dropped,
        clubs=[ClubOut(
            name=m.club.name,
            address=m.club.address,
            hours=m.club.hours,
            rating=m.club.rating,
            lat=m.club.lat,
            lon=m.club.lon,
            distance_km=round(m.distance_km, 2),
        ) for m in outcome.matches],
    )


@router.get("/api/v1/map-config", response_model=MapConfigOut)
def map_config():
    return MapConfigOut(
        center=LocationOut(lat=config.MAP_CENTER_LAT, lon=config.MAP_CENTER_LON),
        zoom=config.MAP_ZOOM,
        tile_url=config.MAP_TILE_URL,
    )


@router.get("/api/v1/health")
def health():
    return {"status": "ok"}
