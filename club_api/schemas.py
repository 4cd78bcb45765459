"""Pydantic スキーマ定義"""
from typing import Optional, List
from pydantic import BaseModel


class LocationOut(BaseModel):
    lat: float
    lon: float


class ClubOut(BaseModel):
    """地図ポップアップ・一覧用"""
    name: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[str] = None
    rating: float
    lat: float
    lon: float
    distance_km: float


class SearchResponse(BaseModel):
    user_location: LocationOut
    total: int
    dropped: int = 0  # 座標・評価が不正で除外した件数
    clubs: List[ClubOut]


class MapConfigOut(BaseModel):
    center: LocationOut
    zoom: int
    tile_url: str
