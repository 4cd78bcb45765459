"""アプリケーション設定"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).parent.parent

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{BASE_DIR / 'data' / 'clubs.db'}"
)

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# クラブ一覧の取得元（/all-clubs を持つバックエンド）。既定は自分自身
CLUBS_API_BASE = os.getenv("CLUBS_API_BASE", f"http://localhost:{API_PORT}").rstrip("/")

# 検索専用スレッド数（/all-clubs の処理スレッドとは別枠）
SEARCH_WORKERS = int(os.getenv("SEARCH_WORKERS", "8"))

# ジオコーディング（Nominatim search）
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "club-finder/0.1")
LOCALITY_PREFIX = os.getenv("LOCALITY_PREFIX", "Тюмень, ")

# 0 でタイムアウトなし
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10")) or None

# 地図の初期表示
MAP_CENTER_LAT = float(os.getenv("MAP_CENTER_LAT", "57.1522"))
MAP_CENTER_LON = float(os.getenv("MAP_CENTER_LON", "65.5272"))
MAP_ZOOM = int(os.getenv("MAP_ZOOM", "12"))
MAP_TILE_URL = os.getenv("MAP_TILE_URL", "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png")

# バックエンドのフィールド名（自然言語ラベル）
CLUB_FIELD_NAME = os.getenv("CLUB_FIELD_NAME", "Название")
CLUB_FIELD_ADDRESS = os.getenv("CLUB_FIELD_ADDRESS", "Адрес")
CLUB_FIELD_HOURS = os.getenv("CLUB_FIELD_HOURS", "Часы работы")
CLUB_FIELD_RATING = os.getenv("CLUB_FIELD_RATING", "Рейтинг")
CLUB_FIELD_LAT = os.getenv("CLUB_FIELD_LAT", "Координаты (lat)")
CLUB_FIELD_LON = os.getenv("CLUB_FIELD_LON", "Координаты (lon)")
