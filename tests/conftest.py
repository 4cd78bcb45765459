import importlib.util
import os
import tempfile
from pathlib import Path

import pytest
import requests

# テスト用の一時DB（club_api のインポート前に設定）。開発環境の値は使わない
_TMP_DIR = Path(tempfile.mkdtemp(prefix="club_finder_"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ.pop("CLUBS_API_BASE", None)

from club_api import config  # noqa: E402

GEOCODE_URL = config.NOMINATIM_URL
CLUBS_URL = f"{config.CLUBS_API_BASE}/all-clubs"


def load_script(name):
    """scripts/ 配下のスクリプトをモジュールとして読み込む"""
    path = Path(__file__).resolve().parent.parent / "scripts" / f"{name}.py"
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._json_error:
            raise ValueError("invalid json")
        return self._payload


class FakeSession:
    """URLごとに応答を返すrequests.Session代わり"""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append((url, params))
        resp = self.responses[url]
        if isinstance(resp, Exception):
            raise resp
        return resp


def club(name, lat, lon, rating, address="ул. Республики, 1", hours="08:00-22:00"):
    """バックエンド形式のレコード"""
    return {
        "Название": name,
        "Адрес": address,
        "Часы работы": hours,
        "Рейтинг": rating,
        "Координаты (lat)": lat,
        "Координаты (lon)": lon,
    }


@pytest.fixture
def user_at():
    def _make(lat, lon):
        return FakeResponse([{"lat": str(lat), "lon": str(lon), "display_name": "Тюмень"}])
    return _make
