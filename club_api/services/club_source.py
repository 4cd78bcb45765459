"""クラブ一覧の取得（バックエンド /all-clubs）"""
import logging
from typing import Any, Dict, List, Optional

import requests

from .. import config
from ..exceptions import ClubDataShapeError, ClubSourceError

logger = logging.getLogger(__name__)

_session = requests.Session()


def all_clubs_url() -> str:
    return f"{config.CLUBS_API_BASE}/all-clubs"


def fetch_all_clubs(*, session: Optional[requests.Session] = None) -> List[Dict[str, Any]]:
    """全クラブを毎回取得（キャッシュなし）"""
    http = session or _session
    url = all_clubs_url()
    try:
        resp = http.get(url, timeout=config.HTTP_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Club list request failed ({url}): {e}")
        raise ClubSourceError(f"Club list unavailable: {e}") from e

    if not isinstance(data, list):
        logger.error(f"Club list is not an array: {data!r}")
        raise ClubDataShapeError("Club list is not an array")

    logger.info(f"Fetched {len(data)} clubs from {url}")
    return data
