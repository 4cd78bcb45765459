"""検索状態の管理

状態遷移は reduce() に集約し、SearchSession が唯一の所有者として更新する。
同時に複数の検索が走った場合は、最後に開始された検索の結果だけが反映される。
"""
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .geocoding import GeoPoint
from .search import (
    ClubMatch, FilterCriteria, SearchFailed, SearchNotFound, SearchOutcome,
    SearchRejected, SearchSucceeded, run_search,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchState:
    user_location: Optional[GeoPoint] = None
    matches: List[ClubMatch] = field(default_factory=list)
    message: Optional[str] = None  # 利用者に見せるメッセージ
    last_token: int = 0


def reduce(state: SearchState, outcome: SearchOutcome) -> SearchState:
    """成功時のみ位置と結果を置き換える。失敗時は前回の結果を残す"""
    if isinstance(outcome, SearchSucceeded):
        return replace(state, user_location=outcome.location, matches=list(outcome.matches), message=None)
    if isinstance(outcome, (SearchRejected, SearchNotFound)):
        return replace(state, message=outcome.message)
    if isinstance(outcome, SearchFailed):
        if outcome.kind == "data_shape":
            return replace(state, message="Данные клубов недоступны")
        return replace(state, message="Ошибка поиска клубов")
    raise TypeError(f"Unknown search outcome: {outcome!r}")


class SearchSession:
    """検索状態の所有者。古い検索の結果は捨てる"""

    def __init__(self, state: Optional[SearchState] = None):
        self._lock = threading.Lock()
        self._state = state or SearchState()
        self._issued = self._state.last_token

    @property
    def state(self) -> SearchState:
        with self._lock:
            return self._state

    def begin(self) -> int:
        """新しい検索のトークンを発行"""
        with self._lock:
            self._issued += 1
            return self._issued

    def complete(self, token: int, outcome: SearchOutcome) -> bool:
        """最新トークンの結果のみ反映。反映したらTrue"""
        with self._lock:
            if token != self._issued:
                logger.info(f"Stale search result discarded (token {token}, latest {self._issued})")
                return False
            self._state = replace(reduce(self._state, outcome), last_token=token)
            return True

    def search(self, address: Optional[str], criteria: FilterCriteria, **kwargs) -> SearchState:
        token = self.begin()
        outcome = run_search(address, criteria, **kwargs)
        self.complete(token, outcome)
        return self.state
