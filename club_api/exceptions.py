"""検索処理の例外"""


class ClubFinderError(Exception):
    """基底クラス"""


class AddressRequiredError(ClubFinderError):
    """住所が未入力"""


class AddressNotFoundError(ClubFinderError):
    """ジオコーダーが候補を返さなかった"""


class GeocodingError(ClubFinderError):
    """ジオコーディングの通信・解析エラー"""


class ClubSourceError(ClubFinderError):
    """クラブ一覧の取得エラー"""


class ClubDataShapeError(ClubSourceError):
    """クラブ一覧が配列ではない"""


class InvalidCriteriaError(ClubFinderError, ValueError):
    """フィルタ条件が数値として解釈できない"""
