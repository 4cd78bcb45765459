"""SQLAlchemy モデル定義"""
from datetime import datetime
from sqlalchemy import Column, Integer, Text, DateTime, JSON

from .database import Base


class SportsClub(Base):
    """スポーツクラブ

    評価・座標は受け取ったままの文字列で保持する（検証は検索側で行う）。
    """
    __tablename__ = "sports_clubs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text)
    address = Column(Text)
    hours = Column(Text)      # 営業時間（自由記述）
    rating = Column(Text)     # "4.5" など
    lat = Column(Text)
    lon = Column(Text)
    raw_data = Column(JSON)   # 元レコードの全フィールド
    created_at = Column(DateTime, default=datetime.utcnow)
