#!/usr/bin/env python3
"""クラブ一覧（JSON / CSV）をDBにインポート

値は文字列のまま保存する。座標・評価の検証は検索時に行う。
"""

import csv
import sys
import json
from pathlib import Path

# プロジェクトルートをパスに追加
sys.path.insert(0, str(Path(__file__).parent.parent))

from club_api.database import SessionLocal, init_db
from club_api.models import SportsClub
from club_api.services.normalize import DEFAULT_FIELDS


def safe_text(v):
    """空文字やNoneをNoneに、それ以外は文字列に"""
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def load_records(path: Path):
    """JSON配列またはCSV（ヘッダ付き）を読み込む"""
    if path.suffix.lower() == ".json":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path.name}: JSON配列ではありません")
        return data

    with open(path, encoding="utf-8-sig", newline="") as f:
        return list(csv.DictReader(f))


def to_model(record: dict) -> SportsClub:
    return SportsClub(
        name=safe_text(record.get(DEFAULT_FIELDS.name)),
        address=safe_text(record.get(DEFAULT_FIELDS.address)),
        hours=safe_text(record.get(DEFAULT_FIELDS.hours)),
        rating=safe_text(record.get(DEFAULT_FIELDS.rating)),
        lat=safe_text(record.get(DEFAULT_FIELDS.lat)),
        lon=safe_text(record.get(DEFAULT_FIELDS.lon)),
        raw_data=record,
    )


def import_clubs(session, path: Path, replace: bool = False) -> int:
    """インポートした件数を返す"""
    records = load_records(path)
    if replace:
        session.query(SportsClub).delete()

    count = 0
    for record in records:
        if not isinstance(record, dict):
            print(f"   ⚠️ skip: {record!r}")
            continue
        session.add(to_model(record))
        count += 1
    session.commit()
    return count


def main():
    import argparse
    parser = argparse.ArgumentParser(description="クラブ一覧をインポート")
    parser.add_argument("path", type=Path, help="clubs.json / clubs.csv")
    parser.add_argument("--replace", action="store_true", help="既存データを削除してから取り込む")
    args = parser.parse_args()

    if not args.path.exists():
        print(f"❌ {args.path} not found")
        sys.exit(1)

    init_db()
    session = SessionLocal()
    try:
        print(f"🏋️  {args.path.name}...")
        n = import_clubs(session, args.path, replace=args.replace)
        print(f"   ✅ {n:,}件")
        print("\n🎉 インポート完了!")
    finally:
        session.close()


if __name__ == "__main__":
    main()
