#!/usr/bin/env python3
"""ターミナルからクラブ検索（一覧表示）"""

import sys
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from club_api.exceptions import InvalidCriteriaError
from club_api.services.search import parse_criteria
from club_api.services.state import SearchSession


def print_state(state):
    if state.message:
        print(f"⚠️  {state.message}")
        return
    loc = state.user_location
    print(f"📍 Ваше местоположение: {loc.lat:.5f}, {loc.lon:.5f}")
    print(f"Клубы: {len(state.matches)}")
    for m in state.matches:
        club = m.club
        print(f"\n  {club.name}")
        print(f"    Адрес: {club.address}")
        print(f"    Рейтинг: {club.rating}")
        print(f"    Часы работы: {club.hours}")
        print(f"    Расстояние: {m.distance_km:.2f} км")


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    session = SearchSession()
    print("Поиск спортивных клубов (Ctrl+D — выход)")
    while True:
        try:
            address = input("\nАдрес: ")
            min_rating = input("Минимальный рейтинг (0-5): ")
            max_distance = input("Максимальная дистанция (км): ")
        except EOFError:
            print()
            break

        try:
            criteria = parse_criteria(min_rating, max_distance)
        except InvalidCriteriaError as e:
            print(f"⚠️  {e}")
            continue

        print_state(session.search(address, criteria))


if __name__ == "__main__":
    main()
