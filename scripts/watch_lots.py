# scripts/watch_lots.py
"""
Terminal lot board — polls the API and prints ranked lots on every refresh.
Usage: python scripts/watch_lots.py --permit commuter --building science-hall --sort hybrid
"""

import argparse
import asyncio
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import httpx
from parking_app.client.lot_board import EnforcementBoard, LotBoard
from parking_app.config import settings
from parking_app.services.ranking_service import PERMIT_CLASSES, SORT_MODES


def print_lots(board: LotBoard):
    print(f"\n🅿️  {board.permit} near {board.building} — sorted by {board.sort_mode}")
    if board.error:
        print(f"   ⚠️  {board.error}")
    if not board.lots:
        print("   No parking lots found.")
    for lot in board.lots:
        score = f"  score={lot.score:.2f}" if lot.score is not None else ""
        print(f"   {lot.title:<28} {lot.available:>4}/{lot.capacity:<4} available  "
              f"{lot.distance:.2f} mi{score}")


def print_alerts(board: EnforcementBoard):
    print(f"\n🚨 Enforcement — {len(board.alerts)} alert(s)")
    if board.error:
        print(f"   ⚠️  {board.error}")
    for a in board.alerts:
        print(f"   {a['plateNumber']:<10} {a['lotID']:<12} {a['minutesParked']} min")


async def run(args):
    async with httpx.AsyncClient(base_url=args.url, timeout=10) as client:
        if args.enforcement:
            board = EnforcementBoard(client, interval=args.interval, on_update=print_alerts)
        else:
            board = LotBoard(client, permit=args.permit, building=args.building,
                             sort_mode=args.sort, interval=args.interval, on_update=print_lots)
        board.start()
        try:
            await asyncio.Event().wait()
        finally:
            await board.stop()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Poll and print the lot board")
    parser.add_argument("--url", default=settings.API_BASE_URL)
    parser.add_argument("--permit", default="commuter", choices=PERMIT_CLASSES)
    parser.add_argument("--building", default=settings.DEFAULT_BUILDING, choices=list(settings.BUILDINGS))
    parser.add_argument("--sort", default="hybrid", choices=SORT_MODES)
    parser.add_argument("--interval", type=float, default=None)
    parser.add_argument("--enforcement", action="store_true", help="Show the enforcement table instead")
    args = parser.parse_args()

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        print("\n👋 Stopped")
