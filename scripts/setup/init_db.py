# scripts/setup/init_db.py
"""
Initialize database — creates all tables and optionally seeds lots/vehicles.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed scripts/data/seed_lots.json]

The seed file is a JSON export of the old document store:
  {"lots": [{lotID, title, capacity, location, allows, scans: [{plateNumber, timestamp}]}],
   "vehicles": [{plate}]}
Scan timestamps may be ISO-8601 or the legacy "Tue Nov 11 2025 14:05:09 EST" form.
"""

import argparse
import json
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from datetime import datetime
from parking_app.database import Database
from parking_app.config import settings
from parking_app.models.lot import Lot
from parking_app.models.scan import Scan
from parking_app.models.vehicle import Vehicle
from parking_app.services.enforcement_service import parse_scan_timestamp
from parking_app.services.occupancy_service import normalize_plate
from sqlalchemy import inspect


def seed(db: Database, path: str):
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    session = db.session()
    try:
        lots_added, scans_added, skipped = 0, 0, 0
        for doc in data.get("lots", []):
            if session.query(Lot).filter(Lot.lot_id == doc["lotID"]).first():
                print(f"   ↷ {doc['lotID']} already present — skipped")
                continue
            session.add(Lot(lot_id=doc["lotID"], title=doc.get("title", doc["lotID"]),
                            capacity=int(doc.get("capacity", 0)), location=doc.get("location"),
                            allows=doc.get("allows", {})))
            lots_added += 1

            seen = set()
            for scan in doc.get("scans") or []:
                plate = normalize_plate(scan.get("plateNumber", "")) if isinstance(scan, dict) else ""
                ts = parse_scan_timestamp(scan.get("timestamp")) if plate else None
                if not plate or ts is None or plate in seen:
                    skipped += 1
                    continue
                seen.add(plate)
                session.add(Scan(lot_id=doc["lotID"], plate_number=plate,
                                 timestamp=ts.replace(tzinfo=None)))
                scans_added += 1

        vehicles_added = 0
        for doc in data.get("vehicles", []):
            plate = normalize_plate(doc.get("plate", ""))
            if not plate or session.query(Vehicle).filter(Vehicle.plate_number == plate).first():
                continue
            session.add(Vehicle(plate_number=plate, registered_at=datetime.utcnow()))
            vehicles_added += 1

        session.commit()
        print(f"✅ Seeded {lots_added} lots, {scans_added} scans, {vehicles_added} vehicles "
              f"({skipped} malformed scans skipped)")
    finally:
        session.close()


def main():
    parser = argparse.ArgumentParser(description="Create tables and optionally seed data")
    parser.add_argument("--seed", help="JSON export with lots and vehicles")
    args = parser.parse_args()

    print("🗄️  Campus Parking DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    db = Database.from_settings(settings)
    try:
        db.ping()
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\n📋 Creating tables...")
    db.create_tables()
    tables = inspect(db.engine).get_table_names()
    print(f"📊 Tables in database ({len(tables)} total):")
    for t in sorted(tables):
        print(f"   ✓ {t}")

    if args.seed:
        print(f"\n🌱 Seeding from {args.seed}...")
        seed(db, args.seed)

    print("\n🎉 Database ready! You can now start the backend:")
    print("   uvicorn parking_app.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
