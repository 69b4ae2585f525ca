"""Unit tests for the lot repository (scan-in/out, counts, load simulation)."""

import random
from datetime import datetime, timedelta

from parking_app.models.lot import Lot
from parking_app.models.scan import Scan
from parking_app.services import lot_service

T0 = datetime(2025, 11, 11, 9, 0, 0)


def plates_in(doc):
    return [s["plateNumber"] for s in doc["scans"]]


class TestScanIn:
    def test_entry_adds_normalized_plate(self, session, lot_a):
        doc = lot_service.scan_in(session, "abc-123", "lot-a", now=T0)

        assert plates_in(doc) == ["ABC123"]
        assert doc["scanCount"] == 1
        assert doc["available"] == 99

    def test_repeat_entry_keeps_one_scan_with_latest_timestamp(self, session, lot_a):
        later = T0 + timedelta(minutes=5)
        lot_service.scan_in(session, "ABC123", "lot-a", now=T0)
        doc = lot_service.scan_in(session, "abc 123", "lot-a", now=later)

        assert plates_in(doc) == ["ABC123"]
        assert doc["scans"][0]["timestamp"] == later
        assert session.query(Scan).filter(Scan.plate_number == "ABC123").count() == 1

    def test_repeat_entry_moves_plate_to_back(self, session, lot_a):
        lot_service.scan_in(session, "AAA111", "lot-a", now=T0)
        lot_service.scan_in(session, "BBB222", "lot-a", now=T0)
        doc = lot_service.scan_in(session, "AAA111", "lot-a", now=T0 + timedelta(minutes=1))

        assert plates_in(doc) == ["BBB222", "AAA111"]

    def test_same_plate_in_two_lots_is_allowed(self, session, lot_a):
        session.add(Lot(lot_id="lot-b", title="Lot B", capacity=10, location="41.74,-74.08", allows={}))
        session.commit()

        lot_service.scan_in(session, "ABC123", "lot-a", now=T0)
        lot_service.scan_in(session, "ABC123", "lot-b", now=T0)

        assert session.query(Scan).filter(Scan.plate_number == "ABC123").count() == 2

    def test_unknown_lot_returns_none(self, session):
        assert lot_service.scan_in(session, "ABC123", "nope") is None
        assert session.query(Scan).count() == 0


class TestScanOut:
    def test_exit_removes_plate(self, session, lot_a):
        lot_service.scan_in(session, "ABC123", "lot-a", now=T0)
        lot_service.scan_in(session, "XYZ999", "lot-a", now=T0)

        doc = lot_service.scan_out(session, "abc-123", "lot-a")

        assert plates_in(doc) == ["XYZ999"]

    def test_exit_for_absent_plate_is_noop(self, session, lot_a):
        lot_service.scan_in(session, "XYZ999", "lot-a", now=T0)

        doc = lot_service.scan_out(session, "ABC123", "lot-a")

        assert plates_in(doc) == ["XYZ999"]

    def test_unknown_lot_returns_none(self, session):
        assert lot_service.scan_out(session, "ABC123", "nope") is None


class TestListing:
    def test_list_lots_counts_scans(self, session, lot_a):
        session.add(Lot(lot_id="lot-b", title="Lot B", capacity=2, location="41.74,-74.08", allows={}))
        session.commit()
        for plate in ("A1", "B2", "C3"):
            lot_service.scan_in(session, plate, "lot-b", now=T0)

        lots = {doc["lotID"]: doc for doc in lot_service.list_lots(session)}

        assert lots["lot-a"]["scanCount"] == 0
        assert lots["lot-a"]["available"] == 100
        assert lots["lot-b"]["scanCount"] == 3
        assert lots["lot-b"]["available"] == 0
        assert "scans" not in lots["lot-a"]

    def test_list_lots_with_scans(self, session, lot_a):
        lot_service.scan_in(session, "ABC123", "lot-a", now=T0)

        [doc] = lot_service.list_lots(session, include_scans=True)

        assert doc["scans"] == [{"plateNumber": "ABC123", "timestamp": T0}]

    def test_occupancy_tiers(self, session):
        session.add(Lot(lot_id="small", title="Small", capacity=10, location="41.74,-74.08", allows={}))
        session.commit()
        for i in range(8):
            lot_service.scan_in(session, f"P{i}", "small", now=T0)

        [row] = lot_service.list_lot_occupancy(session)

        assert row["lotID"] == "small"
        assert row["scannedCount"] == 8
        assert row["congestion"] == "High"


class TestLoadSimulation:
    def test_add_random_scans_adds_10_to_19(self, session, lot_a):
        added = lot_service.add_random_scans(session, "lot-a", rng=random.Random(7))

        assert 10 <= added < 20
        assert lot_service.scan_count(session, "lot-a") == added
        plates = [p for (p,) in session.query(Scan.plate_number).all()]
        assert len(set(plates)) == added
        assert all(len(p) == 7 and p.isalnum() and p == p.upper() for p in plates)

    def test_remove_front_scans_drops_oldest_twenty(self, session, lot_a):
        for i in range(25):
            lot_service.scan_in(session, f"CAR{i:02d}", "lot-a", now=T0)

        removed = lot_service.remove_front_scans(session, "lot-a")

        assert removed == 20
        remaining = [s.plate_number for s in session.query(Scan).order_by(Scan.id)]
        assert remaining == [f"CAR{i:02d}" for i in range(20, 25)]

    def test_remove_on_small_lot_removes_what_is_there(self, session, lot_a):
        lot_service.scan_in(session, "ONLY1", "lot-a", now=T0)

        assert lot_service.remove_front_scans(session, "lot-a") == 1
        assert lot_service.scan_count(session, "lot-a") == 0

    def test_unknown_lot(self, session):
        assert lot_service.add_random_scans(session, "nope") is None
        assert lot_service.remove_front_scans(session, "nope") is None
