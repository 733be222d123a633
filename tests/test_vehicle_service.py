# tests/test_vehicle_service.py
"""Unit tests for the vehicle delete (detach) policy."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from types import SimpleNamespace
from unittest.mock import MagicMock

from app.models.infraction import Infraction
from app.models.intervention import Intervention
from app.models.vehicle_inspection import VehicleInspection
from app.models.vehicle_insurance import VehicleInsurance
from app.services.vehicle_service import DETACHED_ON_DELETE, delete_vehicle, detach_vehicle


class TestVehicleService:
    def test_detaches_the_four_dependent_tables(self):
        assert set(DETACHED_ON_DELETE) == {VehicleInspection, VehicleInsurance, Infraction, Intervention}

    def test_detach_nulls_vehicle_id(self):
        db = MagicMock()
        db.query.return_value.filter.return_value.update.return_value = 2
        counts = detach_vehicle(db, "veh-1")

        assert db.query.call_count == 4
        queried = [c.args[0] for c in db.query.call_args_list]
        assert queried == list(DETACHED_ON_DELETE)
        for call in db.query.return_value.filter.return_value.update.call_args_list:
            values = call.args[0]
            assert list(values.values()) == [None]
            assert call.kwargs == {"synchronize_session": False}
        assert counts == {
            "vehicle_inspections": 2, "vehicle_insurances": 2, "infractions": 2, "interventions": 2,
        }

    def test_delete_detaches_before_deleting(self):
        db = MagicMock()
        vehicle = SimpleNamespace(id="veh-1", license_plate="1-A-1")
        delete_vehicle(db, vehicle)

        names = [c[0] for c in db.mock_calls if c[0] in ("query", "delete", "commit")]
        assert names[:4] == ["query"] * 4
        assert names[4:] == ["delete", "commit"]
        db.delete.assert_called_once_with(vehicle)
