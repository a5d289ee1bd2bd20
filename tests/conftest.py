from datetime import date

import pytest

from care_scheduling import repository as repo
from care_scheduling.auth import Principal
from care_scheduling.database import InMemoryKeyValueDatabase
from care_scheduling.models import (
    Caregiver,
    Client,
    Role,
    Shift,
    ShiftStatus,
    ShiftType,
)
from care_scheduling.repository import Database

CLIENT_ID = "client-jansen"
OTHER_CLIENT_ID = "client-bakker"


@pytest.fixture
def db() -> Database:
    database: Database = InMemoryKeyValueDatabase()
    repo.save(database, Client(id=CLIENT_ID, name="Familie Jansen"))
    repo.save(database, Client(id=OTHER_CLIENT_ID, name="Familie Bakker"))
    repo.save(database, Caregiver(id="alice-id", name="Alice Ongwele", color="#3366FF"))
    repo.save(database, Caregiver(id="wei-id", name="Wei Yan", color="#22AA22"))
    repo.save(
        database,
        ShiftType(
            id="ochtend",
            client_id=CLIENT_ID,
            name="Ochtend",
            start_time="08:00",
            end_time="12:00",
            color="#FFAA00",
        ),
    )
    repo.save(
        database,
        ShiftType(
            id="nacht",
            client_id=CLIENT_ID,
            name="Nacht",
            start_time="22:00",
            end_time="06:00",
            color="#202060",
        ),
    )
    return database


@pytest.fixture
def client_principal() -> Principal:
    return Principal(id="user-jansen", role=Role.CLIENT, profile_id=CLIENT_ID)


@pytest.fixture
def alice() -> Principal:
    return Principal(id="user-alice", role=Role.CAREGIVER, profile_id="alice-id")


def add_shift(
    db: Database,
    shift_date: date,
    *,
    shift_type_id: str = "ochtend",
    caregiver_id: str | None = None,
    status: ShiftStatus | None = None,
    client_id: str = CLIENT_ID,
    **fields,
) -> Shift:
    shift_type = repo.get(db, ShiftType, shift_type_id)
    shift = Shift(
        client_id=client_id,
        shift_type_id=shift_type_id,
        date=shift_date,
        start_time=shift_type.start_time,
        end_time=shift_type.end_time,
        caregiver_id=caregiver_id,
        status=status
        or (ShiftStatus.FILLED if caregiver_id else ShiftStatus.UNFILLED),
        **fields,
    )
    inserted, _ = repo.insert_shifts(db, [shift])
    assert inserted == 1
    return shift
