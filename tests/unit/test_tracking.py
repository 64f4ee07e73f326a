"""
Unit tests for the tracking log
"""

import pytest
from schemas.tracking import TrackingEventCreate
from services.tracking import TrackingLog


@pytest.mark.asyncio
async def test_events_are_listed_in_order(db_session):
    log = TrackingLog(db_session)

    await log.append_event(TrackingEventCreate(tracking_id="TRK-1", status="created", message="Parcel booked"))
    await log.append_event(TrackingEventCreate(tracking_id="TRK-1", status="in_transit", updated_by="rider@example.com"))
    await log.append_event(TrackingEventCreate(tracking_id="TRK-2", status="created"))

    events = await log.list_events("TRK-1")

    assert [e.status for e in events] == ["created", "in_transit"]
    assert events[1].updated_by == "rider@example.com"


@pytest.mark.asyncio
async def test_parcel_reference_is_not_checked(db_session):
    log = TrackingLog(db_session)

    event_id = await log.append_event(
        TrackingEventCreate(tracking_id="TRK-9", parcel_id="no-such-parcel", status="created")
    )

    events = await log.list_events("TRK-9")
    assert events[0].id == event_id
    assert events[0].parcel_id == "no-such-parcel"
    assert events[0].timestamp is not None
