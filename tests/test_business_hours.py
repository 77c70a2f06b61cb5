from app.constants.enums import AuditAction
from app.db.models.audit_log import AuditLog
from app.db.models.store import BusinessHours


def schedule(*days, open_time="09:00", close_time="18:00"):
    return [{"day_of_week": d, "open_time": open_time, "close_time": close_time} for d in days]


def test_replace_schedule_drops_previous_rows(client, db, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)
    factory.business_hours(store, 0)
    factory.business_hours(store, 6)

    response = client.post(
        "/api/v1/stores/business-hours",
        json={"store_id": store.id, "schedule": schedule(5, 1, 3)},
        headers=auth(owner),
    )

    assert response.status_code == 200
    assert [h["day_of_week"] for h in response.json()] == [1, 3, 5]
    assert db.query(BusinessHours).filter(BusinessHours.store_id == store.id).count() == 3

    current = client.get(f"/api/v1/stores/business-hours?store_id={store.id}", headers=auth(owner))
    assert [h["day_of_week"] for h in current.json()] == [1, 3, 5]
    assert all(h["open_time"] == "09:00" for h in current.json())


def test_replace_schedule_is_audited_with_both_sets(client, db, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)
    factory.business_hours(store, 2)

    client.post(
        "/api/v1/stores/business-hours",
        json={"store_id": store.id, "schedule": schedule(4)},
        headers=auth(owner),
    )

    log = db.query(AuditLog).filter(AuditLog.action == AuditAction.REPLACE_SCHEDULE.value).one()
    assert log.resource == "BusinessHours"
    assert log.resource_id == str(store.id)
    assert [row["day_of_week"] for row in log.old_values] == [2]
    assert [row["day_of_week"] for row in log.new_values] == [4]


def test_duplicate_days_are_rejected(client, db, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)
    factory.business_hours(store, 1)

    response = client.post(
        "/api/v1/stores/business-hours",
        json={"store_id": store.id, "schedule": schedule(1, 1)},
        headers=auth(owner),
    )

    assert response.status_code == 400
    assert db.query(BusinessHours).count() == 1


def test_bad_time_and_day_are_rejected(client, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)

    bad_time = client.post(
        "/api/v1/stores/business-hours",
        json={"store_id": store.id, "schedule": schedule(1, open_time="25:00")},
        headers=auth(owner),
    )
    assert bad_time.status_code == 400

    bad_day = client.post(
        "/api/v1/stores/business-hours",
        json={"store_id": store.id, "schedule": schedule(7)},
        headers=auth(owner),
    )
    assert bad_day.status_code == 400


def test_schedule_of_foreign_store_is_forbidden(client, factory, auth):
    owner = factory.store_owner()
    foreign = factory.store(factory.store_owner())

    response = client.post(
        "/api/v1/stores/business-hours",
        json={"store_id": foreign.id, "schedule": schedule(1)},
        headers=auth(owner),
    )
    assert response.status_code == 403
    assert client.get(
        f"/api/v1/stores/business-hours?store_id={foreign.id}", headers=auth(owner)
    ).status_code == 403
