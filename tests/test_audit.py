from datetime import datetime, timedelta

from app import audit
from app.constants.enums import AuditAction
from app.database import transaction
from app.db.models.audit_log import AuditLog


def test_noop_update_records_identical_snapshots(client, db, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner, name="Same Name")

    response = client.put(f"/api/v1/stores/{store.id}", json={"name": "Same Name"}, headers=auth(owner))

    assert response.status_code == 200
    log = db.query(AuditLog).filter(AuditLog.action == AuditAction.UPDATE.value).one()
    assert log.old_values == log.new_values


def test_audit_row_carries_request_metadata(client, db, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner)
    headers = {**auth(owner), "User-Agent": "admin-console/1.0"}

    client.put(f"/api/v1/stores/{store.id}/closure", json={"is_temporarily_closed": True}, headers=headers)

    log = db.query(AuditLog).one()
    assert log.action == AuditAction.CLOSURE_UPDATE.value
    assert log.user_agent == "admin-console/1.0"
    assert log.ip_address
    assert log.old_values["is_temporarily_closed"] is False
    assert log.new_values["is_temporarily_closed"] is True


def test_rolled_back_mutation_leaves_no_audit_row(db, factory):
    admin = factory.super_admin()
    store = factory.store(factory.store_owner())

    try:
        with transaction(db):
            store.name = "Renamed"
            db.flush()
            audit.record(db, admin, AuditAction.UPDATE, "Store", store.id, None, audit.snapshot(store))
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert db.query(AuditLog).count() == 0
    db.commit()
    assert db.query(AuditLog).count() == 0


def test_snapshot_is_json_safe(factory):
    store = factory.store(factory.store_owner())
    data = audit.snapshot(store)
    assert data["type"] == "GROCERY"
    assert isinstance(data["created_at"], str)
    assert audit.snapshot(None) is None


def _log(db, **kwargs):
    data = {"action": "UPDATE", "resource": "Store", "resource_id": "1", "timestamp": datetime.utcnow()}
    data.update(kwargs)
    entry = AuditLog(**data)
    db.add(entry)
    db.commit()
    return entry


def test_list_audit_logs_filters_and_paginates(client, db, factory, auth):
    admin = factory.super_admin()
    now = datetime.utcnow()
    _log(db, user_id=admin.id, resource="Store", timestamp=now - timedelta(minutes=3))
    newest = _log(db, user_id=admin.id, resource="Product", timestamp=now - timedelta(minutes=1))
    _log(db, user_id=admin.id, resource="Product", action="DELETE", timestamp=now - timedelta(minutes=2))

    everything = client.get("/api/v1/audit-logs/?limit=2", headers=auth(admin)).json()
    assert everything["pagination"] == {"total": 3, "page": 1, "limit": 2, "pages": 2}
    assert everything["logs"][0]["id"] == newest.id
    assert everything["logs"][0]["user"]["id"] == admin.id

    products = client.get("/api/v1/audit-logs/?resource=Product&action=DELETE", headers=auth(admin)).json()
    assert products["pagination"]["total"] == 1


def test_audit_statistics(client, db, factory, auth):
    admin = factory.super_admin()
    other = factory.super_admin()
    now = datetime.utcnow()
    _log(db, user_id=admin.id, action="CREATE", resource="Store", timestamp=now - timedelta(days=1))
    _log(db, user_id=admin.id, action="UPDATE", resource="Store", timestamp=now)
    _log(db, user_id=other.id, action="UPDATE", resource="Product", timestamp=now)
    _log(db, user_id=other.id, action="UPDATE", resource="Product", timestamp=now - timedelta(days=90))

    response = client.get("/api/v1/audit-logs/statistics", headers=auth(admin))

    assert response.status_code == 200
    body = response.json()
    assert body["action_counts"][0] == {"key": "UPDATE", "count": 2}
    assert {r["key"]: r["count"] for r in body["resource_counts"]} == {"Store": 2, "Product": 1}
    assert body["user_activity"][0]["user_id"] == admin.id
    assert body["user_activity"][0]["count"] == 2
    assert sum(d["count"] for d in body["daily_activity"]) == 3


def test_get_audit_log(client, db, factory, auth):
    admin = factory.super_admin()
    entry = _log(db, user_id=admin.id, old_values={"name": "a"}, new_values={"name": "b"})

    found = client.get(f"/api/v1/audit-logs/{entry.id}", headers=auth(admin))
    assert found.json()["new_values"] == {"name": "b"}

    assert client.get("/api/v1/audit-logs/9999", headers=auth(admin)).status_code == 404


def test_location_only_update_changes_audit_diff(client, db, factory, auth):
    owner = factory.store_owner()
    store = factory.store(owner, latitude=-6.7924)

    response = client.put(
        f"/api/v1/stores/{store.id}", json={"location": {"latitude": 1.0}}, headers=auth(owner)
    )

    assert response.status_code == 200
    log = db.query(AuditLog).filter(AuditLog.action == AuditAction.UPDATE.value).one()
    assert log.old_values != log.new_values
    assert log.old_values["location"]["latitude"] == -6.7924
    assert log.new_values["location"]["latitude"] == 1.0
