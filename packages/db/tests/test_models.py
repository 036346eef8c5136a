# This project was developed with assistance from AI tools.
"""Model metadata tests (no database required)."""

from portal_db import Application, Base, LOSPushStatus, Profile


def test_tables_registered():
    assert {"applications", "profiles"} <= set(Base.metadata.tables)


def test_push_columns_present_and_nullable():
    columns = Application.__table__.columns
    assert columns["zapier_push_status"].nullable is True
    assert columns["zapier_pushed_at"].nullable is True


def test_owner_columns_reference_profiles():
    for name in ("user_id", "new_user_id"):
        (fk,) = Application.__table__.columns[name].foreign_keys
        assert fk.column.table is Profile.__table__


def test_push_status_values():
    assert {s.value for s in LOSPushStatus} == {"sent", "failed"}


def test_repr():
    assert "app-1" in repr(Application(id="app-1"))
    assert "Jane" in repr(Profile(id="u1", full_name="Jane Doe"))
