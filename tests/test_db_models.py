from datetime import datetime

from sqlalchemy import DateTime

from therapy_common.db_models import Session as SessionEntity
from therapy_common.db_models import SessionStatus


def test_date_column_stores_naive_timestamps():
    column = SessionEntity.__table__.c.date

    assert isinstance(column.type, DateTime)
    assert column.type.timezone is False
    assert column.nullable is False


def test_naive_date_round_trips(make_session, db_session):
    created = make_session(date=datetime(2024, 3, 4, 16, 45))
    db_session.expire_all()

    loaded = db_session.get(SessionEntity, created.id)

    assert loaded.date == datetime(2024, 3, 4, 16, 45)
    assert loaded.status == SessionStatus.SCHEDULED


def test_status_is_persisted_by_value(make_session, db_session):
    created = make_session(status=SessionStatus.COMPLETED)

    raw = db_session.connection().exec_driver_sql(
        "SELECT status FROM sessions WHERE id = ?", (created.id,)
    ).scalar_one()

    assert raw == "Completed"
