import pytest
from sqlalchemy.exc import IntegrityError

from errors import DuplicateIdentity
from models import Course, UserCourse
from security import ADMIN, USER, signup
from store import CredentialStore, CourseStore, PurchaseLedger
from helpers import PASSWORD, course_details
from validation import parse_course_details, sanitize_course_details


def make_course(db):
    return CourseStore(db).insert(parse_course_details(sanitize_course_details(course_details())))


@pytest.mark.parametrize("role", [ADMIN, USER])
def test_second_insert_of_username_is_duplicate(db, role):
    store = CredentialStore(db, role)
    first = store.insert("alice1", "hash")
    with pytest.raises(DuplicateIdentity):
        store.insert("alice1", "other-hash")
    assert store.find_by_username("alice1").id == first.id
    assert store.find_by_username("alice1").hashed_password == "hash"


def test_session_usable_after_duplicate_insert(db):
    store = CredentialStore(db, USER)
    store.insert("alice1", "hash")
    with pytest.raises(DuplicateIdentity):
        store.insert("alice1", "hash")
    assert store.insert("bobby1", "hash").id


def test_record_returns_false_when_pair_already_stored(db, config, monkeypatch):
    user_id = signup(db, USER, "alice1", PASSWORD, config)
    course = make_course(db)
    ledger = PurchaseLedger(db)

    db.add(UserCourse(user_id=user_id, course_id=course.id))
    db.commit()
    monkeypatch.setattr(PurchaseLedger, "exists", lambda self, user_id, course_id: False)

    assert ledger.record(user_id, course.id) is False
    assert db.query(UserCourse).count() == 1


def test_record_and_list(db, config):
    user_id = signup(db, USER, "alice1", PASSWORD, config)
    course = make_course(db)
    ledger = PurchaseLedger(db)
    assert ledger.record(user_id, course.id) is True
    assert ledger.record(user_id, course.id) is False
    assert ledger.exists(user_id, course.id)
    assert [c.id for c in ledger.courses_of(user_id)] == [course.id]


def test_database_rejects_duplicate_pair(db, config):
    user_id = signup(db, USER, "alice1", PASSWORD, config)
    course = make_course(db)
    db.add(UserCourse(user_id=user_id, course_id=course.id))
    db.commit()
    db.add(UserCourse(user_id=user_id, course_id=course.id))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert isinstance(db.get(Course, course.id), Course)
