# services.py
import enum
import logging
import re
from typing import Any, List, Mapping

from sqlalchemy.orm import Session

from errors import NotFound, ValidationError
from models import Course
from security import Principal, require_admin, require_user
from store import CourseStore, PurchaseLedger
from validation import are_valid_course_details, parse_course_details, sanitize_course_details

logger = logging.getLogger(__name__)

# largest id a 64-bit integer column holds
MAX_ID = 2 ** 63 - 1
_ID_RE = re.compile(r"^(0|[1-9][0-9]*)\Z", re.ASCII)


class PurchaseOutcome(str, enum.Enum):
    PURCHASED = "purchased"
    ALREADY_PURCHASED = "already_purchased"


def _clean_details(details: Mapping[str, Any]) -> dict:
    sanitized = sanitize_course_details(details)
    if not are_valid_course_details(sanitized):
        raise ValidationError("Invalid course details")
    return parse_course_details(sanitized)


def _course_id(course_id) -> int:
    if isinstance(course_id, str) and _ID_RE.match(course_id):
        course_id = int(course_id)
    if isinstance(course_id, bool) or not isinstance(course_id, int) or not 0 <= course_id <= MAX_ID:
        raise NotFound("Course not found")
    return course_id


def create_course(db: Session, principal: Principal, details: Mapping[str, Any]) -> Course:
    require_admin(principal)
    course = CourseStore(db).insert(_clean_details(details))
    logger.info("Admin %s created course %s", principal.username, course.id)
    return course


def update_course(db: Session, principal: Principal, course_id, details: Mapping[str, Any]) -> Course:
    """Replace every mutable field of an existing course"""
    require_admin(principal)
    store = CourseStore(db)
    course = store.find(_course_id(course_id))
    if not course:
        raise NotFound("Course not found")
    course = store.update(course, _clean_details(details))
    logger.info("Admin %s updated course %s", principal.username, course.id)
    return course


def get_course_for_admin(db: Session, principal: Principal, course_id) -> Course:
    require_admin(principal)
    course = CourseStore(db).find(_course_id(course_id))
    if not course:
        raise NotFound("Course not found")
    return course


def get_course_for_user(db: Session, principal: Principal, course_id) -> Course:
    require_user(principal)
    course = CourseStore(db).find(_course_id(course_id))
    if not course or not course.published:
        raise NotFound("Course not found")
    return course


def list_courses_for_admin(db: Session, principal: Principal) -> List[Course]:
    require_admin(principal)
    return CourseStore(db).list_all()


def list_courses_for_user(db: Session, principal: Principal) -> List[Course]:
    require_user(principal)
    return CourseStore(db).list_published()


def purchase(db: Session, principal: Principal, course_id) -> PurchaseOutcome:
    require_user(principal)
    course = CourseStore(db).find(_course_id(course_id))
    if not course or not course.published:
        raise NotFound("Course not found")
    if not PurchaseLedger(db).record(principal.id, course.id):
        logger.info("User %s already owns course %s", principal.username, course.id)
        return PurchaseOutcome.ALREADY_PURCHASED
    logger.info("User %s purchased course %s", principal.username, course.id)
    return PurchaseOutcome.PURCHASED


def list_purchased(db: Session, principal: Principal) -> List[Course]:
    require_user(principal)
    return PurchaseLedger(db).courses_of(principal.id)
