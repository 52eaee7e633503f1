# src/services/validators.py
"""필드 단위 도메인 규칙 검증 함수들. 실패 시 ValidationFailedError를 발생시킵니다."""
import re

from src.database.models import RuleLevel
from src.services.exceptions import ValidationFailedError

MAX_USER_NAME_LEN = 32
MAX_PROJECT_NAME_LEN = 64

NAME_REGEX = re.compile(r"^[a-zA-Z0-9_.-]+$")
EMAIL_REGEX = re.compile(
    r"^[_a-zA-Z0-9+-]+(\.[_a-zA-Z0-9+-]+)*@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*(\.[a-zA-Z]{2,})$"
)
PHONE_REGEX = re.compile(r"^[0-9]{10,15}$")


def validate_user_name(name: str):
    if not name:
        raise ValidationFailedError("name", "must not be empty")
    if len(name) > MAX_USER_NAME_LEN:
        raise ValidationFailedError("name", f"must be at most {MAX_USER_NAME_LEN} characters")
    if not NAME_REGEX.match(name):
        raise ValidationFailedError("name", "may only contain letters, digits, '_', '.' and '-'")


def validate_user_email(email: str):
    # 이메일은 선택 항목
    if email and not EMAIL_REGEX.match(email):
        raise ValidationFailedError("email", "invalid email format")


def validate_user_phone(phone: str):
    if phone and not PHONE_REGEX.match(phone):
        raise ValidationFailedError("phone", "must be 10 to 15 digits")


def validate_rule_level(level: int):
    if level not in {int(member) for member in RuleLevel}:
        raise ValidationFailedError("ruleLevel", f"must be one of {[int(m) for m in RuleLevel]}")


def validate_user(request):
    """
    사용자 생성/수정 요청을 name -> email -> phone -> ruleLevel 순서로 검증합니다.
    첫 번째 실패에서 즉시 중단하며, 나머지 규칙은 평가하지 않습니다.

    Args:
        request: name, email, phone, rule_level 속성을 가진 요청 객체.

    Raises:
        ValidationFailedError: 규칙 하나라도 통과하지 못했을 때.
    """
    validate_user_name(request.name)
    validate_user_email(request.email)
    validate_user_phone(request.phone)
    validate_rule_level(request.rule_level)


def validate_project_name(name: str):
    if not name:
        raise ValidationFailedError("name", "must not be empty")
    if len(name) > MAX_PROJECT_NAME_LEN:
        raise ValidationFailedError("name", f"must be at most {MAX_PROJECT_NAME_LEN} characters")
    if not NAME_REGEX.match(name):
        raise ValidationFailedError("name", "may only contain letters, digits, '_', '.' and '-'")
