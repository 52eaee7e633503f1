# src/services/requests.py
from dataclasses import dataclass
from typing import Any, Dict

from src.database.models import RuleLevel
from src.services.exceptions import BadRequestError


@dataclass
class UserRequest:
    """사용자 생성/수정 요청 본문을 바인딩한 결과입니다."""
    name: str = ""
    email: str = ""
    enable_email: bool = False
    phone: str = ""
    enable_phone: bool = False
    universal: bool = False
    rule_level: int = int(RuleLevel.LOW)


# JSON 필드 이름 -> (속성 이름, 허용 타입)
USER_FIELDS = {
    "name": ("name", str),
    "email": ("email", str),
    "enableEmail": ("enable_email", bool),
    "phone": ("phone", str),
    "enablePhone": ("enable_phone", bool),
    "universal": ("universal", bool),
    "ruleLevel": ("rule_level", int),
}


def _check_type(value: Any, expected: type) -> bool:
    # bool은 int의 하위 타입이므로 ruleLevel에 true/false가 들어오는 것을 막는다
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def bind_user_request(data: Any, **defaults) -> UserRequest:
    """
    디코딩된 JSON 본문을 UserRequest로 바인딩합니다.
    본문에 없는(또는 null인) 필드는 defaults, 그마저 없으면 zero value를 사용하고,
    알 수 없는 필드는 무시합니다.

    Args:
        data: 디코딩된 요청 본문.
        **defaults: UserRequest 속성 이름별 기본값.

    Returns:
        바인딩된 UserRequest.

    Raises:
        BadRequestError: 본문이 객체가 아니거나 필드 타입이 맞지 않을 때.
    """
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object.")

    values: Dict[str, Any] = dict(defaults)
    for json_name, (attr, expected) in USER_FIELDS.items():
        value = data.get(json_name)
        if value is None:
            continue
        if not _check_type(value, expected):
            raise BadRequestError(f"Field '{json_name}' has an invalid type.")
        values[attr] = value
    return UserRequest(**values)


def bind_create_user_request(data: Any) -> UserRequest:
    """생성 요청: 본문에 없는 필드는 enableEmail/enablePhone=true, universal=false, ruleLevel=LOW."""
    return bind_user_request(
        data,
        enable_email=True,
        enable_phone=True,
        universal=False,
        rule_level=int(RuleLevel.LOW),
    )


def bind_update_user_request(data: Any) -> UserRequest:
    """수정 요청: 전체 교체이므로 본문에 없는 필드는 zero value로 초기화됩니다."""
    return bind_user_request(data)


def bind_project_name(data: Any) -> str:
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object.")
    name = data.get("name", "")
    if name is None:
        name = ""
    if not isinstance(name, str):
        raise BadRequestError("Field 'name' has an invalid type.")
    return name
