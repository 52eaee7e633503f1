from wsgiref.simple_server import make_server
import json
import logging
import sys
import re

# SQLAlchemy 및 의존성 임포트
from src.config import get_settings
from src.repositories.sqlalchemy.sqlalchemy_project_repository import SqlalchemyProjectRepository
from src.repositories.sqlalchemy.sqlalchemy_user_repository import SqlalchemyUserRepository
from src.services.user_service import UserService
from src.services.project_service import ProjectService
from src.services.requests import (
    bind_create_user_request, bind_update_user_request, bind_project_name
)
from src.services.exceptions import *
from src.utils.log_config import configure_logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        return json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, UnicodeDecodeError):
        raise BadRequestError("Invalid or missing JSON body.")

ID_PATTERN = re.compile(r"[+-]?[0-9]+")
MIN_ID, MAX_ID = -2 ** 63, 2 ** 63 - 1

def parse_id(raw, error_cls):
    """
    경로 파라미터를 정수 id로 변환합니다.
    ASCII 10진수 표기만 허용하고 부호 있는 64비트 범위를 벗어나면 error_cls를 발생시킵니다.
    """
    if not isinstance(raw, str) or not ID_PATTERN.fullmatch(raw):
        raise error_cls()
    value = int(raw)
    if not MIN_ID <= value <= MAX_ID:
        raise error_cls()
    return value

def handle_exception(e):
    error_map = {
        BadRequestError: "400 Bad Request",
        ValidationFailedError: "400 Bad Request",
        NotNullViolationError: "400 Bad Request",
        NotFoundError: "404 Not Found",
        UniqueConstraintViolationError: "409 Conflict",
        UnexpectedError: "500 Internal Server Error",
    }
    if not isinstance(e, ServiceError):
        logger.exception("Unhandled error: %r", e)
        e = UnexpectedError(e)

    status = next(
        (s for cls, s in error_map.items() if isinstance(e, cls)),
        "500 Internal Server Error",
    )
    return status, json.dumps({"code": e.code, "error": str(e)})

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def make_application(session_factory):
    """
    요청마다 세션 하나를 열고 리포지토리/서비스를 구성하는 WSGI 애플리케이션을 생성합니다.

    Args:
        session_factory: 호출 시 새 SQLAlchemy 세션을 반환하는 팩토리.
    """
    def application(environ, start_response):
        db_session = session_factory()
        try:
            # 1. 의존성 생성 (Repositories -> Services)
            user_repo = SqlalchemyUserRepository(db_session)
            project_repo = SqlalchemyProjectRepository(db_session)

            user_service = UserService(user_repo, project_repo)
            project_service = ProjectService(project_repo, user_repo)

            # 2. 생성된 서비스 객체들을 environ을 통해 핸들러에 전달
            environ['services'] = {
                'user': user_service,
                'project': project_service,
            }

            # 3. 라우팅 및 핸들러 실행
            path = environ.get("PATH_INFO", "")
            method = environ.get("REQUEST_METHOD", "")

            handler, path_args = None, []
            for route_method, pattern, route_handler in ROUTES:
                if method == route_method and (match := re.match(pattern, path)):
                    handler, path_args = route_handler, match.groups()
                    break

            if handler:
                status, response_body = handler(environ, *path_args)
            else:
                status, response_body = '404 Not Found', json.dumps({'code': 'not_found', 'error': 'Not Found'})

        except Exception as e:
            status, response_body = handle_exception(e)
        finally:
            db_session.close()

        start_response(status, [("Content-Type", "application/json")])
        return [response_body.encode("utf-8")]

    return application

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

def list_users_handler(environ, *args):
    users = environ['services']['user'].list_users()
    return '200 OK', json.dumps(users)

def get_user_handler(environ, user_id):
    user = environ['services']['user'].get_user(parse_id(user_id, UserIdError))
    return '200 OK', json.dumps(user)

def create_user_handler(environ, *args):
    request = bind_create_user_request(get_request_data(environ))
    user = environ['services']['user'].create_user(request)
    return '200 OK', json.dumps(user)

def update_user_handler(environ, user_id):
    user_id = parse_id(user_id, UserIdError)
    request = bind_update_user_request(get_request_data(environ))
    user = environ['services']['user'].update_user(user_id, request)
    return '200 OK', json.dumps(user)

def delete_user_handler(environ, user_id):
    environ['services']['user'].delete_user(parse_id(user_id, UserIdError))
    return '200 OK', ''

def get_user_projects_handler(environ, user_id):
    # 사용자 경로지만 잘못된 id는 프로젝트 id 오류로 응답한다
    projects = environ['services']['user'].get_user_projects(parse_id(user_id, ProjectIdError))
    return '200 OK', json.dumps(projects)

def list_projects_handler(environ, *args):
    projects = environ['services']['project'].list_projects()
    return '200 OK', json.dumps(projects)

def create_project_handler(environ, *args):
    name = bind_project_name(get_request_data(environ))
    project = environ['services']['project'].create_project(name)
    return '200 OK', json.dumps(project)

def get_project_handler(environ, project_id):
    project = environ['services']['project'].get_project(parse_id(project_id, ProjectIdError))
    return '200 OK', json.dumps(project)

def list_project_users_handler(environ, project_id):
    users = environ['services']['project'].list_project_users(parse_id(project_id, ProjectIdError))
    return '200 OK', json.dumps(users)

def add_project_user_handler(environ, project_id, user_id):
    environ['services']['project'].add_project_user(
        parse_id(project_id, ProjectIdError), parse_id(user_id, UserIdError)
    )
    return '200 OK', ''

def remove_project_user_handler(environ, project_id, user_id):
    environ['services']['project'].remove_project_user(
        parse_id(project_id, ProjectIdError), parse_id(user_id, UserIdError)
    )
    return '200 OK', ''

# 경로 파라미터는 문자열 그대로 받고, 정수 변환은 핸들러에서 한다.
ROUTES = [
    ('GET', r'^/users$', list_users_handler),
    ('POST', r'^/users$', create_user_handler),
    ('GET', r'^/users/([^/]+)$', get_user_handler),
    ('PUT', r'^/users/([^/]+)$', update_user_handler),
    ('DELETE', r'^/users/([^/]+)$', delete_user_handler),
    ('GET', r'^/users/([^/]+)/projects$', get_user_projects_handler),
    ('GET', r'^/projects$', list_projects_handler),
    ('POST', r'^/projects$', create_project_handler),
    ('GET', r'^/projects/([^/]+)$', get_project_handler),
    ('GET', r'^/projects/([^/]+)/users$', list_project_users_handler),
    ('PUT', r'^/projects/([^/]+)/users/([^/]+)$', add_project_user_handler),
    ('DELETE', r'^/projects/([^/]+)/users/([^/]+)$', remove_project_user_handler),
]

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

def main():
    from src.database.database import SessionLocal

    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        with make_server(settings.host, settings.port, make_application(SessionLocal)) as httpd:
            logger.info("Serving user admin API on port %d...", settings.port)
            httpd.serve_forever()
    except Exception as e:
        logger.error("Error starting server: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
