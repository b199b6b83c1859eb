# ------------------------------------------------------------
# errors.py - 도메인 예외 정의 및 FastAPI 예외 핸들러
# ------------------------------------------------------------

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


class AggregatorError(Exception):
    """
    이 서비스에서 발생하는 모든 예외의 베이스 클래스.

    - message: 클라이언트에 그대로 노출되는 설명 문구
    - status_code: 에러 봉투(envelope)와 함께 내려갈 HTTP 상태코드
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamUnavailable(AggregatorError):
    # 카탈로그(SWAPI)에 도달하지 못함: 네트워크 오류, 타임아웃, 2xx 이외의 응답
    status_code = 502


class UpstreamMalformed(AggregatorError):
    # 응답 본문이 JSON이 아니거나 Film/Character 형태와 맞지 않음
    status_code = 502


class InvalidInput(AggregatorError):
    # 숫자가 아닌 영화 ID, 500자를 넘는 댓글 등 요청 자체의 문제
    status_code = 400


class StoreFailure(AggregatorError):
    # 댓글 저장소(SQLAlchemy) 또는 결과 캐시(redis) 연산 실패
    status_code = 500


def error_body(message: str) -> dict:
    return {"status": "error", "message": message}


async def handle_aggregator_error(request: Request, exc: AggregatorError) -> JSONResponse:
    # 재시도 없이 요청 단위로 실패를 그대로 돌려줌 (부분 응답 없음)
    logger.warning(
        f"[API] {request.method} {request.url.path} failed with "
        f"{type(exc).__name__}: {exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # FastAPI 기본 422 대신 InvalidInput과 같은 봉투로 응답
    # 예: 댓글 바디에 "comment" 문자열이 없음
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"invalid request: {location} {first.get('msg', '')}".strip()
    return await handle_aggregator_error(request, InvalidInput(message))


def register_error_handlers(app: FastAPI) -> None:
    """앱에 도메인 예외 핸들러를 등록합니다. (하위 클래스 모두 이 핸들러로 처리)"""
    app.add_exception_handler(AggregatorError, handle_aggregator_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
