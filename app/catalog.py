# ------------------------------------------------------------
# catalog.py - 외부 카탈로그(SWAPI) HTTP 클라이언트
# ------------------------------------------------------------

import os
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ValidationError

from .errors import UpstreamMalformed, UpstreamUnavailable
from .schemas import Character, Film, FilmsPage

load_dotenv()

# 카탈로그 기본 주소와 요청당 타임아웃(초)
SWAPI_BASE_URL = os.getenv("SWAPI_BASE_URL", "https://swapi.dev/api")
SWAPI_TIMEOUT = float(os.getenv("SWAPI_TIMEOUT", "10"))
# 스레드풀의 동시 요청 수에 맞춘 호스트별 커넥션 풀 크기
SWAPI_POOL_SIZE = int(os.getenv("SWAPI_POOL_SIZE", "10"))


def build_session(pool_size: int = SWAPI_POOL_SIZE) -> requests.Session:
    """
    카탈로그 전용 requests.Session을 만듭니다.
    - 호스트별 커넥션 풀 크기를 명시한 HTTPAdapter를 http/https에 마운트
    - pool_block=True: 풀이 가득 차면 새 커넥션을 버리지 않고 반납을 기다림
    """
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, pool_block=True)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class CatalogClient:
    """
    SWAPI에서 영화/캐릭터 레코드를 가져와 pydantic 모델로 파싱합니다.

    - 재시도/캐싱/페이지네이션 없음: /films는 전체 목록을 한 번에 반환한다고 가정
    - TLS 인증서 검증은 requests 기본값(검증함)을 그대로 사용
    - 실패 분류:
        네트워크 오류, 타임아웃, 2xx 이외의 상태코드 -> UpstreamUnavailable
        JSON 파싱 실패, 필드 누락/타입 불일치      -> UpstreamMalformed
    """

    def __init__(
        self,
        base_url: str = SWAPI_BASE_URL,
        timeout: float = SWAPI_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or build_session()

    @property
    def films_url(self) -> str:
        return f"{self.base_url}/films/"

    def fetch_films(self) -> List[Film]:
        page = self._get_model(self.films_url, FilmsPage)
        logger.debug(f"[Catalog] Fetched {len(page.results)} films")
        return page.results

    def fetch_character(self, url: str) -> Character:
        return self._get_model(url, Character)

    def _get_model(self, url: str, model: type) -> BaseModel:
        payload = self._get_json(url)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise UpstreamMalformed(f"unexpected {model.__name__} payload from {url}: {e}") from e

    def _get_json(self, url: str):
        logger.debug(f"[Catalog] GET {url}")
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"catalog request to {url} failed: {e}") from e

        if resp.status_code >= 400:
            raise UpstreamUnavailable(f"catalog returned HTTP {resp.status_code} for {url}")

        try:
            return resp.json()
        except ValueError as e:
            # requests의 JSONDecodeError는 ValueError 하위 클래스
            raise UpstreamMalformed(f"catalog returned invalid JSON for {url}") from e


# 프로세스 전역 클라이언트 (요청마다 새로 만들지 않음)
# - 여러 요청 스레드가 같은 Session을 공유. 쿠키/헤더 등 Session 상태는 변경하지 않고 GET만 호출
# - 스레드 간 커넥션 재사용은 HTTPAdapter(urllib3 풀)가 담당
_catalog = CatalogClient()


def get_catalog() -> CatalogClient:
    """FastAPI 의존성: 공유 CatalogClient 반환 (테스트에서는 dependency_overrides로 교체)"""
    return _catalog
