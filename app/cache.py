# ------------------------------------------------------------
# cache.py - redis 기반 결과 캐시 (영화 요약 목록 1건만 저장)
# ------------------------------------------------------------

import os
from typing import Optional

import redis
from dotenv import load_dotenv
from loguru import logger

from .errors import StoreFailure

load_dotenv()

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")


class ResultCache:
    """
    bytes 값을 TTL과 함께 저장하는 얇은 래퍼.
    redis 오류는 모두 StoreFailure로 변환됩니다.
    """

    def __init__(self, client):
        self.client = client

    def get(self, key: str) -> Optional[bytes]:
        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            raise StoreFailure(f"cache read failed for '{key}': {e}") from e
        logger.debug(f"[Cache] {'hit' if value is not None else 'miss'} for '{key}'")
        return value

    def set(self, key: str, value: bytes, ttl: int) -> None:
        try:
            self.client.set(key, value, ex=ttl)
        except redis.RedisError as e:
            raise StoreFailure(f"cache write failed for '{key}': {e}") from e
        logger.debug(f"[Cache] stored '{key}' ({len(value)} bytes, ttl={ttl}s)")


# from_url은 실제 명령 실행 전까지 연결하지 않음. 클라이언트 내부 커넥션 풀은 스레드 안전
_cache = ResultCache(redis.Redis.from_url(REDIS_URL))


def get_cache() -> ResultCache:
    """FastAPI 의존성: 공유 ResultCache 반환"""
    return _cache
