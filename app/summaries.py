# ------------------------------------------------------------
# summaries.py - 영화 요약 목록(제목/오프닝/댓글 수) + 결과 캐시
# ------------------------------------------------------------

import json
from typing import List

from loguru import logger
from pydantic import ValidationError

from .characters import sort_films_by_release
from .errors import StoreFailure
from .schemas import MovieSummary

# 캐시 키/TTL은 고정값
MOVIES_CACHE_KEY = "get-movies"
MOVIES_CACHE_TTL = 3600


class FilmSummaryService:
    """
    GET /movies 응답 데이터를 만듭니다.

    - 캐시 hit: 저장된 목록을 그대로 반환 (카탈로그/DB 조회 생략)
    - 캐시 miss: 카탈로그 조회 -> 개봉일 내림차순 정렬 -> 영화별 댓글 수 집계 -> 캐시에 저장
    """

    def __init__(self, catalog, comments, cache):
        self.catalog = catalog
        self.comments = comments
        self.cache = cache

    def get_film_summaries(self) -> List[MovieSummary]:
        cached = self.cache.get(MOVIES_CACHE_KEY)
        if cached is not None:
            logger.info("[Movies] Serving film summaries from cache")
            return self._decode(cached)

        films = sort_films_by_release(self.catalog.fetch_films())
        summaries = [
            MovieSummary(
                name=film.title,
                opening_crawl=film.opening_crawl,
                comment_count=self.comments.count_by_film(film.episode_id),
            )
            for film in films
        ]

        self.cache.set(MOVIES_CACHE_KEY, self._encode(summaries), MOVIES_CACHE_TTL)
        logger.info(f"[Movies] Built {len(summaries)} film summaries and cached them")
        return summaries

    @staticmethod
    def _encode(summaries: List[MovieSummary]) -> bytes:
        return json.dumps([s.model_dump() for s in summaries]).encode("utf-8")

    @staticmethod
    def _decode(blob: bytes) -> List[MovieSummary]:
        try:
            return [MovieSummary.model_validate(item) for item in json.loads(blob)]
        except (ValueError, TypeError, ValidationError) as e:
            raise StoreFailure(f"cached value for '{MOVIES_CACHE_KEY}' is corrupt: {e}") from e
