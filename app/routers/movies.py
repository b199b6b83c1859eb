# ---------------------------------------------
# movies.py - 영화 목록 / 영화별 캐릭터 조회 엔드포인트
# ---------------------------------------------

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..cache import ResultCache, get_cache
from ..catalog import CatalogClient, get_catalog
from ..characters import CharacterPipeline, GenderFilter, resolve_sort
from ..comments import CommentStore, parse_movie_id
from ..db import get_db
from ..schemas import CharactersResponse, MoviesResponse
from ..summaries import FilmSummaryService

# - prefix: 이 라우터의 모든 엔드포인트 앞에 붙을 공통 경로
# - tags: Swagger UI 그룹핑 이름
router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=MoviesResponse)
def list_movies(
    db: Session = Depends(get_db),
    catalog: CatalogClient = Depends(get_catalog),
    cache: ResultCache = Depends(get_cache),
):
    """
    개봉일 내림차순 영화 목록을 댓글 수와 함께 반환합니다.
    결과는 redis에 1시간 캐시되며, 캐시 hit 시 카탈로그/DB를 조회하지 않습니다.
    """
    service = FilmSummaryService(catalog=catalog, comments=CommentStore(db), cache=cache)
    return MoviesResponse(
        message="movies retrieved successfully",
        data=service.get_film_summaries(),
    )


@router.get("/{movie_id}/characters", response_model=CharactersResponse)
def list_characters(
    movie_id: str,
    sort: Optional[str] = Query(None, description="name | gender | height"),
    asc: Optional[str] = Query(None, description="true | false (없으면 정렬하지 않음)"),
    gender: Optional[str] = Query(None, alias="filter", description="m | f"),
    catalog: CatalogClient = Depends(get_catalog),
):
    """
    영화(episode_id)의 캐릭터 목록과 메타데이터(인원 수, 키 합계)를 반환합니다.

    - Query Params:
      - sort: 정렬 필드. 알 수 없는 값은 무시
      - asc: 정렬 방향. "true"/"false"만 인정, 없으면 sort가 있어도 정렬 안 함
      - filter: "m"(male) / "f"(female). 그 외 값은 필터 없음
    - 존재하지 않는 영화 ID는 캐릭터 0명으로 응답
    """
    film_id = parse_movie_id(movie_id)
    sort_field, ascending = resolve_sort(sort, asc)

    view = CharacterPipeline(catalog).get_character_view(
        film_id,
        sort_field=sort_field,
        sort_ascending=ascending,
        gender_filter=GenderFilter.from_query(gender),
    )
    return CharactersResponse(
        message="characters retrieved successfully",
        data=view.to_data(),
    )


# -----------------------------
# 예시 요청
# -----------------------------
#  - GET /movies
#  - GET /movies/4/characters
#  - GET /movies/4/characters?sort=height&asc=false
#  - GET /movies/4/characters?sort=name&asc=true&filter=f
