# ------------------------------------------------------------
# characters.py - 영화별 캐릭터 조회 + 정렬/필터 + 키 합계 통계
# ------------------------------------------------------------

from enum import Enum
from typing import List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel

from .schemas import Character, CharacterData, CharacterMetadata, Film
from .units import FeetInches, format_cm, format_feet_inches, to_feet_inches


# ------------------------------
# 쿼리 파라미터용 닫힌 열거형
# ------------------------------
# - 알 수 없는 값은 모두 NONE으로 취급 (정렬/필터 "효과 없음")
class SortField(str, Enum):
    NONE = "none"
    NAME = "name"
    GENDER = "gender"
    HEIGHT = "height"

    @classmethod
    def from_query(cls, value: Optional[str]) -> "SortField":
        # ?sort=name|gender|height
        for member in (cls.NAME, cls.GENDER, cls.HEIGHT):
            if value == member.value:
                return member
        return cls.NONE


class GenderFilter(str, Enum):
    NONE = "none"
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def from_query(cls, value: Optional[str]) -> "GenderFilter":
        # ?filter=m|f
        if value == "m":
            return cls.MALE
        if value == "f":
            return cls.FEMALE
        return cls.NONE


def parse_sort_direction(value: Optional[str]) -> Optional[bool]:
    # ?asc=true|false 만 인정, 그 외(누락 포함)는 None
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def resolve_sort(sort: Optional[str], asc: Optional[str]) -> Tuple[SortField, bool]:
    """
    원시 쿼리 문자열 (sort, asc)를 (SortField, 오름차순 여부)로 변환합니다.
    방향(asc)이 명시되지 않으면 정렬 필드가 있어도 정렬하지 않습니다.
    """
    field = SortField.from_query(sort)
    ascending = parse_sort_direction(asc)
    if ascending is None:
        return SortField.NONE, True
    return field, ascending


# ------------------------------
# 파이프라인 결과 타입
# ------------------------------
class CharacterStats(BaseModel):
    count: int
    total_height_cm: int
    total_height_ft: FeetInches


class CharacterView(BaseModel):
    characters: List[Character]
    stats: CharacterStats

    def to_data(self) -> CharacterData:
        # HTTP 응답의 data 부분으로 변환 ("322cm", "10ft and 6.77inches")
        return CharacterData(
            metadata=CharacterMetadata(
                total_number=self.stats.count,
                total_height_cm=format_cm(self.stats.total_height_cm),
                total_height_ft=format_feet_inches(self.stats.total_height_ft),
            ),
            characters=self.characters,
        )


def parse_height(raw: str) -> int:
    """키 문자열을 정수 cm로 변환. "unknown" 등 숫자가 아니면 0 (원문은 보존)."""
    if raw and raw.isascii() and raw.isdigit():
        return int(raw)
    return 0


def sort_films_by_release(films: List[Film]) -> List[Film]:
    # 개봉일 내림차순. sorted()는 안정 정렬이므로 같은 날짜는 카탈로그 순서 유지
    return sorted(films, key=lambda f: f.release_date, reverse=True)


def sort_characters(characters: List[Character], field: SortField, ascending: bool) -> List[Character]:
    if field is SortField.NONE:
        return list(characters)

    if field is SortField.NAME:
        key = lambda c: c.name  # noqa: E731
    elif field is SortField.GENDER:
        key = lambda c: c.gender  # noqa: E731
    else:
        key = lambda c: parse_height(c.height)  # noqa: E731

    # reverse=True도 동일 키 원소의 원래 순서를 유지함
    return sorted(characters, key=key, reverse=not ascending)


def filter_characters(characters: List[Character], gender: GenderFilter) -> List[Character]:
    if gender is GenderFilter.NONE:
        return list(characters)
    # 대소문자 구분, 정확히 "male" / "female" 일치만 통과
    return [c for c in characters if c.gender == gender.value]


def compute_stats(characters: List[Character]) -> CharacterStats:
    total_cm = sum(parse_height(c.height) for c in characters)
    return CharacterStats(
        count=len(characters),
        total_height_cm=total_cm,
        total_height_ft=to_feet_inches(total_cm),
    )


class CharacterPipeline:
    """
    영화 1편의 캐릭터 목록을 만들어 통계와 함께 반환합니다.

    처리 순서:
    1) 카탈로그에서 전체 영화 조회 후 개봉일 내림차순 정렬
    2) episode_id == film_id 인 영화 탐색 (없으면 캐릭터 0명으로 진행)
    3) 캐릭터 URL을 목록 순서대로 하나씩 조회
       - 동기/순차 호출, 하나라도 실패하면 전체 실패 (부분 결과 없음)
    4) 정렬 -> 성별 필터 -> 필터 결과 기준 통계 계산
    """

    def __init__(self, catalog):
        self.catalog = catalog

    def get_character_view(
        self,
        film_id: int,
        sort_field: SortField = SortField.NONE,
        sort_ascending: bool = True,
        gender_filter: GenderFilter = GenderFilter.NONE,
    ) -> CharacterView:
        films = sort_films_by_release(self.catalog.fetch_films())

        character_urls: List[str] = []
        for film in films:
            if film.episode_id == film_id:
                character_urls = film.characters
                break
        else:
            logger.info(f"[Characters] Film {film_id} not in catalog; returning empty view")

        characters = [self.catalog.fetch_character(url) for url in character_urls]

        characters = sort_characters(characters, sort_field, sort_ascending)
        characters = filter_characters(characters, gender_filter)
        stats = compute_stats(characters)

        logger.info(
            f"[Characters] Film {film_id}: {stats.count}/{len(character_urls)} characters "
            f"(sort={sort_field.value}, asc={sort_ascending}, filter={gender_filter.value})"
        )
        return CharacterView(characters=characters, stats=stats)
