from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List

# ------------------------------------------------------------
# Film: 카탈로그(SWAPI) /films 응답의 영화 1건
#  - 아래 필드는 모두 필수. 누락되면 검증 실패 -> UpstreamMalformed
#  - 선언되지 않은 추가 필드는 무시(pydantic 기본 동작)
# ------------------------------------------------------------
class Film(BaseModel):
    title: str
    episode_id: int
    opening_crawl: str
    director: str
    producer: str
    release_date: str          # "1977-05-25" 형식, 문자열 비교로 정렬
    characters: List[str]      # 캐릭터 리소스 URL 목록 (불투명 참조)
    planets: List[str]
    starships: List[str]
    vehicles: List[str]
    species: List[str]
    created: str
    edited: str
    url: str


# ------------------------------------------------------------
# FilmsPage: /films 응답 봉투
#  - 카탈로그가 전체 목록을 한 번에 돌려준다고 가정하므로 next/previous는 사용하지 않음
# ------------------------------------------------------------
class FilmsPage(BaseModel):
    count: Optional[int] = None
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[Film]


# ------------------------------------------------------------
# Character: 카탈로그 /people/{n}/ 응답의 캐릭터 1건
#  - height는 "172", "unknown" 등 원문 문자열 그대로 보존
# ------------------------------------------------------------
class Character(BaseModel):
    name: str
    height: str
    mass: str
    hair_color: str
    skin_color: str
    eye_color: str
    birth_year: str
    gender: str


# ------------------------------------------------------------
# CharacterMetadata / CharacterData: /movies/{id}/characters 응답의 data 부분
# ------------------------------------------------------------
class CharacterMetadata(BaseModel):
    total_number: int
    total_height_cm: str       # 예: "322cm"
    total_height_ft: str       # 예: "10ft and 6.77inches"


class CharacterData(BaseModel):
    metadata: CharacterMetadata
    characters: List[Character]


# ------------------------------------------------------------
# MovieSummary: /movies 응답의 영화 요약 1건 (캐시에 저장되는 단위)
# ------------------------------------------------------------
class MovieSummary(BaseModel):
    name: str
    opening_crawl: str
    comment_count: int


# ------------------------------------------------------------
# CommentIn: 댓글 등록 시 요청 바디(JSON) 스키마
#  - 길이 제한(500자)은 라우터에서 InvalidInput으로 검사
# ------------------------------------------------------------
class CommentIn(BaseModel):
    comment: str


# ------------------------------------------------------------
# CommentOut: 클라이언트로 내보낼 "댓글" 데이터의 응답 스키마
# ------------------------------------------------------------
class CommentOut(BaseModel):
    comment: str
    ip_address: str
    created_at: datetime       # JSON에서는 ISO 8601 문자열로 직렬화

    class Config:
        # ORM 객체(예: SQLAlchemy 모델)로부터 필드 맵핑 허용
        from_attributes = True


# ------------------------------------------------------------
# 응답 봉투: {"status": "success", "message": ..., "data": ...}
# ------------------------------------------------------------
class MoviesResponse(BaseModel):
    status: str = "success"
    message: str
    data: List[MovieSummary]


class CharactersResponse(BaseModel):
    status: str = "success"
    message: str
    data: CharacterData


class CommentsResponse(BaseModel):
    status: str = "success"
    message: str
    data: List[CommentOut]


class CommentCreatedResponse(BaseModel):
    status: str = "success"
    message: str
    data: int                  # 새로 생성된 댓글 ID
