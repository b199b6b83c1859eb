# -----------------------------------------------------------
# comments.py - 영화별 댓글 조회/등록 REST 엔드포인트
# -----------------------------------------------------------

from fastapi import APIRouter, Depends, Request  # Request: 제출자 IP 추출용
from sqlalchemy.orm import Session               # SQLAlchemy ORM 세션 타입 힌트
from ..comments import CommentStore, parse_movie_id, validate_comment_text
from ..db import get_db                          # DB 세션 의존성 (요청마다 세션 열고 응답 후 닫음)
from ..schemas import CommentCreatedResponse, CommentIn, CommentOut, CommentsResponse

router = APIRouter(prefix="/movies", tags=["comments"])


def client_ip(request: Request) -> str:
    # 프록시 뒤에서는 X-Forwarded-For의 첫 번째 주소가 원래 클라이언트
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else ""


@router.get("/{movie_id}/comments", response_model=CommentsResponse)
def get_comments(movie_id: str, db: Session = Depends(get_db)):
    """
    특정 영화의 댓글을 최신순으로 반환합니다.
    - 댓글이 없으면 빈 리스트
    """
    rows = CommentStore(db).list_by_film(parse_movie_id(movie_id))
    return CommentsResponse(
        message="comments retrieved successfully",
        data=[CommentOut.model_validate(r) for r in rows],
    )


@router.post("/{movie_id}/comments", response_model=CommentCreatedResponse)
def add_comment(movie_id: str, payload: CommentIn, request: Request, db: Session = Depends(get_db)):
    """
    특정 영화에 댓글 1건을 등록하고 새 댓글 ID를 반환합니다.

    요청 바디(JSON) 예:
    {
      "comment": "Best opening crawl ever"
    }

    - 500자 초과 시 400 (저장소에 쓰지 않음)
    - 중복 제거/속도 제한 없음: 같은 내용도 매번 새 행으로 INSERT
    """
    film_id = parse_movie_id(movie_id)
    text = validate_comment_text(payload.comment)

    new_id = CommentStore(db).insert(film_id, text, client_ip(request))
    return CommentCreatedResponse(message="comment inserted successfully", data=new_id)


# -----------------------------------------------------------
# 예시 호출
# -----------------------------------------------------------
#  - GET  /movies/4/comments
#  - POST /movies/4/comments   (JSON: {"comment": "Luke, I am your father"})
