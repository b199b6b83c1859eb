# ------------------------------------------------------------
# comments.py - 댓글 저장소 (comments 테이블 CRUD) 및 입력 검증
# ------------------------------------------------------------

from typing import List

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import InvalidInput, StoreFailure
from .models import COMMENT_MAX_LENGTH, Comment

# comments.movie_id 컬럼(Integer)의 최댓값
MOVIE_ID_MAX = 2**31 - 1


def validate_comment_text(text: str) -> str:
    # 저장소에 닿기 전에 길이 검사 (문자 수 기준)
    if len(text) > COMMENT_MAX_LENGTH:
        raise InvalidInput(f"comment must be less than {COMMENT_MAX_LENGTH} characters")
    return text


def parse_movie_id(raw: str) -> int:
    """경로 파라미터의 영화 ID를 음이 아닌 정수로 변환. 실패 시 InvalidInput."""
    if not (raw.isascii() and raw.isdigit()):
        raise InvalidInput(f"invalid movie id '{raw}': must be a non-negative integer")
    movie_id = int(raw)
    if movie_id > MOVIE_ID_MAX:
        raise InvalidInput(f"invalid movie id '{raw}': must not exceed {MOVIE_ID_MAX}")
    return movie_id


class CommentStore:
    """요청 단위 Session을 감싸는 댓글 저장소. SQLAlchemy 오류는 StoreFailure로 변환."""

    def __init__(self, db: Session):
        self.db = db

    def count_by_film(self, movie_id: int) -> int:
        try:
            return (
                self.db.query(func.count(Comment.id))
                .filter(Comment.movie_id == movie_id)
                .scalar()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreFailure(f"failed to count comments for movie {movie_id}: {e}") from e

    def insert(self, movie_id: int, text: str, ip_address: str) -> int:
        row = Comment(movie_id=movie_id, comment=text, ip_address=ip_address)
        try:
            self.db.add(row)
            self.db.commit()    # 단일 INSERT, 다른 연산과 트랜잭션을 묶지 않음
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreFailure(f"failed to insert comment for movie {movie_id}: {e}") from e
        logger.info(f"[Comments] Inserted comment {row.id} for movie {movie_id}")
        return row.id

    def list_by_film(self, movie_id: int) -> List[Comment]:
        # 최신순. created_at이 같으면 id 역순
        try:
            return (
                self.db.query(Comment)
                .filter(Comment.movie_id == movie_id)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreFailure(f"failed to list comments for movie {movie_id}: {e}") from e
