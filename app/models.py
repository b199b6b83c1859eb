# ------------------------------------------------------------
# models.py - SQLAlchemy ORM 모델 정의 (comments)
# ------------------------------------------------------------

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from .db import Base  # Declarative Base: 모든 ORM 모델의 베이스 클래스

# 댓글 본문 최대 길이(문자 수). 라우터 검증과 컬럼 길이가 같은 값을 공유
COMMENT_MAX_LENGTH = 500


def _utcnow():
    return datetime.now(timezone.utc)


# ------------------------------
# Comment: 영화별 사용자 댓글 테이블
# ------------------------------
class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)

    # 영화 식별자 = 카탈로그의 episode_id. 카운트/조회가 모두 이 컬럼 기준
    movie_id = Column(Integer, nullable=False, index=True)

    comment = Column(String(COMMENT_MAX_LENGTH), nullable=False)

    # 제출자 IP (IPv6 최대 길이 고려해 45자)
    ip_address = Column(String(45), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
