# ------------------------------------------------------------
# main.py - FastAPI 앱 / 로깅 / 미들웨어 / 라우터 등록 진입점
# ------------------------------------------------------------

import os
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .db import init_db                          # 테이블 생성 (comments)
from .errors import register_error_handlers      # 도메인 예외 -> JSON 에러 봉투
from .routers import comments, movies            # 모듈화된 라우터들(영화/댓글)

# -------------------------------
# 로깅 설정
# -------------------------------
# - loguru 기본 sink를 지우고 LOG_LEVEL 기준 stderr sink 하나만 둠
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)

app = FastAPI(title="Star Wars Movies API")

# -------------------------------
# CORS 설정
# -------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# -------------------------------
# 라우터 등록
# -------------------------------
# - movies:   /movies, /movies/{id}/characters
# - comments: /movies/{id}/comments (GET/POST)
app.include_router(movies.router)
app.include_router(comments.router)


@app.on_event("startup")
def startup_event():
    # 존재하지 않는 테이블만 생성
    init_db()
    logger.info("[API] Startup complete: comments table ready")


# 헬스체크용 엔드포인트
@app.get("/ping")
def ping():
    return {"message": "pong"}
