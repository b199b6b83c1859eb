import os

# app.db는 import 시점에 엔진을 만들므로 MySQL 대신 sqlite URL을 먼저 지정
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
import redis
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.cache import ResultCache, get_cache
from app.catalog import get_catalog
from app.db import get_db, init_db
from app.main import app
from app.schemas import Character, Film


def make_film(episode_id, title=None, release_date="1977-05-25", characters=(), opening_crawl="It is a period of civil war."):
    return Film(
        title=title or f"Episode {episode_id}",
        episode_id=episode_id,
        opening_crawl=opening_crawl,
        director="George Lucas",
        producer="Gary Kurtz, Rick McCallum",
        release_date=release_date,
        characters=list(characters),
        planets=[],
        starships=[],
        vehicles=[],
        species=[],
        created="2014-12-10T14:23:31.880000Z",
        edited="2014-12-20T19:49:45.256000Z",
        url=f"https://swapi.dev/api/films/{episode_id}/",
    )


def make_character(name, height="172", gender="male"):
    return Character(
        name=name,
        height=height,
        mass="77",
        hair_color="blond",
        skin_color="fair",
        eye_color="blue",
        birth_year="19BBY",
        gender=gender,
    )


class FakeCatalog:
    """films 목록과 {url: Character | Exception} 매핑으로 동작하는 카탈로그 대역"""

    def __init__(self, films=(), characters=None, films_error=None):
        self.films = list(films)
        self.characters = dict(characters or {})
        self.films_error = films_error
        self.films_calls = 0
        self.character_calls = []

    def fetch_films(self):
        self.films_calls += 1
        if self.films_error is not None:
            raise self.films_error
        return list(self.films)

    def fetch_character(self, url):
        self.character_calls.append(url)
        value = self.characters[url]
        if isinstance(value, Exception):
            raise value
        return value


class FakeRedis:
    """redis.Redis의 get/set(ex=)만 흉내내는 dict 기반 대역"""

    def __init__(self, fail=False):
        self.store = {}
        self.ttls = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return self.store.get(key)

    def set(self, key, value, ex=None):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.store[key] = value
        self.ttls[key] = ex
        return True


@pytest.fixture
def engine():
    # 모든 스레드(TestClient 스레드풀 포함)가 같은 in-memory DB를 보도록 StaticPool 사용
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def catalog():
    luke = "https://swapi.dev/api/people/1/"
    leia = "https://swapi.dev/api/people/5/"
    r2 = "https://swapi.dev/api/people/3/"
    return FakeCatalog(
        films=[
            make_film(4, "A New Hope", "1977-05-25", [luke, leia, r2]),
            make_film(5, "The Empire Strikes Back", "1980-05-17", [luke]),
            make_film(1, "The Phantom Menace", "1999-05-19", []),
        ],
        characters={
            luke: make_character("Luke Skywalker", "172", "male"),
            leia: make_character("Leia Organa", "150", "female"),
            r2: make_character("R2-D2", "96", "n/a"),
        },
    )


@pytest.fixture
def client(session_factory, catalog, fake_redis):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_cache] = lambda: ResultCache(fake_redis)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
