"""
설정과 로깅
============

환경 변수에서 앱/데모 설정을 읽는다.

  | 환경 변수             | 기본값    | 내용                              |
  |-----------------------|-----------|-----------------------------------|
  | HOLDEM_DB_PATH        | db.json   | TinyDB 파일 경로                  |
  | HOLDEM_SECRET_KEY     | key       | Flask secret_key                  |
  | HOLDEM_K              | 3         | 도메인 크기 지수 (n = 2^k 행)     |
  | HOLDEM_STRAIGHT_MODE  | literal   | literal 또는 adjacent             |
  | HOLDEM_BIND_PUBLIC    | (꺼짐)    | 1/true/yes/on 이면 공개 카드 바인딩 |
  | LOG_LEVEL             | INFO      | DEBUG / INFO / WARNING / ERROR    |
"""

import logging
import os

from zkholdem.holdem.chip import StraightMode


def _truthy_env(environ, name, default=False):
    raw = str(environ.get(name) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


class Settings:
    """앱과 데모가 공유하는 설정."""

    def __init__(self, db_path="db.json", secret_key="key", k=3,
                 straight_mode=StraightMode.LITERAL, bind_public=False, log_level="INFO"):
        if k < 1:
            raise ValueError(f"k는 1 이상이어야 합니다: {k}")
        self.db_path = db_path
        self.secret_key = secret_key
        self.k = k
        self.straight_mode = StraightMode(straight_mode)
        self.bind_public = bind_public
        self.log_level = log_level.upper()

    @classmethod
    def from_env(cls, environ=None):
        """환경 변수로부터 Settings를 만든다.

        Raises:
            ValueError: HOLDEM_K가 정수가 아니거나 HOLDEM_STRAIGHT_MODE가 잘못됐을 때
        """
        if environ is None:
            environ = os.environ
        return cls(
            db_path=environ.get("HOLDEM_DB_PATH", "db.json"),
            secret_key=environ.get("HOLDEM_SECRET_KEY", "key"),
            k=int(environ.get("HOLDEM_K", "3")),
            straight_mode=environ.get("HOLDEM_STRAIGHT_MODE", "literal").strip().lower(),
            bind_public=_truthy_env(environ, "HOLDEM_BIND_PUBLIC"),
            log_level=environ.get("LOG_LEVEL", "INFO"),
        )


def setup_logging(level="INFO"):
    """프로그램 시작 시 한 번 호출한다 (app.py, example.py)."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
