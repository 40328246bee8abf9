"""
홀덤 Flask Blueprint: 족보 주장 검사 엔드포인트
=================================================

  | 메서드 | 경로                  | 내용                                |
  |--------|-----------------------|-------------------------------------|
  | GET    | /holdem/schema        | 게이트, 제약식, 열 구성             |
  | POST   | /holdem/check         | 카드와 주장을 받아 회로 검사        |
  | GET    | /holdem/checks        | 저장된 검사 목록                    |
  | GET    | /holdem/checks/<id>   | 검사 하나 (witness 표 포함)         |
  | DELETE | /holdem/checks        | 저장된 검사 모두 삭제               |

POST /holdem/check 요청 예시:
    {"private": "7h 7s", "table": "7d Kc Kh", "claim": "full house",
     "straight_mode": "literal", "bind_public": true}
"""

import logging
import uuid

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from zkholdem.holdem.chip import StraightMode
from zkholdem.holdem.circuit import HoldemCircuit, HoldemParams
from zkholdem.holdem.witness import prepare
from zkholdem.plonkish.constraint_system import ConstraintSystem
from zkholdem.plonkish.errors import PlonkishError
from zkholdem.plonkish.mock_prover import MockProver
from zkholdem.plonkish.preprocessor import preprocess
from zkholdem.plonkish.quotient import is_divisible

from holdem_serializers import (
    serialize_failure,
    serialize_fr_list,
    serialize_preprocessed,
    serialize_schema,
    serialize_witness_table,
    fr_short,
)

logger = logging.getLogger(__name__)

holdem_bp = Blueprint('holdem', __name__, url_prefix='/holdem')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_holdem_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


def db_list_prefix(prefix):
    """prefix로 시작하는 모든 항목의 데이터를 반환한다."""
    return [row.get("data") for row in DB.search(DATA.type.test(lambda t: t.startswith(prefix)))]


# ─── 설정 ───

def _settings():
    return current_app.config["HOLDEM_SETTINGS"]


def _options(payload):
    """요청 본문의 스키마 옵션을 앱 설정 기본값과 합친다."""
    settings = _settings()
    straight_mode = StraightMode(payload.get("straight_mode", settings.straight_mode.value))
    bind_public = payload.get("bind_public", settings.bind_public)
    # 쿼리 문자열로 온 값
    if isinstance(bind_public, str):
        bind_public = bind_public.strip().lower() in {"1", "true", "yes", "on"}
    if not isinstance(bind_public, bool):
        raise ValueError(f"bind_public은 true/false여야 합니다: {bind_public!r}")
    return straight_mode, bind_public


@holdem_bp.errorhandler(ValueError)
@holdem_bp.errorhandler(PlonkishError)
def bad_request(error):
    return jsonify({"error": type(error).__name__, "message": str(error)}), 400


# ──────────────────────────────────────────────────────────────
# 스키마
# ──────────────────────────────────────────────────────────────

@holdem_bp.route("/schema")
def schema():
    """게이트 7개와 열 구성을 보여준다."""
    straight_mode, bind_public = _options(request.args.to_dict())
    cs = ConstraintSystem()
    HoldemCircuit.configure(cs, HoldemParams(straight_mode, bind_public))
    data = serialize_schema(cs)
    data["straight_mode"] = straight_mode.value
    data["bind_public"] = bind_public
    return jsonify(data)


# ──────────────────────────────────────────────────────────────
# 검사
# ──────────────────────────────────────────────────────────────

@holdem_bp.route("/check", methods=["POST"])
def check():
    """카드와 주장으로 회로를 합성하고 만족 여부를 검사한다."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError("JSON 객체 본문이 필요합니다")
    for key in ("private", "table", "claim"):
        if key not in payload:
            raise ValueError(f"필수 항목이 없습니다: {key}")

    straight_mode, bind_public = _options(payload)
    k = _settings().k
    prepared = prepare(
        payload["private"], payload["table"], payload["claim"],
        encoding=payload.get("encoding"),
        straight_mode=straight_mode,
        bind_public=bind_public,
    )

    preprocessed = preprocess(k, prepared.circuit)
    prover = MockProver.run(k, prepared.circuit, prepared.instances)
    failures = prover.verify()
    divisible = is_divisible(preprocessed, prover)
    claim = prepared.circuit.claim

    check_id = uuid.uuid4().hex
    result = {
        "id": check_id,
        "claim": claim.value,
        "cards": [str(c) for c in prepared.cards],
        "satisfied": not failures,
        "divisible": divisible,
        "failures": [serialize_failure(f) for f in failures],
        "counts": {
            "num_of_pair": prepared.counts[0],
            "num_of_same_kind": prepared.counts[1],
        },
        "selectors": [repr(s) for s in claim.selectors(preprocessed.config.chip)],
        "straight_mode": straight_mode.value,
        "bind_public": bind_public,
        "instances": [serialize_fr_list(col) for col in prepared.instances],
    }
    db_set(f"holdem.check.{check_id}", {
        **result,
        "witness_table": serialize_witness_table(prover),
        "preprocessed": serialize_preprocessed(preprocessed),
    })

    logger.info("check %s: %s claims '%s' -> satisfied=%s, divisible=%s",
                check_id, " ".join(result["cards"]), claim.value, result["satisfied"], divisible)
    if failures:
        logger.warning("claim '%s' not satisfied: %d failures (first: %s)",
                       claim.value, len(failures), failures[0])
    return jsonify(result), 201


@holdem_bp.route("/checks")
def list_checks():
    """저장된 검사 요약 목록."""
    checks = db_list_prefix("holdem.check.")
    return jsonify([
        {
            "id": c["id"],
            "claim": c["claim"],
            "cards": c["cards"],
            "satisfied": c["satisfied"],
            "divisible": c["divisible"],
            "omega": fr_short(int(c["preprocessed"]["omega"])),
        }
        for c in checks
    ])


@holdem_bp.route("/checks/<check_id>")
def get_check(check_id):
    """검사 하나의 전체 기록."""
    data = db_get(f"holdem.check.{check_id}")
    if data is None:
        return jsonify({"error": "NotFound", "message": f"검사 기록이 없습니다: {check_id}"}), 404
    return jsonify(data)


@holdem_bp.route("/checks", methods=["DELETE"])
def clear_checks():
    """저장된 검사 기록을 모두 삭제한다."""
    db_remove_prefix("holdem.check.")
    return jsonify({"cleared": True})
