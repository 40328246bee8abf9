"""
홀덤 검사 데이터 직렬화 헬퍼
==============================

TinyDB와 JSON 응답에 담을 수 있는 형태로 회로 객체를 변환한다.
필드 원소, 다항식, 게이트, 검사 실패, 전처리 결과, MockProver 셀 표 등.
"""

from zkholdem.plonkish.mock_prover import ConstraintNotSatisfied, CellNotAssigned


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


# ─── FR list ───

def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [str(int(v)) for v in lst]


# ─── Polynomial ───

def serialize_poly(poly):
    """Polynomial → list of str (계수)"""
    if poly is None:
        return None
    return [str(int(c)) for c in poly.coeffs]


# ─── 스키마 ───

def serialize_gate(gate):
    """Gate → dict (이름, 제약 문자열, 차수)"""
    return {
        "name": gate.name,
        "constraints": [
            {"name": name, "expression": repr(poly), "degree": poly.degree()}
            for name, poly in zip(gate.constraint_names, gate.polys)
        ],
        "selectors": [repr(s) for s in gate.queried_selectors],
        "degree": gate.degree(),
    }


def serialize_schema(cs):
    """ConstraintSystem → dict"""
    return {
        "field_modulus": str(cs.field.field_modulus),
        "selectors": [repr(s) for s in cs.selectors],
        "advice_columns": [repr(c) for c in cs.advice_columns],
        "instance_columns": [repr(c) for c in cs.instance_columns],
        "equality_columns": [repr(c) for c in cs.equality_columns],
        "gates": [serialize_gate(g) for g in cs.gates],
        "degree": cs.degree(),
    }


# ─── 검사 결과 ───

def serialize_failure(failure):
    """VerifyFailure → dict"""
    data = {"kind": failure.kind, "message": str(failure)}
    if isinstance(failure, ConstraintNotSatisfied):
        data.update({
            "gate": failure.gate,
            "index": failure.index,
            "constraint": failure.name,
            "row": failure.row,
            "cells": {k: str(v) for k, v in failure.cell_values.items()},
        })
    elif isinstance(failure, CellNotAssigned):
        data.update({"gate": failure.gate, "column": repr(failure.column), "row": failure.row})
    else:
        (lc, lr), (rc, rr) = failure.left, failure.right
        data.update({
            "left": {"column": repr(lc), "row": lr},
            "right": {"column": repr(rc), "row": rr},
        })
    return data


def serialize_witness_table(prover):
    """MockProver의 advice 셀 표 → 행 리스트 (미할당 셀은 None)"""
    columns = prover.cs.advice_columns
    rows = []
    for row in range(prover.n):
        values = [prover.advice[c][row] for c in columns]
        if all(v is None for v in values):
            continue
        entry = {"row": row}
        for column, value in zip(columns, values):
            entry[repr(column)] = None if value is None else serialize_fr(value)
        rows.append(entry)
    return rows


# ─── PreprocessedData ───

def serialize_preprocessed(pp):
    """PreprocessedData → dict (셀렉터 열과 다항식)"""
    return {
        "n": pp.n,
        "omega": serialize_fr(pp.omega),
        "domain": serialize_fr_list(pp.domain),
        "selectors": {
            repr(selector): {
                "evals": serialize_fr_list(evals),
                "poly": serialize_poly(poly),
            }
            for selector, evals, poly in zip(pp.cs.selectors, pp.selector_evals,
                                             pp.selector_polys)
        },
        "copies": [
            [[repr(lc), lr], [repr(rc), rr]]
            for (lc, lr), (rc, rr) in pp.copies
        ],
    }


def fr_short(val):
    """FR → 축약 문자열 (표시용)"""
    if val is None:
        return "None"
    s = str(int(val))
    if len(s) <= 10:
        return s
    return s[:4] + "..." + s[-4:]
