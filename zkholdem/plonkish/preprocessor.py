"""
전처리기 (Preprocessor): 형태(shape)만 필요한 합성
====================================================

회로 구조가 정해지면 "어느 행에서 어느 셀렉터가 켜지는가"와
"어떤 셀끼리 복사 제약으로 묶이는가"는 witness 값과 무관하다.
이 모듈은 witness 없이(without_witnesses) 회로를 합성하여
그 구조 정보만 뽑아낸다.

**Assembly**:
  Assignment 구현. advice 값은 무시하고 (unknown 허용)
  셀렉터 활성화와 복사 제약만 기록한다.

**전처리 출력물**:
  - 도메인 정보: n, ω, [1, ω, ..., ω^(n-1)]
  - 셀렉터 평가값: selector_evals[i] = [q_i(ω⁰), ..., q_i(ω^(n-1))]
  - 셀렉터 다항식: selector_polys[i] (IFFT 보간)
  - 복사 제약 목록

사용 예시:
    >>> pp = preprocess(3, circuit)
    >>> pp.selector_evals[0][0]   # 셀렉터 0이 0번 행에서 켜졌는가
"""

import logging

from zkholdem.plonk.field import get_root_of_unity, get_roots_of_unity
from zkholdem.plonk.polynomial import Polynomial
from zkholdem.plonkish.constraint_system import ConstraintSystem
from zkholdem.plonkish.errors import (
    ColumnNotEqualityEnabled,
    ColumnNotInSchema,
    NotEnoughRows,
)
from zkholdem.plonkish.layouter import Assignment, Layouter

logger = logging.getLogger(__name__)


class Assembly(Assignment):
    """셀렉터와 복사 제약만 기록하는 형태 전용 백엔드."""

    def __init__(self, k, cs):
        self.k = k
        self.n = 1 << k
        self.cs = cs
        self.selectors = {s: [False] * self.n for s in cs.selectors}
        self.copies = []

    def _check_row(self, row):
        if not 0 <= row < self.n:
            raise NotEnoughRows(row, self.n)

    def enable_selector(self, annotation, selector, row):
        if not self.cs.owns(selector):
            raise ColumnNotInSchema(selector)
        self._check_row(row)
        self.selectors[selector][row] = True

    def assign_advice(self, annotation, column, row, value):
        # 값은 보지 않는다. 위치만 검사한다.
        if not self.cs.owns(column):
            raise ColumnNotInSchema(column)
        self._check_row(row)

    def copy(self, left_column, left_row, right_column, right_row):
        for column, row in ((left_column, left_row), (right_column, right_row)):
            if column not in self.cs.equality_columns:
                raise ColumnNotEqualityEnabled(column)
            self._check_row(row)
        self.copies.append(((left_column, left_row), (right_column, right_row)))


class PreprocessedData:
    """전처리된 회로 구조.

    속성 (도메인):
        k, n: 도메인 크기 n = 2^k
        omega: n차 원시 단위근
        domain: [1, ω, ω², ..., ω^{n-1}]

    속성 (회로 구조):
        cs: ConstraintSystem (스키마)
        config: configure()의 반환값
        selector_evals: 셀렉터 인덱스 순서의 평가값 리스트
        selector_polys: 셀렉터 인덱스 순서의 Polynomial 리스트
        copies: 복사 제약 목록 ((열, 행), (열, 행))
    """
    pass


def preprocess(k, circuit):
    """회로를 witness 없이 합성하여 구조 정보를 만든다.

    단계:
    1. 스키마 선언: configure(meta, params)
    2. 도메인 설정: n = 2^k, 단위근 ω
    3. without_witnesses() 회로를 Assembly에 합성
    4. 셀렉터 열을 IFFT로 다항식화

    Args:
        k: 도메인 크기 지수
        circuit: Circuit 객체 (witness가 있어도 무시됨)

    Returns:
        PreprocessedData
    """
    result = PreprocessedData()

    # ── 1단계: 스키마 선언 ──
    cs = ConstraintSystem(field=circuit.field)
    config = circuit.configure(cs, circuit.params())
    result.cs = cs
    result.config = config

    # ── 2단계: 도메인 설정 ──
    field = cs.field
    result.k = k
    result.n = 1 << k
    result.omega = get_root_of_unity(result.n, field)
    result.domain = get_roots_of_unity(result.n, field)

    # ── 3단계: 형태 합성 ──
    assembly = Assembly(k, cs)
    circuit.without_witnesses().synthesize(config, Layouter(assembly, cs))

    # ── 4단계: 셀렉터 다항식 ──
    result.selector_evals = [
        [field(1) if on else field(0) for on in assembly.selectors[s]]
        for s in cs.selectors
    ]
    result.selector_polys = [
        Polynomial.from_evaluations(evals, result.omega)
        for evals in result.selector_evals
    ]
    result.copies = assembly.copies

    logger.debug("preprocessed circuit: n=%d, %d selectors, %d copies",
                 result.n, len(cs.selectors), len(result.copies))
    return result
