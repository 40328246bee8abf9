"""
몫 다항식 검사 (Quotient Check)
=================================

MockProver가 행마다 값을 대입해 보는 반면, 이 모듈은 같은 질문을
다항식의 언어로 묻는다:

    "결합 제약 다항식 C(x)가 도메인 H 위에서 모두 0인가?"
    ⇔ "Z_H(x) = x^n - 1 이 C(x)를 나누는가?"

**결합 제약 다항식**:
  게이트의 모든 식 c₀, c₁, ..., c_{m-1}을 챌린지 α로 묶는다.

    C(x) = Σⱼ αʲ · cⱼ(x)  +  Σₖ α^(m+k) · L_{lₖ}(x) · (p_{aₖ}(x) - p_{bₖ}(ω^(rₖ-lₖ)·x))

  두 번째 합은 전처리된 복사 제약 ((aₖ, lₖ), (bₖ, rₖ)) 마다 하나씩이다.
  L_l(x)은 l번째 도메인 점에서만 1인 라그랑주 기저이므로, 이 항은
  셀 aₖ[lₖ]와 bₖ[rₖ]의 값이 같을 때만 H 위에서 0이 된다.

  cⱼ(x)는 식 트리를 다항식 위에서 평가한 것이다:
  - 셀렉터 q → 전처리된 셀렉터 다항식 q(x)
  - advice/instance 질의 (회전 r) → 열 다항식 p(ωʳ·x)
  - 상수 → 상수 다항식

  어떤 행 i에서 cⱼ(ωⁱ) ≠ 0 이면, 랜덤한 α에 대해 C(ωⁱ) ≠ 0 일 확률이
  압도적이므로 Z_H(x)로 나누어 떨어지지 않는다.

**α 챌린지**:
  공개 입력(instance) 값을 트랜스크립트에 넣고 Fiat-Shamir로 뽑는다.

사용 예시:
    >>> pp = preprocess(3, circuit)
    >>> prover = MockProver.run(3, circuit, instances)
    >>> t = quotient_polynomial(pp, prover)   # 불만족이면 ValueError
"""

import logging

from zkholdem.plonk.polynomial import Polynomial
from zkholdem.plonk.transcript import Transcript
from zkholdem.plonkish.constraint_system import ADVICE

logger = logging.getLogger(__name__)


class _PolynomialEnv:
    """Expression.evaluate가 다항식을 돌려주도록 하는 환경."""

    def __init__(self, preprocessed, advice_polys, instance_polys):
        self.pp = preprocessed
        self.field = preprocessed.cs.field
        self.advice_polys = advice_polys
        self.instance_polys = instance_polys

    def _rotate(self, poly, rotation):
        if rotation.offset == 0:
            return poly
        return poly.rotate(self.pp.omega ** (rotation.offset % self.pp.n))

    def constant(self, value):
        return Polynomial([self.field(int(value))], field=self.field)

    def selector(self, selector):
        return self.pp.selector_polys[selector.index]

    def advice(self, column, rotation):
        return self._rotate(self.advice_polys[column.index], rotation)

    def instance(self, column, rotation):
        return self._rotate(self.instance_polys[column.index], rotation)

    def column(self, column):
        if column.kind == ADVICE:
            return self.advice_polys[column.index]
        return self.instance_polys[column.index]


def _lagrange(row, preprocessed):
    """L_row(x): 도메인의 row번째 점에서 1, 나머지 점에서 0."""
    field = preprocessed.cs.field
    evals = [field(0)] * preprocessed.n
    evals[row] = field(1)
    return Polynomial.from_evaluations(evals, preprocessed.omega)


def _copy_term(env, copy):
    """L_l(x) · (p_left(x) - p_right(ω^(r-l)·x)): 복사 제약 하나."""
    (left_column, left_row), (right_column, right_row) = copy
    pp = env.pp
    shift = pp.omega ** ((right_row - left_row) % pp.n)
    left = env.column(left_column)
    right = env.column(right_column).rotate(shift)
    return _lagrange(left_row, pp) * (left - right)


def _shape(cs):
    return (len(cs.selectors), len(cs.advice_columns),
            len(cs.instance_columns), len(cs.gates))


def _check_shape(preprocessed, prover):
    if preprocessed.n != prover.n:
        raise ValueError(f"도메인 크기가 다릅니다: {preprocessed.n} != {prover.n}")
    if _shape(preprocessed.cs) != _shape(prover.cs):
        raise ValueError("전처리된 회로와 witness 회로의 스키마가 다릅니다")


def constraint_polynomial(preprocessed, prover, alpha):
    """게이트 식과 복사 제약을 α로 묶은 결합 제약 다항식 C(x)를 계산한다.

    Args:
        preprocessed: PreprocessedData (셀렉터 다항식 제공)
        prover: 합성이 끝난 MockProver (셀 값 제공)
        alpha: 결합 챌린지

    Returns:
        Polynomial: C(x)
    """
    _check_shape(preprocessed, prover)
    field = prover.field
    omega = preprocessed.omega

    advice_polys = []
    for column in prover.cs.advice_columns:
        evals = [field(0) if v is None else v for v in prover.advice[column]]
        advice_polys.append(Polynomial.from_evaluations(evals, omega))
    instance_polys = [
        Polynomial.from_evaluations(prover.instances[column], omega)
        for column in prover.cs.instance_columns
    ]

    env = _PolynomialEnv(preprocessed, advice_polys, instance_polys)
    combined = Polynomial.zero(field)
    alpha_power = field(1)
    for gate in prover.cs.gates:
        for poly in gate.polys:
            combined = combined + poly.evaluate(env) * alpha_power
            alpha_power = alpha_power * alpha
    # 복사 제약은 witness가 아닌 전처리 결과를 따른다
    for copy in preprocessed.copies:
        combined = combined + _copy_term(env, copy) * alpha_power
        alpha_power = alpha_power * alpha
    return combined


def quotient_polynomial(preprocessed, prover, transcript=None):
    """몫 다항식 t(x) = C(x) / Z_H(x)를 계산한다.

    Args:
        preprocessed: PreprocessedData
        prover: 합성이 끝난 MockProver
        transcript: α를 뽑을 트랜스크립트 (기본값: 새 Transcript)

    Returns:
        Polynomial: t(x)

    Raises:
        ValueError: C(x)가 Z_H(x)로 나누어 떨어지지 않을 때 (제약 불만족)
    """
    if transcript is None:
        transcript = Transcript(field=prover.field)
    for column in prover.cs.instance_columns:
        for value in prover.instances[column]:
            transcript.append_scalar(b"instance", value)
    alpha = transcript.challenge_scalar(b"alpha")

    combined = constraint_polynomial(preprocessed, prover, alpha)
    quotient = combined.divide_by_vanishing(preprocessed.n)
    logger.debug("quotient computed: deg C = %d, deg t = %d",
                 combined.degree, quotient.degree)
    return quotient


def is_divisible(preprocessed, prover, transcript=None):
    """C(x)가 Z_H(x)로 나누어 떨어지면 True."""
    _check_shape(preprocessed, prover)
    try:
        quotient_polynomial(preprocessed, prover, transcript)
    except ValueError:
        return False
    return True
