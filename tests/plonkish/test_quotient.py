"""
전처리(preprocess)와 몫 다항식 검사 테스트.

테스트 대상:
  - preprocess: 도메인, 셀렉터 평가값/다항식, 복사 제약 목록
  - Assembly: unknown 값 허용, 위치 검사
  - quotient_polynomial / is_divisible: 만족 ⇔ Z_H로 나누어 떨어짐
  - 회전(Rotation.next) 질의가 다항식 위에서도 맞게 동작함
  - 복사 제약이 라그랑주 항으로 C(x)에 들어감 (공개 입력 불일치 → 나누어 떨어지지 않음)
"""

import pytest
from zkholdem.plonk.field import FR, prime_field
from zkholdem.plonk.polynomial import Polynomial
from zkholdem.plonk.transcript import Transcript
from zkholdem.plonkish.circuit import Circuit
from zkholdem.plonkish.errors import NotEnoughRows
from zkholdem.plonkish.expression import Rotation
from zkholdem.plonkish.mock_prover import MockProver
from zkholdem.plonkish.preprocessor import preprocess
from zkholdem.plonkish.quotient import (
    constraint_polynomial, quotient_polynomial, is_divisible,
)


class CounterConfig:
    def __init__(self, q, x):
        self.q = q
        self.x = x


class CounterCircuit(Circuit):
    """x[i+1] = x[i] + 1 (셀렉터가 켜진 행에서)."""

    def __init__(self, values=None, rows=4):
        self.values = values
        self.rows = rows

    def without_witnesses(self):
        return CounterCircuit(rows=self.rows)

    @classmethod
    def configure(cls, meta, params=None):
        q = meta.selector("q_step")
        x = meta.advice_column("x")
        meta.instance_column("unused")
        meta.create_gate("step", lambda vc: [
            vc.query_selector(q) * (vc.query_advice(x, Rotation.next())
                                    - vc.query_advice(x, Rotation.cur()) - 1)
        ])
        return CounterConfig(q, x)

    def synthesize(self, config, layouter):
        values = self.values or [None] * self.rows

        def region_fn(region):
            for i, v in enumerate(values):
                if i < len(values) - 1:
                    region.enable_selector("step", config.q, i)
                region.assign_advice("x", config.x, i, v)

        layouter.assign_region("counter", region_fn)


class SmallCounterCircuit(CounterCircuit):
    field = prime_field(97)

    def without_witnesses(self):
        return SmallCounterCircuit(rows=self.rows)


class PublicCopyCircuit(Circuit):
    """게이트 없이 advice x[2]를 공개 입력 pub[1]에 묶는다."""

    def __init__(self, value=None):
        self.value = value

    def without_witnesses(self):
        return PublicCopyCircuit()

    @classmethod
    def configure(cls, meta, params=None):
        x = meta.advice_column("x")
        pub = meta.instance_column("pub")
        meta.enable_equality(x)
        meta.enable_equality(pub)
        return x, pub

    def synthesize(self, config, layouter):
        x, pub = config
        cell = layouter.assign_region(
            "copy", lambda region: region.assign_advice("x", x, 2, self.value))
        layouter.constrain_instance(cell, pub, 1)


def _check(circuit, k=3):
    pp = preprocess(k, circuit)
    prover = MockProver.run(k, circuit, [[]])
    return pp, prover


# ─────────────────────────────────────────────────────────────────────
# 전처리
# ─────────────────────────────────────────────────────────────────────

class TestPreprocess:
    def test_domain(self):
        pp = preprocess(3, CounterCircuit())
        assert pp.n == 8
        assert pp.omega ** 8 == FR(1)
        assert pp.omega ** 4 != FR(1)
        assert len(pp.domain) == 8

    def test_selector_evals(self):
        pp = preprocess(3, CounterCircuit(rows=4))
        assert [int(v) for v in pp.selector_evals[0]] == [1, 1, 1, 0, 0, 0, 0, 0]

    def test_selector_polys_interpolate(self):
        pp = preprocess(3, CounterCircuit(rows=4))
        poly = pp.selector_polys[0]
        for i, point in enumerate(pp.domain):
            assert poly.evaluate(point) == pp.selector_evals[0][i]

    def test_unknown_values_accepted(self):
        # witness 없이도 전처리는 성공해야 한다
        pp = preprocess(3, CounterCircuit(values=None))
        assert pp.copies == []

    def test_too_many_rows(self):
        with pytest.raises(NotEnoughRows):
            preprocess(2, CounterCircuit(rows=5))

    def test_small_field(self):
        pp = preprocess(3, SmallCounterCircuit())
        assert pp.cs.field is SmallCounterCircuit.field
        assert isinstance(pp.omega, SmallCounterCircuit.field)


# ─────────────────────────────────────────────────────────────────────
# 몫 다항식
# ─────────────────────────────────────────────────────────────────────

class TestQuotient:
    def test_satisfied_is_divisible(self):
        pp, prover = _check(CounterCircuit([FR(3), FR(4), FR(5), FR(6)]))
        assert prover.verify() == []
        assert is_divisible(pp, prover)

    def test_quotient_times_vanishing(self):
        circuit = CounterCircuit([FR(3), FR(4), FR(5), FR(6)])
        pp, prover = _check(circuit)
        t = quotient_polynomial(pp, prover, Transcript())

        # 같은 공개 입력(0으로 패딩된 n개)을 넣은 트랜스크립트에서 같은 α가 나온다
        replay = Transcript()
        for _ in range(pp.n):
            replay.append_scalar(b"instance", 0)
        alpha = replay.challenge_scalar(b"alpha")
        combined = constraint_polynomial(pp, prover, alpha)
        assert t * Polynomial.vanishing(pp.n) == combined

    def test_unsatisfied_not_divisible(self):
        pp, prover = _check(CounterCircuit([FR(3), FR(4), FR(9), FR(10)]))
        assert len(prover.verify()) == 1
        assert not is_divisible(pp, prover)

    def test_unsatisfied_raises(self):
        pp, prover = _check(CounterCircuit([FR(3), FR(4), FR(9), FR(10)]))
        with pytest.raises(ValueError):
            quotient_polynomial(pp, prover)

    def test_constraint_poly_vanishes_on_domain(self):
        pp, prover = _check(CounterCircuit([FR(1), FR(2), FR(3), FR(4)]))
        c = constraint_polynomial(pp, prover, FR(7))
        for point in pp.domain:
            assert c.evaluate(point) == FR(0)

    def test_shape_mismatch(self):
        pp = preprocess(3, CounterCircuit())
        prover = MockProver.run(4, CounterCircuit([FR(1), FR(2), FR(3), FR(4)]), [[]])
        with pytest.raises(ValueError):
            is_divisible(pp, prover)

    def test_small_field(self):
        good = SmallCounterCircuit([95, 96, 0, 1])
        pp, prover = _check(good)
        assert prover.verify() == []
        assert is_divisible(pp, prover)

        bad = SmallCounterCircuit([95, 96, 1, 2])
        pp, prover = _check(bad)
        assert not is_divisible(pp, prover)


# ─────────────────────────────────────────────────────────────────────
# 복사 제약
# ─────────────────────────────────────────────────────────────────────

class TestCopyTerms:
    def _run(self, value, public):
        circuit = PublicCopyCircuit(value)
        pp = preprocess(3, circuit)
        prover = MockProver.run(3, circuit, [[0, public]])
        return pp, prover

    def test_preprocessed_copy(self):
        pp, _ = self._run(FR(5), FR(5))
        ((left, left_row), (right, right_row)), = pp.copies
        assert (repr(left), left_row, repr(right), right_row) == ("x", 2, "pub", 1)

    def test_matching_public_divisible(self):
        pp, prover = self._run(FR(5), FR(5))
        assert prover.verify() == []
        assert is_divisible(pp, prover)

    def test_mismatched_public_not_divisible(self):
        pp, prover = self._run(FR(5), FR(6))
        assert len(prover.verify()) == 1
        assert not is_divisible(pp, prover)

    def test_copy_term_vanishes_on_domain(self):
        pp, prover = self._run(FR(5), FR(5))
        c = constraint_polynomial(pp, prover, FR(3))
        for point in pp.domain:
            assert c.evaluate(point) == FR(0)

    def test_copy_term_nonzero_at_left_row(self):
        pp, prover = self._run(FR(5), FR(6))
        c = constraint_polynomial(pp, prover, FR(1))
        # 첫 항의 계수는 α⁰ = 1이므로 x[2] - pub[1] 이 그대로 남는다
        assert c.evaluate(pp.domain[2]) == FR(-1)
        assert c.evaluate(pp.domain[1]) == FR(0)
