"""
MockProver: 행 단위 만족성 검사기
===================================

실제 증명을 만들지 않고, 회로의 모든 제약을 행마다 직접 평가한다.
회로 개발과 테스트에서 "이 witness가 제약을 만족하는가?"를 판단하는 도구.

**검사 항목**:
  1. 게이트 제약: 모든 행 i, 모든 게이트 g, g의 모든 식 p에 대해
     p(i) == 0 이어야 한다. 셀렉터가 꺼진 행에서는 식이 자동으로 0.
  2. 미할당 셀: 게이트가 켜진 행에서 그 게이트가 질의하는 advice 셀이
     할당되지 않았다면 실패.
  3. 복사 제약: 묶인 두 셀의 값이 같아야 한다 (instance 열 포함).

**할당 단계에서 즉시 거부되는 쓰기** (예외):
  - 같은 셀에 두 번 쓰기 → CellAlreadyAssigned
  - 스키마 밖의 열/셀렉터 → ColumnNotInSchema
  - 도메인 밖의 행 → NotEnoughRows
  - unknown 값 → SynthesisError

사용 예시:
    >>> prover = MockProver.run(3, circuit, instances)
    >>> prover.verify()            # [] 이면 만족
    >>> prover.assert_satisfied()  # 실패 시 AssertionError
"""

import logging

from zkholdem.plonkish.constraint_system import ConstraintSystem, ADVICE
from zkholdem.plonkish.errors import (
    CellAlreadyAssigned,
    ColumnNotEqualityEnabled,
    ColumnNotInSchema,
    NotEnoughRows,
)
from zkholdem.plonkish.layouter import Assignment, Layouter

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# 검사 실패 종류
# ─────────────────────────────────────────────────────────────────────

class VerifyFailure:
    """verify()가 돌려주는 실패 항목의 기반 클래스."""

    kind = "failure"

    def __repr__(self):
        return f"<{type(self).__name__}: {self}>"


class ConstraintNotSatisfied(VerifyFailure):
    kind = "constraint"

    def __init__(self, gate, index, name, row, cell_values):
        self.gate = gate
        self.index = index
        self.name = name
        self.row = row
        self.cell_values = cell_values

    def __str__(self):
        label = f" ('{self.name}')" if self.name else ""
        cells = ", ".join(f"{k}={v}" for k, v in self.cell_values.items())
        return (f"gate '{self.gate}' constraint {self.index}{label} "
                f"not satisfied at row {self.row}: {cells}")


class CellNotAssigned(VerifyFailure):
    kind = "unassigned"

    def __init__(self, gate, column, row):
        self.gate = gate
        self.column = column
        self.row = row

    def __str__(self):
        return f"gate '{self.gate}' queries unassigned cell {self.column!r} at row {self.row}"


class PermutationFailure(VerifyFailure):
    kind = "permutation"

    def __init__(self, left, right):
        self.left = left
        self.right = right

    def __str__(self):
        (lc, lr), (rc, rr) = self.left, self.right
        return f"copy constraint {lc!r}@{lr} == {rc!r}@{rr} violated"


# ─────────────────────────────────────────────────────────────────────
# 행 평가 환경
# ─────────────────────────────────────────────────────────────────────

class _RowEnv:
    """Expression.evaluate가 한 행의 필드 값을 얻도록 하는 환경."""

    def __init__(self, prover, row):
        self.prover = prover
        self.row = row
        self.field = prover.field

    def _rotated(self, rotation):
        return (self.row + rotation.offset) % self.prover.n

    def constant(self, value):
        return self.field(int(value))

    def selector(self, selector):
        enabled = self.prover.selectors[selector][self.row]
        return self.field(1) if enabled else self.field(0)

    def advice(self, column, rotation):
        value = self.prover.advice[column][self._rotated(rotation)]
        return self.field(0) if value is None else value

    def instance(self, column, rotation):
        return self.prover.instances[column][self._rotated(rotation)]


# ─────────────────────────────────────────────────────────────────────
# MockProver
# ─────────────────────────────────────────────────────────────────────

class MockProver(Assignment):
    """모든 셀을 메모리에 기록하고 제약을 직접 평가하는 백엔드.

    속성:
        k, n: 도메인 크기 n = 2^k
        cs: ConstraintSystem
        selectors: 셀렉터 → [bool] * n
        advice: advice 열 → [값 또는 None] * n
        instances: instance 열 → [값] * n (0으로 패딩)
        copies: [((열, 행), (열, 행))] 복사 제약 목록
    """

    def __init__(self, k, cs, instances):
        self.k = k
        self.n = 1 << k
        self.cs = cs
        self.field = cs.field
        self.selectors = {s: [False] * self.n for s in cs.selectors}
        self.advice = {c: [None] * self.n for c in cs.advice_columns}
        self.instances = {}
        for column, values in zip(cs.instance_columns, instances):
            padded = [self.field(int(v)) for v in values]
            padded += [self.field(0)] * (self.n - len(padded))
            self.instances[column] = padded
        self.copies = []
        self.current_region = None

    @classmethod
    def run(cls, k, circuit, instances):
        """회로를 선언하고 합성한 MockProver를 반환한다.

        Args:
            k: 도메인 크기 지수 (n = 2^k 행)
            circuit: Circuit 객체
            instances: instance 열마다 하나씩의 값 리스트

        Raises:
            ValueError: instance 열 개수가 스키마와 다를 때
            NotEnoughRows: instance 값이 n개를 넘을 때
        """
        cs = ConstraintSystem(field=circuit.field)
        config = circuit.configure(cs, circuit.params())

        if len(instances) != len(cs.instance_columns):
            raise ValueError(
                f"instance 열 수가 맞지 않습니다: "
                f"스키마 {len(cs.instance_columns)}개, 입력 {len(instances)}개"
            )
        n = 1 << k
        for values in instances:
            if len(values) > n:
                raise NotEnoughRows(len(values) - 1, n)

        prover = cls(k, cs, instances)
        circuit.synthesize(config, Layouter(prover, cs))
        return prover

    # ── Assignment 구현 ──

    def _check_row(self, row):
        if not 0 <= row < self.n:
            raise NotEnoughRows(row, self.n)

    def enter_region(self, name):
        self.current_region = name

    def exit_region(self):
        self.current_region = None

    def enable_selector(self, annotation, selector, row):
        if not self.cs.owns(selector):
            raise ColumnNotInSchema(selector)
        self._check_row(row)
        self.selectors[selector][row] = True

    def assign_advice(self, annotation, column, row, value):
        if column not in self.advice:
            raise ColumnNotInSchema(column)
        self._check_row(row)
        if self.advice[column][row] is not None:
            raise CellAlreadyAssigned(column, row, self.current_region)
        # 다른 필드의 원소가 넘어와도 이 필드로 임베딩한다
        self.advice[column][row] = self.field(int(value.assign()))

    def copy(self, left_column, left_row, right_column, right_row):
        for column, row in ((left_column, left_row), (right_column, right_row)):
            if not self.cs.owns(column):
                raise ColumnNotInSchema(column)
            if column not in self.cs.equality_columns:
                raise ColumnNotEqualityEnabled(column)
            self._check_row(row)
        self.copies.append(((left_column, left_row), (right_column, right_row)))

    # ── 조회 ──

    def cell_value(self, column, row):
        """셀 값 (미할당 advice는 None)."""
        if column.kind == ADVICE:
            return self.advice[column][row]
        return self.instances[column][row]

    def selector_enabled(self, selector, row):
        return self.selectors[selector][row]

    # ── 검사 ──

    def verify(self):
        """모든 제약을 평가하여 실패 목록을 반환한다. 빈 리스트면 만족."""
        failures = []

        for gate in self.cs.gates:
            queried = gate.queried_advice()
            for row in range(self.n):
                enabled = any(self.selectors[s][row] for s in gate.queried_selectors)
                if enabled:
                    for column, rotation in queried:
                        r = (row + rotation.offset) % self.n
                        if self.advice[column][r] is None:
                            failures.append(CellNotAssigned(gate.name, column, r))

                env = _RowEnv(self, row)
                for index, poly in enumerate(gate.polys):
                    if poly.evaluate(env) != 0:
                        cell_values = {
                            repr(column): int(env.advice(column, rotation))
                            for column, rotation in poly.queried_advice()
                        }
                        failures.append(ConstraintNotSatisfied(
                            gate.name, index, gate.constraint_names[index], row, cell_values,
                        ))

        for left, right in self.copies:
            left_value = self.cell_value(*left)
            right_value = self.cell_value(*right)
            if left_value is None or right_value is None or left_value != right_value:
                failures.append(PermutationFailure(left, right))

        logger.debug("mock prover verify: n=%d, %d gates, %d copies, %d failures",
                     self.n, len(self.cs.gates), len(self.copies), len(failures))
        return failures

    def assert_satisfied(self):
        """제약이 모두 만족되지 않으면 AssertionError."""
        failures = self.verify()
        if failures:
            raise AssertionError(
                "회로 제약이 만족되지 않습니다:\n" + "\n".join(f"  - {f}" for f in failures)
            )
