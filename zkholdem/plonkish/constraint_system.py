"""
제약 시스템 (Constraint System): 스키마 선언 핸들
====================================================

회로의 "모양"을 선언하는 객체. 값은 전혀 다루지 않는다.

**선언 가능한 항목**:
  | 항목            | 메서드               | 의미                              |
  |-----------------|----------------------|-----------------------------------|
  | 셀렉터          | selector()           | 행마다 게이트를 켜고 끄는 0/1 플래그 |
  | advice 열       | advice_column()      | Prover만 아는 witness 열          |
  | instance 열     | instance_column()    | Prover/Verifier 모두 아는 공개 열 |
  | equality        | enable_equality(col) | 복사 제약에 참여 가능한 열        |
  | 게이트          | create_gate(name, f) | 셀렉터가 켜진 행에서 0이어야 하는 식들 |

**게이트 선언 방식**:
  create_gate는 VirtualCells(meta)를 받아 식 리스트를 돌려주는 함수를 받는다.

    >>> cs.create_gate("two pair", lambda meta: [
    ...     meta.query_selector(q_two_pair)
    ...     * (2 - meta.query_advice(num_of_pair, Rotation.cur()))
    ... ])

  셀렉터 q가 0인 행에서는 q · (...) = 0 이므로 제약이 자동으로 만족된다.

**필드 일반성**:
  ConstraintSystem(field=...)로 필드를 정한다. 식 안의 정수 상수는
  평가 시점에 field(정수)로 임베딩된다.
"""

import logging

from zkholdem.plonk.field import FR
from zkholdem.plonkish.errors import ColumnLimitExceeded, ColumnNotInSchema
from zkholdem.plonkish.expression import (
    Expression,
    Constant,
    Rotation,
    SelectorExpression,
    AdviceQuery,
    InstanceQuery,
)

logger = logging.getLogger(__name__)

ADVICE = "advice"
INSTANCE = "instance"


class Selector:
    """행 단위 0/1 플래그. 같은 시스템이 만든 객체끼리만 같다고 본다."""

    def __init__(self, index, name=None):
        self.index = index
        self.name = name

    def __repr__(self):
        return self.name or f"q[{self.index}]"


class Column:
    """advice 또는 instance 열."""

    def __init__(self, kind, index, name=None):
        self.kind = kind
        self.index = index
        self.name = name

    def __repr__(self):
        return self.name or f"{self.kind}[{self.index}]"


class Gate:
    """이름이 붙은 제약 묶음.

    속성:
        name: 게이트 이름 (예: "flush")
        constraint_names: 제약별 이름 (없으면 None)
        polys: 제약 Expression 리스트
        queried_selectors: 게이트가 참조하는 셀렉터들
    """

    def __init__(self, name, constraint_names, polys, queried_selectors):
        self.name = name
        self.constraint_names = constraint_names
        self.polys = polys
        self.queried_selectors = queried_selectors

    def degree(self):
        return max(p.degree() for p in self.polys)

    def queried_advice(self):
        found = []
        for poly in self.polys:
            for key in poly.queried_advice():
                if key not in found:
                    found.append(key)
        return found

    def __repr__(self):
        return f"Gate({self.name!r}, {len(self.polys)} constraints)"


class VirtualCells:
    """게이트 선언 중에 셀을 질의하는 도우미."""

    def __init__(self, cs):
        self.cs = cs
        self.queried_selectors = []

    def query_selector(self, selector):
        if selector not in self.cs.selectors:
            raise ColumnNotInSchema(selector)
        if selector not in self.queried_selectors:
            self.queried_selectors.append(selector)
        return SelectorExpression(selector)

    def query_advice(self, column, rotation=None):
        if column not in self.cs.advice_columns:
            raise ColumnNotInSchema(column)
        return AdviceQuery(column, rotation or Rotation.cur())

    def query_instance(self, column, rotation=None):
        if column not in self.cs.instance_columns:
            raise ColumnNotInSchema(column)
        return InstanceQuery(column, rotation or Rotation.cur())


class ConstraintSystem:
    """스키마 빌더 핸들.

    회로 정의당 한 번, 하나의 선언 과정에서만 변경된다.

    속성:
        field: 필드 클래스
        selectors, advice_columns, instance_columns: 선언 순서대로의 리스트
        equality_columns: equality가 활성화된 열
        gates: Gate 리스트
    """

    def __init__(self, field=FR, max_columns=None):
        self.field = field
        self.max_columns = max_columns
        self.selectors = []
        self.advice_columns = []
        self.instance_columns = []
        self.equality_columns = []
        self.gates = []

    @property
    def num_columns(self):
        return len(self.selectors) + len(self.advice_columns) + len(self.instance_columns)

    def _reserve(self):
        if self.max_columns is not None and self.num_columns >= self.max_columns:
            raise ColumnLimitExceeded(self.max_columns)

    def selector(self, name=None):
        """새 셀렉터를 할당한다."""
        self._reserve()
        selector = Selector(len(self.selectors), name)
        self.selectors.append(selector)
        return selector

    def advice_column(self, name=None):
        """새 advice(witness) 열을 할당한다."""
        self._reserve()
        column = Column(ADVICE, len(self.advice_columns), name)
        self.advice_columns.append(column)
        return column

    def instance_column(self, name=None):
        """새 instance(공개) 열을 할당한다."""
        self._reserve()
        column = Column(INSTANCE, len(self.instance_columns), name)
        self.instance_columns.append(column)
        return column

    def enable_equality(self, column):
        """열이 복사 제약(copy constraint)에 참여할 수 있게 한다."""
        if not self.owns(column):
            raise ColumnNotInSchema(column)
        if column not in self.equality_columns:
            self.equality_columns.append(column)

    def owns(self, item):
        """이 시스템이 선언한 셀렉터/열인지 확인한다."""
        if isinstance(item, Selector):
            return item in self.selectors
        if isinstance(item, Column):
            if item.kind == ADVICE:
                return item in self.advice_columns
            return item in self.instance_columns
        return False

    def create_gate(self, name, constraints_fn):
        """게이트를 등록한다.

        Args:
            name: 게이트 이름
            constraints_fn: VirtualCells를 받아 Expression 리스트
                            (또는 (이름, Expression) 튜플 리스트)를 반환하는 함수

        Returns:
            Gate: 등록된 게이트

        Raises:
            ValueError: 제약이 하나도 없을 때
        """
        meta = VirtualCells(self)
        constraints = list(constraints_fn(meta))
        if not constraints:
            raise ValueError(f"게이트 '{name}'에는 최소 하나의 제약이 필요합니다")

        names = []
        polys = []
        for constraint in constraints:
            if isinstance(constraint, tuple):
                constraint_name, poly = constraint
            else:
                constraint_name, poly = None, constraint
            if not isinstance(poly, Expression):
                poly = Constant(poly)
            names.append(constraint_name)
            polys.append(poly)

        gate = Gate(name, names, polys, meta.queried_selectors)
        self.gates.append(gate)
        logger.debug("gate '%s' registered: %d constraints, degree %d",
                     name, len(polys), gate.degree())
        return gate

    def degree(self):
        """등록된 게이트 중 최대 차수."""
        if not self.gates:
            return 0
        return max(g.degree() for g in self.gates)
