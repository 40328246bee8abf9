"""
영역(Region) 할당과 레이아웃
==============================

witness 값을 열에 배치하는 인터페이스. 백엔드(MockProver, Assembly 등)는
Assignment를 구현하고, 회로 코드는 Layouter와 Region만 사용한다.

**영역(Region)**:
  한 번의 논리적 쓰기 트랜잭션. 영역 안의 오프셋은 0부터 시작하며,
  Layouter가 영역의 실제 시작 행을 정한다.

**배치 규칙 (simple floor planner)**:
  1. 영역 함수를 RegionShape에 대해 한 번 실행하여
     사용하는 열과 행 수를 측정한다.
  2. 그 열들이 모두 비어 있는 첫 행을 시작 행으로 정한다.
     → 서로 다른 열만 쓰는 영역들은 같은 행에 겹쳐 놓일 수 있다.
  3. 실제 Region에 대해 영역 함수를 다시 실행한다.
     enter_region/exit_region은 성공과 예외 모두에서 짝이 맞는다.

  | 영역         | 사용 열                            | 시작 행 |
  |--------------|------------------------------------|---------|
  | hand check   | card_0 .. card_4                   | 0       |
  | hand claim   | 셀렉터들, num_of_pair, num_of_same_kind | 0  |

사용 예시:
    >>> cells = layouter.assign_region("hand check", lambda region: [
    ...     region.assign_advice("cards", column, 0, value)
    ... ])
"""

import logging

from zkholdem.plonkish.value import Value

logger = logging.getLogger(__name__)


class Assignment:
    """백엔드가 구현하는 셀 기록 인터페이스.

    row는 모두 절대 행 번호다. 잘못된 쓰기는 백엔드가
    zkholdem.plonkish.errors의 예외로 거부한다.
    """

    def enter_region(self, name):
        pass

    def exit_region(self):
        pass

    def enable_selector(self, annotation, selector, row):
        raise NotImplementedError

    def assign_advice(self, annotation, column, row, value):
        raise NotImplementedError

    def copy(self, left_column, left_row, right_column, right_row):
        raise NotImplementedError


class AssignedCell:
    """할당이 끝난 셀. 복사 제약에 사용한다."""

    def __init__(self, value, column, row):
        self.value = value
        self.column = column
        self.row = row

    def __repr__(self):
        return f"AssignedCell({self.column!r}, row={self.row}, {self.value!r})"


class RegionShape:
    """영역이 사용하는 열과 행 수를 측정하는 가짜 Region."""

    def __init__(self, name):
        self.name = name
        self.columns = []
        self.row_count = 0

    def _touch(self, column, offset):
        if column not in self.columns:
            self.columns.append(column)
        self.row_count = max(self.row_count, offset + 1)

    def enable_selector(self, annotation, selector, offset):
        self._touch(selector, offset)

    def assign_advice(self, annotation, column, offset, value):
        self._touch(column, offset)
        return AssignedCell(Value.unknown(), column, offset)

    def constrain_equal(self, left, right):
        pass


class Region:
    """Layouter가 정한 시작 행(offset) 위에서 동작하는 영역."""

    def __init__(self, name, assignment, offset):
        self.name = name
        self.assignment = assignment
        self.offset = offset

    def enable_selector(self, annotation, selector, offset):
        """영역 내 offset 행에서 셀렉터를 켠다."""
        self.assignment.enable_selector(annotation, selector, self.offset + offset)

    def assign_advice(self, annotation, column, offset, value):
        """advice 셀에 값을 쓴다.

        Args:
            annotation: 셀 설명 (오류 메시지용)
            column: advice 열
            offset: 영역 내 행 오프셋
            value: Value, 필드 원소 또는 정수 (None은 unknown)

        Returns:
            AssignedCell
        """
        value = Value.wrap(value)
        row = self.offset + offset
        self.assignment.assign_advice(annotation, column, row, value)
        return AssignedCell(value, column, row)

    def constrain_equal(self, left, right):
        """두 할당된 셀이 같은 값이어야 한다는 복사 제약."""
        self.assignment.copy(left.column, left.row, right.column, right.row)


class Layouter:
    """영역을 행에 배치하는 simple floor planner.

    namespace()로 만든 하위 Layouter들은 열 사용 현황을 공유한다.
    """

    def __init__(self, assignment, cs, namespace=None, _columns=None):
        self.assignment = assignment
        self.cs = cs
        self._namespace = list(namespace or [])
        self._columns = {} if _columns is None else _columns

    def namespace(self, name):
        """이름 공간이 하나 더해진 Layouter를 반환한다."""
        return Layouter(self.assignment, self.cs, self._namespace + [name], self._columns)

    def qualified(self, name):
        return "/".join(self._namespace + [name])

    def assign_region(self, name, assignment_fn):
        """영역을 배치하고 assignment_fn(region)의 반환값을 돌려준다.

        assignment_fn은 측정용으로 한 번, 실제 할당용으로 한 번 호출된다.
        """
        name = self.qualified(name)

        shape = RegionShape(name)
        assignment_fn(shape)
        start = max((self._columns.get(column, 0) for column in shape.columns), default=0)

        self.assignment.enter_region(name)
        try:
            result = assignment_fn(Region(name, self.assignment, start))
        finally:
            self.assignment.exit_region()

        for column in shape.columns:
            self._columns[column] = start + shape.row_count
        logger.debug("region '%s' placed at row %d (%d rows, %d columns)",
                     name, start, shape.row_count, len(shape.columns))
        return result

    def constrain_instance(self, cell, instance_column, row):
        """할당된 셀을 instance 열의 row 번째 값과 같도록 묶는다."""
        self.assignment.copy(cell.column, cell.row, instance_column, row)
