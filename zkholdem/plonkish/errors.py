"""
백엔드 오류 분류
================

스키마 선언과 셀 할당 중에 백엔드가 던지는 예외.
회로 코드는 이 예외를 잡지 않고 호출자에게 그대로 전달한다.

  PlonkishError
  ├── ColumnLimitExceeded       열을 더 할당할 수 없음 (스키마 단계)
  ├── ColumnNotInSchema         스키마에 선언되지 않은 열/셀렉터 사용
  ├── CellAlreadyAssigned       같은 셀에 두 번 쓰기
  ├── NotEnoughRows             도메인 밖의 행 사용
  ├── ColumnNotEqualityEnabled  equality가 켜지지 않은 열에 복사 제약
  └── SynthesisError            witness 생성 중 값이 "unknown"
"""


class PlonkishError(Exception):
    """백엔드 오류의 기반 클래스."""


class ColumnLimitExceeded(PlonkishError):
    def __init__(self, limit):
        super().__init__(f"열 할당 한도를 초과했습니다 (최대 {limit}개)")
        self.limit = limit


class ColumnNotInSchema(PlonkishError):
    def __init__(self, item):
        super().__init__(f"스키마에 선언되지 않은 항목입니다: {item!r}")
        self.item = item


class CellAlreadyAssigned(PlonkishError):
    def __init__(self, column, row, region=None):
        where = f" (region: {region})" if region else ""
        super().__init__(f"이미 할당된 셀입니다: {column!r}, row {row}{where}")
        self.column = column
        self.row = row
        self.region = region


class NotEnoughRows(PlonkishError):
    def __init__(self, row, n):
        super().__init__(f"행 {row}은(는) 도메인 크기 {n}을(를) 벗어납니다")
        self.row = row
        self.n = n


class ColumnNotEqualityEnabled(PlonkishError):
    def __init__(self, column):
        super().__init__(f"equality가 활성화되지 않은 열입니다: {column!r}")
        self.column = column


class SynthesisError(PlonkishError):
    """witness 생성 중 알 수 없는(unknown) 값을 할당하려 할 때."""
