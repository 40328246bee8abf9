"""
witness 값 래퍼: Value
======================

회로는 두 가지 상황에서 합성(synthesize)된다.

  - 형태(shape)만 필요한 경우: 전처리 단계. 셀 값은 아직 모른다.
  - 실제 witness가 있는 경우: 증명/검사 단계.

Value는 "알려진 값" 또는 "아직 모르는 값"을 명시적으로 표현한다.
같은 synthesize 코드가 두 상황 모두에서 동작하게 해 준다.

사용 예시:
    >>> v = Value.known(FR(7))
    >>> v.map(lambda x: x + 1).assign()  # FR(8)
    >>> Value.unknown().is_known()        # False
"""

from zkholdem.plonkish.errors import SynthesisError


class Value:
    """알려졌거나(known) 알려지지 않은(unknown) 셀 값."""

    __slots__ = ("_inner", "_known")

    def __init__(self, inner=None, known=False):
        self._inner = inner
        self._known = known

    @classmethod
    def known(cls, inner):
        return cls(inner, True)

    @classmethod
    def unknown(cls):
        return cls()

    @classmethod
    def wrap(cls, value):
        """Value가 아니면 known 값으로 감싼다. None은 unknown."""
        if isinstance(value, Value):
            return value
        if value is None:
            return cls.unknown()
        return cls.known(value)

    def is_known(self):
        return self._known

    def map(self, fn):
        """알려진 값에 fn을 적용한다. unknown은 그대로 unknown."""
        if not self._known:
            return Value.unknown()
        return Value.known(fn(self._inner))

    def assign(self):
        """내부 값을 꺼낸다.

        Raises:
            SynthesisError: 값이 unknown일 때
        """
        if not self._known:
            raise SynthesisError("알 수 없는 값(unknown)은 할당할 수 없습니다")
        return self._inner

    def __repr__(self):
        if not self._known:
            return "Value(unknown)"
        return f"Value({self._inner!r})"
