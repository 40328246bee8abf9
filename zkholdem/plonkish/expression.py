"""
다항식 제약 표현식 (Expression)
================================

게이트 제약은 열(column) 질의, 셀렉터, 상수를 +, -, * 로 조합한 식이다.
예: q_two_pair · (2 - num_of_pair)

**노드 종류**:
  | 노드                | 의미                                  | 차수 |
  |---------------------|---------------------------------------|------|
  | Constant            | 필드 상수 (정수 임베딩)               | 0    |
  | SelectorExpression  | 셀렉터 q (행마다 0 또는 1)            | 1    |
  | AdviceQuery         | witness 열의 (현재행 + 회전) 셀       | 1    |
  | InstanceQuery       | 공개 열의 (현재행 + 회전) 셀          | 1    |
  | Negated / Sum / Product | -a, a + b, a · b                  | 합성 |

**평가 환경(env)**:
  evaluate(env)는 env의 메서드로 잎(leaf)을 평가한다.
    env.constant(value), env.selector(selector),
    env.advice(column, rotation), env.instance(column, rotation)
  env가 필드 원소를 돌려주면 한 행에서의 값이 되고,
  Polynomial을 돌려주면 제약 다항식 전체가 된다.

사용 예시:
    >>> expr = q * (Constant(2) - num_of_pair)
    >>> expr.degree()  # 2
"""


class Rotation:
    """현재 행으로부터의 상대 오프셋."""

    __slots__ = ("offset",)

    def __init__(self, offset=0):
        self.offset = offset

    @classmethod
    def cur(cls):
        return cls(0)

    @classmethod
    def next(cls):
        return cls(1)

    @classmethod
    def prev(cls):
        return cls(-1)

    def __eq__(self, other):
        return isinstance(other, Rotation) and self.offset == other.offset

    def __hash__(self):
        return hash(("rotation", self.offset))

    def __repr__(self):
        return f"Rotation({self.offset})"


def _to_expression(value):
    if isinstance(value, Expression):
        return value
    return Constant(value)


class Expression:
    """제약 표현식 트리의 기반 클래스."""

    def evaluate(self, env):
        raise NotImplementedError

    def degree(self):
        raise NotImplementedError

    def children(self):
        return ()

    def walk(self):
        """트리의 모든 노드를 전위 순회한다."""
        yield self
        for child in self.children():
            yield from child.walk()

    def queried_selectors(self):
        """식이 참조하는 셀렉터 목록 (중복 제거, 등장 순서)."""
        found = []
        for node in self.walk():
            if isinstance(node, SelectorExpression) and node.selector not in found:
                found.append(node.selector)
        return found

    def queried_advice(self):
        """식이 참조하는 (advice 열, 회전) 목록."""
        found = []
        for node in self.walk():
            if isinstance(node, AdviceQuery):
                key = (node.column, node.rotation)
                if key not in found:
                    found.append(key)
        return found

    def __add__(self, other):
        return Sum(self, _to_expression(other))

    def __radd__(self, other):
        return Sum(_to_expression(other), self)

    def __sub__(self, other):
        return Sum(self, Negated(_to_expression(other)))

    def __rsub__(self, other):
        return Sum(_to_expression(other), Negated(self))

    def __mul__(self, other):
        return Product(self, _to_expression(other))

    def __rmul__(self, other):
        return Product(_to_expression(other), self)

    def __neg__(self):
        return Negated(self)


class Constant(Expression):
    def __init__(self, value):
        self.value = value

    def evaluate(self, env):
        return env.constant(self.value)

    def degree(self):
        return 0

    def __repr__(self):
        return str(int(self.value))


class SelectorExpression(Expression):
    def __init__(self, selector):
        self.selector = selector

    def evaluate(self, env):
        return env.selector(self.selector)

    def degree(self):
        return 1

    def __repr__(self):
        return repr(self.selector)


class AdviceQuery(Expression):
    def __init__(self, column, rotation):
        self.column = column
        self.rotation = rotation

    def evaluate(self, env):
        return env.advice(self.column, self.rotation)

    def degree(self):
        return 1

    def __repr__(self):
        if self.rotation.offset == 0:
            return repr(self.column)
        return f"{self.column!r}[{self.rotation.offset:+d}]"


class InstanceQuery(Expression):
    def __init__(self, column, rotation):
        self.column = column
        self.rotation = rotation

    def evaluate(self, env):
        return env.instance(self.column, self.rotation)

    def degree(self):
        return 1

    def __repr__(self):
        if self.rotation.offset == 0:
            return repr(self.column)
        return f"{self.column!r}[{self.rotation.offset:+d}]"


class Negated(Expression):
    def __init__(self, inner):
        self.inner = inner

    def evaluate(self, env):
        return -self.inner.evaluate(env)

    def degree(self):
        return self.inner.degree()

    def children(self):
        return (self.inner,)

    def __repr__(self):
        return f"-{self.inner!r}"


class Sum(Expression):
    def __init__(self, left, right):
        self.left = left
        self.right = right

    def evaluate(self, env):
        return self.left.evaluate(env) + self.right.evaluate(env)

    def degree(self):
        return max(self.left.degree(), self.right.degree())

    def children(self):
        return (self.left, self.right)

    def __repr__(self):
        if isinstance(self.right, Negated):
            return f"({self.left!r} - {self.right.inner!r})"
        return f"({self.left!r} + {self.right!r})"


class Product(Expression):
    def __init__(self, left, right):
        self.left = left
        self.right = right

    def evaluate(self, env):
        return self.left.evaluate(env) * self.right.evaluate(env)

    def degree(self):
        return self.left.degree() + self.right.degree()

    def children(self):
        return (self.left, self.right)

    def __repr__(self):
        return f"{self.left!r} * {self.right!r}"
