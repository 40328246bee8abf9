"""
기반 모듈: 유한체(Finite Field) 및 단위근
===========================================

이 모듈은 핸드 검사 회로 전체에서 사용되는 기본 대수적 도구를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field). 회로의 모든 셀 값과
  제약 다항식 평가에서 사용되는 기본 산술 단위이다.
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - p - 1 = 2^28 × m (m은 홀수) → 최대 2^28차 단위근(root of unity)을 지원

**필드 일반성**:
  회로 스키마는 특정 필드에 묶이지 않는다. py_ecc의 FQ 인터페이스
  (정수 임베딩, +, -, *, /, **, ==, int())를 따르는 클래스라면 어떤 소수체든
  사용할 수 있다. prime_field()로 작은 소수체를 만들어 테스트에 쓴다.

**단위근(Roots of Unity)**:
  FFT/IFFT와 다항식 보간에 필수적인 n차 원시 단위근.
  도메인 H = {1, ω, ω², ..., ω^(n-1)}의 각 원소가 회로의 한 행(row)이다.

사용 예시:
    >>> from zkholdem.plonk.field import FR, prime_field
    >>> a = FR(3)
    >>> F97 = prime_field(97)
    >>> F97(50) + F97(50)  # 3
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    bn128.curve_order (≈ 2^254) 위의 모듈러 산술을 지원한다.
    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    속성:
        field_modulus: bn128 곡선 위수 (소수 p)

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order


def prime_field(modulus, name=None):
    """주어진 소수 위수를 갖는 새로운 필드 클래스를 만든다.

    소수성 검사는 하지 않는다. 호출자가 소수를 넘겨야 한다.

    Args:
        modulus: 소수 p
        name: 클래스 이름 (기본값: "F{p}")

    Returns:
        type: FQ를 상속한 필드 클래스

    예시:
        >>> F97 = prime_field(97)
        >>> F97(96) + F97(1) == F97(0)  # True
    """
    if modulus < 2:
        raise ValueError(f"필드 위수는 2 이상이어야 합니다: {modulus}")
    return type(name or f"F{modulus}", (FQ,), {"field_modulus": modulus})


def field_of(value, default=FR):
    """값이 속한 필드 클래스를 반환한다. 정수이면 default."""
    if isinstance(value, FQ):
        return type(value)
    return default


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

def get_root_of_unity(n, field=FR):
    """n차 원시 단위근(primitive n-th root of unity) ω를 반환한다.

    ω^n = 1이고, ω^k ≠ 1 (0 < k < n)인 원소 ω를 찾는다.

    n이 2의 거듭제곱이므로 ω^(n/2) ≠ 1 이면 ω는 원시 단위근이다.
    후보 g = 2, 3, 5, ...에 대해 ω = g^((p-1)/n)을 계산하여
    처음으로 원시 조건을 만족하는 값을 사용한다.

    Args:
        n: 단위근의 차수 (2의 거듭제곱이어야 하며, p - 1을 나누어야 함)
        field: 필드 클래스 (기본값: FR)

    Returns:
        field 원소: n차 원시 단위근

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 p - 1을 나누지 않을 때

    예시:
        >>> omega = get_root_of_unity(4)
        >>> omega ** 4 == FR(1)  # True
        >>> omega ** 2 != FR(1)  # True (원시 단위근)
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    modulus = field.field_modulus
    if (modulus - 1) % n != 0:
        raise ValueError(f"n은 p - 1을 나누어야 합니다: n={n}, p={modulus}")
    if n == 1:
        return field(1)

    exponent = (modulus - 1) // n
    for g in range(2, modulus):
        # ω = g^((p-1)/n)이면 ω^n = g^(p-1) = 1 (페르마 소정리)
        omega = field(g) ** exponent
        if omega ** (n // 2) != field(1):
            return omega
    raise ValueError(f"{n}차 원시 단위근을 찾을 수 없습니다 (p={modulus})")


def get_roots_of_unity(n, field=FR):
    """n개의 단위근 리스트 [1, ω, ω², ..., ω^(n-1)]을 반환한다.

    이 리스트는 회로의 평가 도메인 H를 정의한다.
    i번째 원소 ωⁱ가 회로의 i번째 행에 대응한다.

    Args:
        n: 도메인 크기 (2의 거듭제곱)
        field: 필드 클래스 (기본값: FR)

    Returns:
        list: [ω^0, ω^1, ..., ω^(n-1)]
    """
    omega = get_root_of_unity(n, field)
    roots = []
    current = field(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
