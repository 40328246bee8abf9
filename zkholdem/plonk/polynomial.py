"""
기반 모듈: 다항식(Polynomial) 클래스 및 FFT
=============================================

회로의 열(column)과 제약(constraint)을 다항식으로 다루기 위한 도구.

**Polynomial 클래스**:
  계수(coefficient) 표현 기반 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  산술 연산자(+, -, *, 스칼라곱)와 평가(evaluation)를 지원한다.
  계수는 임의의 소수체 원소일 수 있다 (기본값: FR).

**FFT/IFFT (Number Theoretic Transform)**:
  유한체 위의 다항식을 평가 표현 ↔ 계수 표현으로 변환.
  - FFT: 계수 → n개의 단위근에서의 평가값
  - IFFT: 평가값 → 계수 (보간)
  재귀적 Cooley-Tukey radix-2 알고리즘을 사용한다.

**회전(rotation)**:
  p(x) → p(ωʳ·x). 열 다항식에서 "r행 뒤의 셀"을 질의할 때 사용한다.

사용 예시:
    >>> from zkholdem.plonk.polynomial import Polynomial, fft, ifft
    >>> p = Polynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))  # 1 + 4 + 12 = FR(17)
"""

from py_ecc.fields.field_elements import FQ

from zkholdem.plonk.field import FR, field_of


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """유한체 위의 다항식.

    계수 리스트로 표현: coeffs = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...

    회로 검사에서의 역할:
    - 열 다항식 card_i(x), num_of_pair(x), ...: 각 열의 셀 값을 인코딩
    - 셀렉터 다항식 q_flush(x), ...: 어느 행에서 게이트가 켜지는지 인코딩
    - 결합 제약 다항식 C(x): 모든 게이트 제약의 α-결합
    - 몫 다항식 t(x) = C(x) / Z_H(x)

    예시:
        >>> p = Polynomial([FR(1), FR(2)])  # 1 + 2x
        >>> q = Polynomial([FR(3), FR(4)])  # 3 + 4x
        >>> r = p * q                        # 3 + 10x + 8x²
    """

    def __init__(self, coeffs=None, field=None):
        """다항식 생성.

        Args:
            coeffs: 필드 원소(또는 정수)의 리스트 [c₀, c₁, ...].
                    None이면 영 다항식(0)을 생성한다.
            field: 필드 클래스. None이면 첫 계수에서 추론하고,
                   추론할 수 없으면 FR을 사용한다.
        """
        if field is None:
            field = FR
            for c in coeffs or []:
                if isinstance(c, FQ):
                    field = type(c)
                    break
        self.field = field
        if not coeffs:
            self.coeffs = [field(0)]
        else:
            self.coeffs = [c if isinstance(c, field) else field(c) for c in coeffs]
        self._trim()

    def _trim(self):
        """최고차 계수가 0인 항을 제거하여 정규화한다.

        예: [1, 2, 0, 0] → [1, 2]  (1 + 2x)
        """
        while len(self.coeffs) > 1 and self.coeffs[-1] == 0:
            self.coeffs.pop()

    def _coerce(self, other):
        if isinstance(other, Polynomial):
            return other
        return Polynomial([other], field=self.field)

    @property
    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    def is_zero(self):
        """영 다항식인지 확인."""
        return len(self.coeffs) == 1 and self.coeffs[0] == 0

    def evaluate(self, point):
        """다항식을 주어진 점에서 평가한다 (Horner's method).

        Args:
            point: 평가할 필드 원소 (또는 정수)

        Returns:
            p(point) 값
        """
        if not isinstance(point, self.field):
            point = self.field(point)
        result = self.field(0)
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def __add__(self, other):
        """다항식 덧셈: p(x) + q(x)."""
        other = self._coerce(other)
        max_len = max(len(self.coeffs), len(other.coeffs))
        zero = self.field(0)
        result = []
        for i in range(max_len):
            a = self.coeffs[i] if i < len(self.coeffs) else zero
            b = other.coeffs[i] if i < len(other.coeffs) else zero
            result.append(a + b)
        return Polynomial(result, field=self.field)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        """다항식 뺄셈: p(x) - q(x)."""
        return self + (-self._coerce(other))

    def __rsub__(self, other):
        return self._coerce(other) - self

    def __neg__(self):
        """다항식 부호 반전: -p(x)."""
        return Polynomial([-c for c in self.coeffs], field=self.field)

    def __mul__(self, other):
        """다항식 곱셈: p(x) · q(x) 또는 스칼라곱.

        다항식 × 다항식: O(n²) 나이브 곱셈
        다항식 × 스칼라: 각 계수에 스칼라를 곱함
        """
        if not isinstance(other, Polynomial):
            scalar = other if isinstance(other, FQ) else self.field(other)
            return Polynomial([c * scalar for c in self.coeffs], field=self.field)
        result = [self.field(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == 0:
                continue
            for j, b in enumerate(other.coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(result, field=self.field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        """다항식 동등 비교."""
        if isinstance(other, (int, FQ)):
            other = self._coerce(other)
        if not isinstance(other, Polynomial):
            return False
        return [int(c) for c in self.coeffs] == [int(c) for c in other.coeffs]

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == 0:
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def __len__(self):
        """계수 개수 반환 (차수 + 1)."""
        return len(self.coeffs)

    def rotate(self, omega_power):
        """p(x) → p(ωʳ·x) 변환.

        계수 cᵢ에 (ωʳ)ⁱ를 곱한다. 도메인 위에서 q(ωⁱ) = p(ωⁱ⁺ʳ)가 된다.

        Args:
            omega_power: ωʳ (필드 원소)

        Returns:
            Polynomial: p(ωʳ·x)
        """
        shifted = []
        power = self.field(1)
        for c in self.coeffs:
            shifted.append(c * power)
            power = power * omega_power
        return Polynomial(shifted, field=self.field)

    def divide_by_vanishing(self, n):
        """소거 다항식 Z_H(x) = x^n - 1 로 나눈다.

        t(x) = C(x) / Z_H(x)
        여기서 C(x)는 모든 게이트 제약을 결합한 다항식.

        나머지가 0이 아니면 오류 (제약이 만족되지 않음).

        Args:
            n: 도메인 크기 (Z_H(x) = x^n - 1의 n)

        Returns:
            Polynomial: 몫 다항식 t(x)

        Raises:
            ValueError: 나머지가 0이 아닌 경우
        """
        q, r = poly_div(self, Polynomial.vanishing(n, field=self.field))
        if not r.is_zero():
            raise ValueError("소거 다항식으로 나누어 떨어지지 않습니다 (제약 불만족)")
        return q

    @classmethod
    def zero(cls, field=FR):
        """영 다항식 p(x) = 0."""
        return cls([field(0)], field=field)

    @classmethod
    def one(cls, field=FR):
        """상수 다항식 p(x) = 1."""
        return cls([field(1)], field=field)

    @classmethod
    def vanishing(cls, n, field=FR):
        """소거 다항식 Z_H(x) = x^n - 1.

        도메인 H = {1, ω, ..., ω^(n-1)} 위의 모든 점에서 0이 되는 다항식.

        Args:
            n: 도메인 크기
            field: 필드 클래스

        Returns:
            Polynomial: x^n - 1
        """
        coeffs = [field(0)] * (n + 1)
        coeffs[0] = field(-1)
        coeffs[n] = field(1)
        return cls(coeffs, field=field)

    @classmethod
    def from_evaluations(cls, evals, omega):
        """평가값에서 다항식을 복원한다 (IFFT 사용).

        도메인 {1, ω, ω², ..., ω^(n-1)}에서의 평가값이 주어지면,
        이 값들을 보간하는 유일한 (n-1)차 이하 다항식을 반환한다.

        Args:
            evals: [p(1), p(ω), p(ω²), ...] 필드 원소 리스트
            omega: n차 원시 단위근

        Returns:
            Polynomial: 보간된 다항식
        """
        field = field_of(omega)
        coeffs = ifft([v if isinstance(v, field) else field(v) for v in evals], omega)
        return cls(coeffs, field=field)


# ─────────────────────────────────────────────────────────────────────
# FFT / IFFT (Number Theoretic Transform)
# ─────────────────────────────────────────────────────────────────────

def fft(coeffs, omega):
    """Fast Fourier Transform (NTT): 계수 → 평가값.

    재귀적 Cooley-Tukey radix-2 알고리즘.

    알고리즘:
        1. n=1이면 계수를 그대로 반환
        2. 짝수/홀수 인덱스로 분리
        3. 재귀 호출: FFT(even, ω²), FFT(odd, ω²)
        4. 버터플라이 결합: y[k] = even[k] + ω^k · odd[k]
                           y[k+n/2] = even[k] - ω^k · odd[k]

    Args:
        coeffs: [c₀, c₁, ..., c_{n-1}] (길이는 2의 거듭제곱)
        omega: n차 원시 단위근

    Returns:
        list: [p(1), p(ω), p(ω²), ..., p(ω^{n-1})]
    """
    field = field_of(omega)
    n = len(coeffs)
    if n == 1:
        return [coeffs[0] if isinstance(coeffs[0], field) else field(coeffs[0])]

    even = [coeffs[i] for i in range(0, n, 2)]
    odd = [coeffs[i] for i in range(1, n, 2)]

    omega_sq = omega * omega
    even_vals = fft(even, omega_sq)
    odd_vals = fft(odd, omega_sq)

    result = [field(0)] * n
    omega_k = field(1)
    half = n // 2
    for k in range(half):
        t = omega_k * odd_vals[k]
        result[k] = even_vals[k] + t
        result[k + half] = even_vals[k] - t
        omega_k = omega_k * omega

    return result


def ifft(evals, omega):
    """Inverse FFT (INTT): 평가값 → 계수.

    역 단위근 ω^{-1}로 FFT를 수행한 후 n으로 나눈다.

    Args:
        evals: [p(1), p(ω), ..., p(ω^{n-1})]
        omega: n차 원시 단위근

    Returns:
        list: [c₀, c₁, ..., c_{n-1}] 계수 리스트
    """
    field = field_of(omega)
    n = len(evals)
    omega_inv = field(1) / omega
    coeffs = fft(evals, omega_inv)
    n_inv = field(1) / field(n)
    return [c * n_inv for c in coeffs]


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈 (Polynomial Long Division)
# ─────────────────────────────────────────────────────────────────────

def poly_div(a, b):
    """다항식 나눗셈: a(x) = b(x) · q(x) + r(x).

    긴 나눗셈(long division) 알고리즘으로 몫 q(x)와 나머지 r(x)를 계산한다.

    Args:
        a: 피제수 다항식 (Polynomial)
        b: 제수 다항식 (Polynomial)

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        ValueError: 제수가 영 다항식인 경우

    예시:
        >>> a = Polynomial([FR(-1), FR(0), FR(1)])  # x² - 1
        >>> b = Polynomial([FR(-1), FR(1)])          # x - 1
        >>> q, r = poly_div(a, b)
        >>> q  # x + 1
        >>> r  # 0
    """
    if b.is_zero():
        raise ValueError("0으로 나눌 수 없습니다")

    field = a.field
    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1

    if deg_a < deg_b:
        return Polynomial.zero(field), Polynomial(remainder, field=field)

    quotient = [field(0)] * (deg_a - deg_b + 1)
    lead_inv = field(1) / divisor[-1]

    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        quotient[i] = coeff
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(quotient, field=field), Polynomial(remainder, field=field)
