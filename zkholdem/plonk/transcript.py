"""
Fiat-Shamir Transcript
=======================

비대화식(non-interactive) 챌린지 생성을 위한 Fiat-Shamir 해싱 구현.

**Fiat-Shamir 변환이란?**
  Verifier가 보내는 랜덤 챌린지를 해시 함수로 시뮬레이션한다:
  - 지금까지의 모든 메시지(공개 입력 등)를 해시하여 챌린지를 직접 생성
  - 같은 순서로 데이터를 추가하면 누구나 같은 챌린지를 재구성할 수 있음

**핸드 검사에서의 사용**:
  여러 게이트 제약을 하나의 다항식으로 결합할 때 쓰는 α 챌린지.
  C(x) = Σⱼ αʲ · cⱼ(x)

사용 예시:
    >>> t = Transcript()
    >>> t.append_scalar(b"table_card", FR(12))
    >>> alpha = t.challenge_scalar(b"alpha")
"""

import hashlib

from zkholdem.plonk.field import FR


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    해시 상태를 누적하여 결정론적이면서 예측 불가능한 챌린지를 생성한다.

    속성:
        state: 현재까지 누적된 해시 입력 바이트열
        field: 챌린지가 속하는 필드 클래스
    """

    def __init__(self, label=b"zkholdem", field=FR):
        """트랜스크립트를 초기화한다.

        Args:
            label: 프로토콜 도메인 분리용 레이블
            field: 챌린지 필드 (기본값: FR)
        """
        self.field = field
        self.state = bytearray()
        self.state.extend(label)

    def append_scalar(self, label, scalar):
        """필드 스칼라 값을 트랜스크립트에 추가한다.

        Args:
            label: 바이트열 레이블 (예: b"instance")
            scalar: 필드 원소 또는 정수
        """
        self.state.extend(label)
        # 32바이트 빅엔디안으로 직렬화
        val = int(scalar) % self.field.field_modulus
        self.state.extend(val.to_bytes(32, "big"))

    def challenge_scalar(self, label):
        """트랜스크립트로부터 챌린지 스칼라를 생성한다.

        현재 상태를 SHA-256으로 해싱하여 필드 원소를 도출한다.
        생성된 해시는 상태에 다시 추가된다 (체이닝).

        Args:
            label: 바이트열 레이블 (예: b"alpha")

        Returns:
            챌린지 스칼라 (field 원소)
        """
        self.state.extend(label)
        h = hashlib.sha256(bytes(self.state)).digest()
        challenge = self.field(int.from_bytes(h, "big") % self.field.field_modulus)
        self.state.extend(h)
        return challenge
