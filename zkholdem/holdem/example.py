"""
홀덤 족보 주장 데모: 정직한 주장과 거짓 주장
==============================================

이 스크립트는 족보 검사 회로의 전체 흐름을 시연한다.

실행:
    python -m zkholdem.holdem.example

흐름:
    1. 카드 파싱과 보조 값 계산
    2. 회로 전처리 (셀렉터 다항식)
    3. MockProver로 행 단위 검사
    4. 몫 다항식 검사 (Z_H로 나누어 떨어지는가)
    5. 거짓 주장 (풀하우스라고 우기기)
"""

from zkholdem.config import Settings, setup_logging
from zkholdem.holdem.witness import prepare
from zkholdem.plonkish.mock_prover import MockProver
from zkholdem.plonkish.preprocessor import preprocess
from zkholdem.plonkish.quotient import is_divisible, quotient_polynomial


def check(k, private_cards, table_cards, claim, **options):
    """주장 하나를 준비, 전처리, 합성하여 (prepared, preprocessed, prover)를 반환한다."""
    prepared = prepare(private_cards, table_cards, claim, **options)
    preprocessed = preprocess(k, prepared.circuit)
    prover = MockProver.run(k, prepared.circuit, prepared.instances)
    return prepared, preprocessed, prover


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    k = settings.k

    print("=" * 60)
    print("  Hold'em Hand Claim Demo")
    print("  핸드: 7♥ 7♠ | 보드: 7♦ K♣ K♥ (풀하우스)")
    print("=" * 60)

    # ── 1. 카드와 보조 값 ──
    print("\n[1] 카드 파싱과 보조 값 계산...")
    prepared, preprocessed, prover = check(
        k, "7h 7s", "7d Kc Kh", "full house", bind_public=True,
    )
    print(f"    카드: {' '.join(str(c) for c in prepared.cards)}")
    print(f"    num_of_pair = {prepared.counts[0]}, num_of_same_kind = {prepared.counts[1]}")
    print(f"    공개 입력: {[[int(v) for v in col] for col in prepared.instances]}")

    # ── 2. 전처리 ──
    print("\n[2] 회로 전처리...")
    print(f"    도메인 크기 n: {preprocessed.n}")
    print(f"    단위근 ω: FR({int(preprocessed.omega)})")
    print(f"    게이트 수: {len(preprocessed.cs.gates)}, 최대 차수: {preprocessed.cs.degree()}")
    for selector, evals in zip(preprocessed.cs.selectors, preprocessed.selector_evals):
        print(f"      {selector.name:<18} {[int(v) for v in evals]}")

    # ── 3. 행 단위 검사 ──
    print("\n[3] MockProver 검사...")
    failures = prover.verify()
    print(f"    실패 수: {len(failures)}")
    result = not failures

    # ── 4. 몫 다항식 ──
    print("\n[4] 몫 다항식 검사...")
    t = quotient_polynomial(preprocessed, prover)
    print(f"    deg t(x) = {t.degree}")
    divisible = is_divisible(preprocessed, prover)
    print(f"    검사 결과: {'성공 ✓' if divisible else '실패 ✗'}")

    # ── 5. 거짓 주장 ──
    # 7♥ 7♠ 7♦ K♣ 2♥ 는 트리플일 뿐이다.
    print("\n[5] 거짓 주장: 7♥ 7♠ | 7♦ K♣ 2♥ 를 풀하우스라고 주장...")
    _, fake_pp, fake_prover = check(k, "7h 7s", "7d Kc 2h", "full house")
    fake_failures = fake_prover.verify()
    for failure in fake_failures:
        print(f"      - {failure}")
    fake_divisible = is_divisible(fake_pp, fake_prover)
    print(f"    검사 결과: {'성공 ✓' if fake_divisible else '실패 ✗ (예상대로 실패)'}")

    print("\n" + "=" * 60)
    if result and divisible and fake_failures and not fake_divisible:
        print("  데모 완료: 모든 테스트 통과!")
    else:
        print("  데모 완료: 일부 테스트 실패")
    print("=" * 60)

    return result


if __name__ == "__main__":
    main()
