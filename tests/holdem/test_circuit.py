"""
HoldemCircuit 테스트: 주장(셀렉터)별 만족성.

테스트 대상:
  - 스트레이트: LITERAL은 카드 1..4가 1일 때만, ADJACENT는 연속 랭크일 때
  - 플러시: 같은 무늬 인코딩이면 만족, 하나라도 다르면 불만족
  - 원 페어 / 투 페어 / 트리플 / 포카드 / 풀하우스: 보조 값 검사
  - 셀렉터가 없으면 어떤 값이든 만족 (게이트가 비활성)
  - 보조 값은 신뢰된다: 거짓 보조 값도 통과
  - bind_public: 공개 입력과 다르면 복사 제약 실패
  - 전처리 + 몫 다항식 검사와 MockProver 결과 일치
  - 작은 소수체에서도 동작
"""

import pytest
from zkholdem.holdem.chip import StraightMode, table_instances
from zkholdem.holdem.circuit import HandCategory, HoldemCircuit, HoldemParams
from zkholdem.holdem.witness import prepare
from zkholdem.plonk.field import FR, prime_field
from zkholdem.plonkish.constraint_system import ConstraintSystem
from zkholdem.plonkish.mock_prover import MockProver, ConstraintNotSatisfied, PermutationFailure
from zkholdem.plonkish.preprocessor import preprocess
from zkholdem.plonkish.quotient import is_divisible

K = 3


def _run(claim, cards, table_cards, num_of_pair=0, num_of_same_kind=1,
         straight_mode=StraightMode.LITERAL, bind_public=False, instances=None, field=FR):
    circuit = HoldemCircuit(
        cards=[field(v) for v in cards],
        table_cards=[field(v) for v in table_cards],
        claim=claim,
        num_of_pair=field(num_of_pair),
        num_of_same_kind=field(num_of_same_kind),
        straight_mode=straight_mode,
        bind_public=bind_public,
        field=field,
    )
    if instances is None:
        instances = [[], []]
    return MockProver.run(K, circuit, instances)


def _failed_constraints(prover):
    return [(f.gate, f.name) for f in prover.verify() if isinstance(f, ConstraintNotSatisfied)]


# ─────────────────────────────────────────────────────────────────────
# HandCategory
# ─────────────────────────────────────────────────────────────────────

class TestHandCategory:
    def test_parse_variants(self):
        assert HandCategory.parse("full_house") is HandCategory.FULL_HOUSE
        assert HandCategory.parse("Full House") is HandCategory.FULL_HOUSE
        assert HandCategory.parse("three-of-a-kind") is HandCategory.THREE_OF_A_KIND
        assert HandCategory.parse(HandCategory.FLUSH) is HandCategory.FLUSH

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            HandCategory.parse("royal flush")

    def test_selectors(self):
        cs = ConstraintSystem()
        config = HoldemCircuit.configure(cs).chip
        assert HandCategory.FULL_HOUSE.selectors(config) == [config.q_one_pair,
                                                             config.q_three_of_a_kind]
        assert HandCategory.STRAIGHT.selectors(config) == [config.q_straight]
        singles = [c for c in HandCategory if c is not HandCategory.FULL_HOUSE]
        assert [c.selectors(config)[0] for c in singles] == [
            config.q_straight, config.q_flush, config.q_one_pair, config.q_two_pair,
            config.q_three_of_a_kind, config.q_four_of_a_kind,
        ]


# ─────────────────────────────────────────────────────────────────────
# 스트레이트
# ─────────────────────────────────────────────────────────────────────

class TestStraight:
    def test_literal_accepts_ones(self):
        # 첫 카드는 검사하지 않는다
        prover = _run(HandCategory.STRAIGHT, [9, 1], [1, 1, 1])
        assert prover.verify() == []

    def test_literal_rejects_real_straight(self):
        prover = _run(HandCategory.STRAIGHT, [3, 4], [5, 6, 7])
        assert _failed_constraints(prover) == [
            ("straight", f"card[{i}] = 1") for i in range(1, 5)
        ]

    def test_adjacent_accepts_consecutive_ranks(self):
        prover = _run(HandCategory.STRAIGHT, [3, 4], [5, 6, 7],
                      straight_mode=StraightMode.ADJACENT)
        assert prover.verify() == []

    def test_adjacent_rejects_gap(self):
        prover = _run(HandCategory.STRAIGHT, [3, 4], [5, 6, 8],
                      straight_mode=StraightMode.ADJACENT)
        assert _failed_constraints(prover) == [("straight", "card[4] - card[3] = 1")]

    def test_adjacent_rejects_unordered(self):
        prover = _run(HandCategory.STRAIGHT, [7, 3], [4, 5, 6],
                      straight_mode=StraightMode.ADJACENT)
        assert _failed_constraints(prover) == [("straight", "card[1] - card[0] = 1")]

    def test_wheel_needs_ace_low(self):
        high = prepare("Ah 2c", "3d 4s 5h", "straight", straight_mode=StraightMode.ADJACENT)
        assert _failed_constraints(MockProver.run(K, high.circuit, high.instances)) == [
            ("straight", "card[1] - card[0] = 1"),
        ]
        low = prepare("Ah 2c", "3d 4s 5h", "straight", encoding="rank_ace_low",
                      straight_mode=StraightMode.ADJACENT)
        assert MockProver.run(K, low.circuit, low.instances).verify() == []

    def test_adjacent_rejects_ones(self):
        prover = _run(HandCategory.STRAIGHT, [1, 1], [1, 1, 1],
                      straight_mode=StraightMode.ADJACENT)
        assert len(_failed_constraints(prover)) == 4


# ─────────────────────────────────────────────────────────────────────
# 플러시
# ─────────────────────────────────────────────────────────────────────

class TestFlush:
    @pytest.mark.parametrize("suit", [0, 1, 2, 3])
    def test_same_suit(self, suit):
        prover = _run(HandCategory.FLUSH, [suit, suit], [suit, suit, suit])
        assert prover.verify() == []

    @pytest.mark.parametrize("position", range(5))
    def test_one_different_suit(self, position):
        suits = [2] * 5
        suits[position] = 3
        prover = _run(HandCategory.FLUSH, suits[:2], suits[2:])
        failed = _failed_constraints(prover)
        assert failed
        assert all(gate == "flush" for gate, _ in failed)
        # 끝 카드는 이웃이 하나, 가운데 카드는 둘
        assert len(failed) == (1 if position in (0, 4) else 2)

    def test_prepared_flush(self):
        prepared = prepare("2h 9h", "Jh 4h Ah", "flush")
        assert MockProver.run(K, prepared.circuit, prepared.instances).verify() == []

    def test_prepared_non_flush(self):
        prepared = prepare("2h 9h", "Jh 4h As", "flush")
        assert MockProver.run(K, prepared.circuit, prepared.instances).verify() != []


# ─────────────────────────────────────────────────────────────────────
# 페어 / 같은 랭크 묶음
# ─────────────────────────────────────────────────────────────────────

class TestCounts:
    @pytest.mark.parametrize("pairs, ok", [(1, True), (0, False), (2, False)])
    def test_one_pair(self, pairs, ok):
        prover = _run(HandCategory.ONE_PAIR, [7, 7], [2, 9, 13], num_of_pair=pairs)
        assert (prover.verify() == []) is ok

    @pytest.mark.parametrize("pairs, ok", [(2, True), (0, False), (1, False), (3, False)])
    def test_two_pair(self, pairs, ok):
        prover = _run(HandCategory.TWO_PAIR, [7, 7], [13, 13, 2], num_of_pair=pairs)
        assert (prover.verify() == []) is ok

    @pytest.mark.parametrize("same, ok", [(3, True), (2, False), (4, False)])
    def test_three_of_a_kind(self, same, ok):
        prover = _run(HandCategory.THREE_OF_A_KIND, [7, 7], [7, 2, 13], num_of_same_kind=same)
        assert (prover.verify() == []) is ok

    @pytest.mark.parametrize("same, ok", [(4, True), (3, False), (1, False)])
    def test_four_of_a_kind(self, same, ok):
        prover = _run(HandCategory.FOUR_OF_A_KIND, [7, 7], [7, 7, 13], num_of_same_kind=same)
        assert (prover.verify() == []) is ok

    def test_failure_names_constraint(self):
        prover = _run(HandCategory.TWO_PAIR, [7, 7], [13, 13, 2], num_of_pair=1)
        assert _failed_constraints(prover) == [("two pair", "num_of_pair = 2")]


class TestFullHouse:
    def test_satisfied(self):
        prover = _run(HandCategory.FULL_HOUSE, [7, 7], [7, 13, 13],
                      num_of_pair=1, num_of_same_kind=3)
        assert prover.verify() == []

    def test_enables_both_selectors(self):
        prover = _run(HandCategory.FULL_HOUSE, [7, 7], [7, 13, 13],
                      num_of_pair=1, num_of_same_kind=3)
        enabled = [s.name for s in prover.cs.selectors if prover.selector_enabled(s, 0)]
        assert enabled == ["q_one_pair", "q_three_of_a_kind"]

    def test_no_pair(self):
        prover = _run(HandCategory.FULL_HOUSE, [7, 7], [7, 13, 2],
                      num_of_pair=0, num_of_same_kind=3)
        assert ("full house", "num_of_pair = 1") in _failed_constraints(prover)

    def test_no_triple(self):
        prover = _run(HandCategory.FULL_HOUSE, [7, 7], [2, 13, 13],
                      num_of_pair=1, num_of_same_kind=2)
        assert ("full house", "num_of_same_kind = 3") in _failed_constraints(prover)

    def test_three_of_a_kind_claim_ignores_pairs(self):
        prover = _run(HandCategory.THREE_OF_A_KIND, [7, 7], [7, 13, 13],
                      num_of_pair=1, num_of_same_kind=3)
        assert prover.verify() == []


# ─────────────────────────────────────────────────────────────────────
# 셀렉터 없음 / 신뢰 경계
# ─────────────────────────────────────────────────────────────────────

class TestVacuous:
    def test_no_claim_accepts_anything(self):
        prover = _run(None, [123, 0], [-1, 5, 99], num_of_pair=42, num_of_same_kind=17)
        assert prover.verify() == []
        assert not any(prover.selector_enabled(s, 0) for s in prover.cs.selectors)

    def test_without_witnesses_keeps_claim(self):
        circuit = HoldemCircuit([FR(1), FR(2)], [FR(3), FR(4), FR(5)],
                                claim="full house", num_of_pair=1, num_of_same_kind=3,
                                straight_mode="adjacent", bind_public=True)
        blank = circuit.without_witnesses()
        assert blank.claim is HandCategory.FULL_HOUSE
        assert blank.params() == HoldemParams(StraightMode.ADJACENT, True)
        assert not any(v.is_known() for v in blank.cards + blank.table_cards)
        assert not blank.num_of_pair.is_known()


class TestTrustedCounts:
    def test_dishonest_counts_accepted(self):
        # 7 7 | 2 9 K 는 원 페어지만 보조 값을 속이면 포카드 주장도 통과한다
        prover = _run(HandCategory.FOUR_OF_A_KIND, [7, 7], [2, 9, 13], num_of_same_kind=4)
        assert prover.verify() == []

    def test_honest_counts_reject_false_claim(self):
        prepared = prepare("7h 7s", "2c 9d Kh", "four of a kind")
        assert MockProver.run(K, prepared.circuit, prepared.instances).verify() != []


# ─────────────────────────────────────────────────────────────────────
# 공개 카드 바인딩
# ─────────────────────────────────────────────────────────────────────

class TestBindPublic:
    def test_matching_instances(self):
        table = [2, 9, 13]
        prover = _run(HandCategory.ONE_PAIR, [7, 7], table, num_of_pair=1, bind_public=True,
                      instances=table_instances([FR(v) for v in table]))
        assert prover.verify() == []
        assert len(prover.copies) == 3

    def test_mismatched_instance(self):
        prover = _run(HandCategory.ONE_PAIR, [7, 7], [2, 9, 13], num_of_pair=1, bind_public=True,
                      instances=[[FR(2), FR(9)], [FR(12)]])
        failures = prover.verify()
        assert len(failures) == 1
        assert isinstance(failures[0], PermutationFailure)

    def test_missing_instances(self):
        prover = _run(HandCategory.ONE_PAIR, [7, 7], [2, 9, 13], num_of_pair=1, bind_public=True)
        assert len([f for f in prover.verify() if isinstance(f, PermutationFailure)]) == 3

    def test_unbound_ignores_instances(self):
        prover = _run(HandCategory.ONE_PAIR, [7, 7], [2, 9, 13], num_of_pair=1,
                      instances=[[FR(50), FR(51)], [FR(52)]])
        assert prover.verify() == []


# ─────────────────────────────────────────────────────────────────────
# 전처리 + 몫 다항식
# ─────────────────────────────────────────────────────────────────────

class TestQuotientAgreement:
    @pytest.mark.parametrize("private, table, claim", [
        ("7h 7s", "7d Kc Kh", "full house"),
        ("2h 9h", "Jh 4h Ah", "flush"),
        ("7h 7s", "Kc Kd 2h", "two pair"),
    ])
    def test_honest_claim_divisible(self, private, table, claim):
        prepared = prepare(private, table, claim, bind_public=True)
        pp = preprocess(K, prepared.circuit)
        prover = MockProver.run(K, prepared.circuit, prepared.instances)
        assert prover.verify() == []
        assert is_divisible(pp, prover)

    @pytest.mark.parametrize("private, table, claim", [
        ("7h 7s", "7d Kc 2h", "full house"),
        ("2h 9h", "Jh 4h As", "flush"),
        ("3h 4c", "5d 6s 7h", "straight"),
    ])
    def test_false_claim_not_divisible(self, private, table, claim):
        prepared = prepare(private, table, claim)
        pp = preprocess(K, prepared.circuit)
        prover = MockProver.run(K, prepared.circuit, prepared.instances)
        assert prover.verify() != []
        assert not is_divisible(pp, prover)

    def test_bound_board_mismatch_not_divisible(self):
        circuit = HoldemCircuit([FR(7), FR(7)], [FR(2), FR(9), FR(13)],
                                claim=HandCategory.ONE_PAIR, num_of_pair=1,
                                num_of_same_kind=2, bind_public=True)
        pp = preprocess(K, circuit)
        prover = MockProver.run(K, circuit, [[FR(40), FR(41)], [FR(42)]])
        assert len([f for f in prover.verify() if isinstance(f, PermutationFailure)]) == 3
        assert not is_divisible(pp, prover)

    def test_bound_board_single_card_mismatch(self):
        prepared = prepare("7h 7s", "2c 9d Kh", "one pair", bind_public=True)
        pp = preprocess(K, prepared.circuit)
        instances = [list(prepared.instances[0]), [FR(12)]]
        prover = MockProver.run(K, prepared.circuit, instances)
        assert not is_divisible(pp, prover)

    def test_copies_follow_preprocessing(self):
        # witness 쪽 복사 목록을 지워도 전처리된 복사 제약은 남는다
        prepared = prepare("7h 7s", "2c 9d Kh", "one pair", bind_public=True)
        pp = preprocess(K, prepared.circuit)
        prover = MockProver.run(K, prepared.circuit, [[FR(40), FR(41)], [FR(42)]])
        prover.copies = []
        assert prover.verify() == []
        assert len(pp.copies) == 3
        assert not is_divisible(pp, prover)

    def test_adjacent_straight_divisible(self):
        prepared = prepare("3h 4c", "5d 6s 7h", "straight", straight_mode=StraightMode.ADJACENT)
        pp = preprocess(K, prepared.circuit)
        prover = MockProver.run(K, prepared.circuit, prepared.instances)
        assert is_divisible(pp, prover)

    def test_claim_selectors_in_preprocessed(self):
        prepared = prepare("7h 7s", "7d Kc Kh", "full house")
        pp = preprocess(K, prepared.circuit)
        enabled = [s.name for s, evals in zip(pp.cs.selectors, pp.selector_evals)
                   if evals[0] == 1]
        assert enabled == ["q_one_pair", "q_three_of_a_kind"]


# ─────────────────────────────────────────────────────────────────────
# 필드 일반성
# ─────────────────────────────────────────────────────────────────────

class TestGenericField:
    F97 = prime_field(97)

    def test_full_house_small_field(self):
        prover = _run(HandCategory.FULL_HOUSE, [7, 7], [7, 13, 13],
                      num_of_pair=1, num_of_same_kind=3, field=self.F97)
        assert prover.field is self.F97
        assert prover.verify() == []

    def test_two_pair_small_field_rejects(self):
        prover = _run(HandCategory.TWO_PAIR, [7, 7], [13, 13, 2],
                      num_of_pair=99, field=self.F97)
        # 99 ≡ 2 (mod 97)
        assert prover.verify() == []
        prover = _run(HandCategory.TWO_PAIR, [7, 7], [13, 13, 2],
                      num_of_pair=1, field=self.F97)
        assert prover.verify() != []

    def test_small_field_quotient(self):
        prepared = prepare("3h 4c", "5d 6s 7h", "straight",
                           straight_mode=StraightMode.ADJACENT, field=self.F97)
        pp = preprocess(K, prepared.circuit)
        prover = MockProver.run(K, prepared.circuit, prepared.instances)
        assert isinstance(pp.omega, self.F97)
        assert is_divisible(pp, prover)
