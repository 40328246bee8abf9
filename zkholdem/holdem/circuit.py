"""
홀덤 핸드 검사 회로 (HoldemCircuit)
=====================================

HoldemChip을 감싸 하나의 증명 인스턴스를 구성한다.

**주장(claim) = 셀렉터**:
  어떤 족보를 증명하는지는 witness 값이 아니라 어느 셀렉터가 켜졌는가로
  표현된다. 따라서 claim은 without_witnesses()에서도 유지된다.

  | HandCategory     | 켜지는 셀렉터                        |
  |------------------|--------------------------------------|
  | STRAIGHT         | q_straight                           |
  | FLUSH            | q_flush                              |
  | ONE_PAIR         | q_one_pair                           |
  | TWO_PAIR         | q_two_pair                           |
  | THREE_OF_A_KIND  | q_three_of_a_kind                    |
  | FOUR_OF_A_KIND   | q_four_of_a_kind                     |
  | FULL_HOUSE       | q_one_pair + q_three_of_a_kind       |

**합성 순서** (모두 0번 행):
  1. "one hand/hand check": 칩이 카드 5장을 배치
  2. (bind_public) 공개 카드 셀을 instance 열에 복사 제약
  3. "hand claim": 셀렉터 활성화 + num_of_pair, num_of_same_kind 기록

사용 예시:
    >>> circuit = HoldemCircuit(
    ...     cards=[FR(7), FR(7)], table_cards=[FR(2), FR(9), FR(13)],
    ...     claim=HandCategory.ONE_PAIR, num_of_pair=1, num_of_same_kind=2,
    ... )
    >>> MockProver.run(3, circuit, [[], []]).assert_satisfied()
"""

from collections import namedtuple
from enum import Enum

from zkholdem.holdem.chip import HoldemChip, StraightMode
from zkholdem.plonk.field import FR
from zkholdem.plonkish.circuit import Circuit
from zkholdem.plonkish.value import Value


class HandCategory(Enum):
    STRAIGHT = "straight"
    FLUSH = "flush"
    ONE_PAIR = "one pair"
    TWO_PAIR = "two pair"
    THREE_OF_A_KIND = "three of a kind"
    FOUR_OF_A_KIND = "four of a kind"
    FULL_HOUSE = "full house"

    @classmethod
    def parse(cls, text):
        """"full_house", "Full House", "full-house" 등을 받아들인다."""
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower().replace("_", " ").replace("-", " ")
        for category in cls:
            if category.value == key:
                return category
        raise ValueError(f"알 수 없는 족보입니다: {text!r}")

    def selectors(self, config):
        """이 주장을 위해 켜야 하는 셀렉터들."""
        if self is HandCategory.FULL_HOUSE:
            return [config.q_one_pair, config.q_three_of_a_kind]
        return [{
            HandCategory.STRAIGHT: config.q_straight,
            HandCategory.FLUSH: config.q_flush,
            HandCategory.ONE_PAIR: config.q_one_pair,
            HandCategory.TWO_PAIR: config.q_two_pair,
            HandCategory.THREE_OF_A_KIND: config.q_three_of_a_kind,
            HandCategory.FOUR_OF_A_KIND: config.q_four_of_a_kind,
        }[self]]


HoldemParams = namedtuple("HoldemParams", ["straight_mode", "bind_public"])


class HoldemCircuitConfig:
    """칩 설정 + 회로가 따로 보관하는 보조 열 2개."""

    def __init__(self, chip, num_of_pair, num_of_same_kind):
        self.chip = chip
        self.num_of_pair = num_of_pair
        self.num_of_same_kind = num_of_same_kind


class HoldemCircuit(Circuit):
    """핸드 하나의 족보 주장을 담은 회로.

    속성:
        cards: 개인 카드 값 2개 (Value)
        table_cards: 공개 카드 값 3개 (Value)
        claim: HandCategory 또는 None (None이면 어떤 셀렉터도 켜지 않음)
        num_of_pair, num_of_same_kind: 호출자가 계산한 보조 값 (Value)
        straight_mode, bind_public: 스키마 파라미터
        field: 필드 클래스
    """

    def __init__(self, cards=None, table_cards=None, claim=None,
                 num_of_pair=None, num_of_same_kind=None,
                 straight_mode=StraightMode.LITERAL, bind_public=False, field=FR):
        self.field = field
        cards = [None, None] if cards is None else list(cards)
        table_cards = [None, None, None] if table_cards is None else list(table_cards)
        self.cards = [Value.wrap(v) for v in cards]
        self.table_cards = [Value.wrap(v) for v in table_cards]
        self.claim = None if claim is None else HandCategory.parse(claim)
        self.num_of_pair = Value.wrap(num_of_pair)
        self.num_of_same_kind = Value.wrap(num_of_same_kind)
        self.straight_mode = StraightMode(straight_mode)
        self.bind_public = bind_public

    def without_witnesses(self):
        return HoldemCircuit(
            claim=self.claim,
            straight_mode=self.straight_mode,
            bind_public=self.bind_public,
            field=self.field,
        )

    def params(self):
        return HoldemParams(self.straight_mode, self.bind_public)

    @classmethod
    def configure(cls, meta, params=None):
        if params is None:
            params = HoldemParams(StraightMode.LITERAL, False)

        q_flush = meta.selector("q_flush")
        q_straight = meta.selector("q_straight")
        q_one_pair = meta.selector("q_one_pair")
        q_two_pair = meta.selector("q_two_pair")
        q_three_of_a_kind = meta.selector("q_three_of_a_kind")
        q_four_of_a_kind = meta.selector("q_four_of_a_kind")

        cards = [meta.advice_column(f"card_{i}") for i in range(5)]
        table_cards = [meta.instance_column(f"table_cards_{i}") for i in range(2)]
        num_of_pair = meta.advice_column("num_of_pair")
        num_of_same_kind = meta.advice_column("num_of_same_kind")

        chip = HoldemChip.configure(
            meta,
            q_flush,
            q_straight,
            q_one_pair,
            q_two_pair,
            q_three_of_a_kind,
            q_four_of_a_kind,
            cards,
            table_cards,
            num_of_pair,
            num_of_same_kind,
            straight_mode=params.straight_mode,
            bind_public=params.bind_public,
        )
        return HoldemCircuitConfig(chip, num_of_pair, num_of_same_kind)

    def synthesize(self, config, layouter):
        chip = HoldemChip.construct(config.chip)

        cells = chip.assign_card(layouter.namespace("one hand"), self.cards, self.table_cards)
        if config.chip.bind_public:
            chip.expose_public(layouter.namespace("table cards"), cells[2:])

        selectors = self.claim.selectors(config.chip) if self.claim else []

        def hand_claim(region):
            for selector in selectors:
                region.enable_selector("claim", selector, 0)
            region.assign_advice("num_of_pair", config.num_of_pair, 0, self.num_of_pair)
            region.assign_advice("num_of_same_kind", config.num_of_same_kind, 0,
                                 self.num_of_same_kind)

        layouter.assign_region("hand claim", hand_claim)
