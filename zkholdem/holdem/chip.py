"""
홀덤 핸드 검사 칩 (HoldemChip)
================================

Prover가 가진 2장의 개인 카드와 3장의 공개 카드(보드)가
주장한 족보(hand category)를 만족함을 다항식 제약으로 표현한다.

**열 구성**:
  | 열                 | 종류     | 내용                                  |
  |--------------------|----------|---------------------------------------|
  | cards[0..1]        | advice   | 개인 카드 2장                         |
  | cards[2..4]        | advice   | 공개 카드 3장                         |
  | table_cards[0..1]  | instance | 공개 카드 (PUBLIC_LAYOUT 참조)        |
  | num_of_pair        | advice   | 핸드에 있는 페어 수 (호출자가 계산)    |
  | num_of_same_kind   | advice   | 같은 랭크 최대 묶음 크기 (호출자가 계산) |

**게이트** (각 식에 해당 셀렉터가 곱해진다):
  | 게이트           | 셀렉터                 | 식                           |
  |------------------|------------------------|------------------------------|
  | straight         | q_straight             | card[i] - 1, i = 1..4 (LITERAL) |
  |                  |                        | card[i] - card[i-1] - 1 (ADJACENT) |
  | flush            | q_flush                | card[i] - card[i+1], i = 0..3 |
  | one pair         | q_one_pair             | 1 - num_of_pair              |
  | two pair         | q_two_pair             | 2 - num_of_pair              |
  | three of a kind  | q_three_of_a_kind      | 3 - num_of_same_kind         |
  | four of a kind   | q_four_of_a_kind       | 4 - num_of_same_kind         |
  | full house       | q_three_of_a_kind      | 3 - num_of_same_kind         |
  |                  | q_one_pair             | 1 - num_of_pair              |

  풀하우스는 별도의 셀렉터가 없다. one pair와 three of a kind 셀렉터를
  동시에 켜는 것이 풀하우스 주장이다.

**스트레이트 게이트**:
  LITERAL은 카드 1..4가 상수 1과 같은지를 본다. 첫 카드와의 인접성은
  보지 않는다. ADJACENT는 열 순서대로 랭크가 1씩 증가하는지를 본다
  (카드가 열 순서대로 정렬되어 있어야 한다).

**신뢰 경계**:
  num_of_pair, num_of_same_kind는 회로 안에서 카드로부터 다시 계산하지
  않는다. 게이트는 주장한 족보와 두 값이 일치하는지만 검사한다.

**공개 카드 바인딩**:
  bind_public=False이면 instance 열은 선언만 되고 카드와 묶이지 않는다.
  bind_public=True이면 공개 카드 셀 3개를 PUBLIC_LAYOUT의 instance 셀에
  복사 제약으로 묶는다.
"""

import logging
from enum import Enum

from zkholdem.plonkish.expression import Constant, Rotation
from zkholdem.plonkish.value import Value

logger = logging.getLogger(__name__)

# 공개 카드 i → (instance 열 인덱스, 행)
PUBLIC_LAYOUT = ((0, 0), (0, 1), (1, 0))


class StraightMode(Enum):
    LITERAL = "literal"
    ADJACENT = "adjacent"


class HoldemConfig:
    """스키마 설명자: 셀렉터 6개, 카드 열 5개, 공개 열 2개.

    num_of_pair / num_of_same_kind 열은 게이트가 참조하지만
    이 설명자에는 들어 있지 않다. 회로가 따로 보관한다.
    """

    def __init__(self, q_straight, q_flush, q_one_pair, q_two_pair,
                 q_three_of_a_kind, q_four_of_a_kind, cards, table_cards,
                 straight_mode=StraightMode.LITERAL, bind_public=False):
        self.q_straight = q_straight
        self.q_flush = q_flush
        self.q_one_pair = q_one_pair
        self.q_two_pair = q_two_pair
        self.q_three_of_a_kind = q_three_of_a_kind
        self.q_four_of_a_kind = q_four_of_a_kind
        self.cards = tuple(cards)
        self.table_cards = tuple(table_cards)
        self.straight_mode = straight_mode
        self.bind_public = bind_public

    @property
    def selectors(self):
        return (self.q_straight, self.q_flush, self.q_one_pair, self.q_two_pair,
                self.q_three_of_a_kind, self.q_four_of_a_kind)


class HoldemChip:
    """핸드 검사 칩: 스키마 선언(configure)과 카드 배치(assign_card)."""

    def __init__(self, config):
        self.config = config

    @classmethod
    def construct(cls, config):
        return cls(config)

    @staticmethod
    def configure(meta, q_flush, q_straight, q_one_pair, q_two_pair,
                  q_three_of_a_kind, q_four_of_a_kind, cards, table_cards,
                  num_of_pair, num_of_same_kind,
                  straight_mode=StraightMode.LITERAL, bind_public=False):
        """게이트 7개를 등록하고 HoldemConfig를 반환한다.

        Args:
            meta: ConstraintSystem
            q_*: 족보별 셀렉터 6개
            cards: advice 열 5개 (개인 2 + 공개 3 순서)
            table_cards: instance 열 2개
            num_of_pair, num_of_same_kind: 보조 advice 열
            straight_mode: StraightMode.LITERAL 또는 ADJACENT
            bind_public: 공개 카드 셀을 instance 열에 묶을지 여부

        Returns:
            HoldemConfig
        """
        if len(cards) != 5 or len(table_cards) != 2:
            raise ValueError(
                f"카드 열 5개, 공개 열 2개가 필요합니다: {len(cards)}, {len(table_cards)}"
            )
        straight_mode = StraightMode(straight_mode)
        one = Constant(1)

        def straight(vc):
            q = vc.query_selector(q_straight)
            constraints = []
            for i in range(1, 5):
                card = vc.query_advice(cards[i], Rotation.cur())
                if straight_mode is StraightMode.ADJACENT:
                    prev = vc.query_advice(cards[i - 1], Rotation.cur())
                    constraints.append((f"card[{i}] - card[{i - 1}] = 1", q * (card - prev - one)))
                else:
                    constraints.append((f"card[{i}] = 1", q * (card - one)))
            return constraints

        def flush(vc):
            q = vc.query_selector(q_flush)
            constraints = []
            for i in range(4):
                cur = vc.query_advice(cards[i], Rotation.cur())
                nxt = vc.query_advice(cards[i + 1], Rotation.cur())
                constraints.append((f"card[{i}] = card[{i + 1}]", q * (cur - nxt)))
            return constraints

        def count_gate(selector, column, expected):
            def gate(vc):
                q = vc.query_selector(selector)
                count = vc.query_advice(column, Rotation.cur())
                return [(f"{column!r} = {expected}", q * (Constant(expected) - count))]
            return gate

        def full_house(vc):
            q_pair = vc.query_selector(q_one_pair)
            q_three = vc.query_selector(q_three_of_a_kind)
            same_kind = vc.query_advice(num_of_same_kind, Rotation.cur())
            pairs = vc.query_advice(num_of_pair, Rotation.cur())
            return [
                (f"{num_of_same_kind!r} = 3", q_three * (Constant(3) - same_kind)),
                (f"{num_of_pair!r} = 1", q_pair * (one - pairs)),
            ]

        meta.create_gate("straight", straight)
        meta.create_gate("flush", flush)
        meta.create_gate("one pair", count_gate(q_one_pair, num_of_pair, 1))
        meta.create_gate("two pair", count_gate(q_two_pair, num_of_pair, 2))
        meta.create_gate("three of a kind", count_gate(q_three_of_a_kind, num_of_same_kind, 3))
        meta.create_gate("four of a kind", count_gate(q_four_of_a_kind, num_of_same_kind, 4))
        meta.create_gate("full house", full_house)

        if bind_public:
            for column in list(cards[2:]) + list(table_cards):
                meta.enable_equality(column)

        logger.debug("holdem chip configured: straight=%s, bind_public=%s",
                     straight_mode.value, bind_public)
        return HoldemConfig(
            q_straight, q_flush, q_one_pair, q_two_pair,
            q_three_of_a_kind, q_four_of_a_kind, cards, table_cards,
            straight_mode=straight_mode, bind_public=bind_public,
        )

    def assign_card(self, layouter, cards, table_cards):
        """개인 카드 2장과 공개 카드 3장을 한 행에 배치한다.

        순서: cards[0], cards[1], table_cards[0], table_cards[1], table_cards[2]
        값의 범위나 중복은 검사하지 않는다.

        Args:
            layouter: Layouter
            cards: 개인 카드 값 2개 (Value, 필드 원소 또는 정수)
            table_cards: 공개 카드 값 3개

        Returns:
            list[AssignedCell]: 5개의 할당된 셀
        """
        if len(cards) != 2 or len(table_cards) != 3:
            raise ValueError(
                f"개인 카드 2장, 공개 카드 3장이 필요합니다: {len(cards)}, {len(table_cards)}"
            )
        hand = [Value.wrap(v) for v in list(cards) + list(table_cards)]

        def hand_check(region):
            return [
                region.assign_advice("cards", self.config.cards[i], 0, hand[i])
                for i in range(5)
            ]

        return layouter.assign_region("hand check", hand_check)

    def expose_public(self, layouter, cells):
        """공개 카드 셀 3개를 PUBLIC_LAYOUT 위치의 instance 셀에 묶는다."""
        if len(cells) != len(PUBLIC_LAYOUT):
            raise ValueError(f"공개 카드 셀 {len(PUBLIC_LAYOUT)}개가 필요합니다: {len(cells)}")
        for cell, (column, row) in zip(cells, PUBLIC_LAYOUT):
            layouter.constrain_instance(cell, self.config.table_cards[column], row)


def table_instances(table_cards):
    """공개 카드 3장을 PUBLIC_LAYOUT에 맞는 instance 열 값으로 바꾼다.

    >>> table_instances([a, b, c])  # [[a, b], [c]]
    """
    if len(table_cards) != len(PUBLIC_LAYOUT):
        raise ValueError(f"공개 카드 {len(PUBLIC_LAYOUT)}장이 필요합니다: {len(table_cards)}")
    columns = [[], []]
    for value, (column, row) in zip(table_cards, PUBLIC_LAYOUT):
        columns[column].append(value)
    return columns
