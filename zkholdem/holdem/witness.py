"""
witness 준비: 보조 값 계산과 회로 조립
========================================

회로는 num_of_pair와 num_of_same_kind를 카드로부터 다시 계산하지 않는다.
그 값을 정직하게 계산하는 것은 회로를 조립하는 호출자의 몫이고,
이 모듈이 그 역할을 한다.

**보조 값 정의**:
  | 핸드 (랭크 분포)  | num_of_pair | num_of_same_kind |
  |-------------------|-------------|------------------|
  | 1-1-1-1-1         | 0           | 1                |
  | 2-1-1-1 (원 페어) | 1           | 2                |
  | 2-2-1 (투 페어)   | 2           | 2                |
  | 3-1-1 (트리플)    | 0           | 3                |
  | 3-2 (풀하우스)    | 1           | 3                |
  | 4-1 (포카드)      | 0           | 4                |

  num_of_pair는 정확히 두 번 나오는 랭크의 수,
  num_of_same_kind는 가장 많이 나오는 랭크의 등장 횟수다.
"""

import logging
from collections import Counter, namedtuple

from zkholdem.holdem.cards import Encoding, encode, parse_cards
from zkholdem.holdem.chip import StraightMode, table_instances
from zkholdem.holdem.circuit import HandCategory, HoldemCircuit
from zkholdem.plonk.field import FR

logger = logging.getLogger(__name__)

PreparedHand = namedtuple("PreparedHand", ["circuit", "instances", "cards", "counts"])


def _rank_counts(cards):
    return Counter(card.rank for card in parse_cards(cards))


def count_pairs(cards):
    """정확히 두 장씩 있는 랭크의 수."""
    return sum(1 for n in _rank_counts(cards).values() if n == 2)


def largest_group(cards):
    """같은 랭크 카드의 최대 묶음 크기."""
    counts = _rank_counts(cards)
    return max(counts.values()) if counts else 0


def derive_counts(cards):
    """(num_of_pair, num_of_same_kind)를 반환한다."""
    return count_pairs(cards), largest_group(cards)


def default_encoding(claim):
    """플러시는 무늬를, 나머지 족보는 랭크를 인코딩한다."""
    if HandCategory.parse(claim) is HandCategory.FLUSH:
        return Encoding.SUIT
    return Encoding.RANK


def prepare(private_cards, table_cards, claim, encoding=None,
            straight_mode=StraightMode.LITERAL, bind_public=False, field=FR):
    """카드 문자열로부터 회로와 instance 값을 조립한다.

    Args:
        private_cards: 개인 카드 2장 (문자열 또는 Card)
        table_cards: 공개 카드 3장
        claim: HandCategory 또는 족보 이름
        encoding: 카드 인코딩 (None이면 default_encoding(claim))
        straight_mode, bind_public: 회로 스키마 파라미터
        field: 필드 클래스

    Returns:
        PreparedHand(circuit, instances, cards, counts)

    Raises:
        ValueError: 카드 수가 맞지 않거나 같은 카드가 두 번 나올 때
    """
    private = parse_cards(private_cards)
    table = parse_cards(table_cards)
    if len(private) != 2 or len(table) != 3:
        raise ValueError(f"개인 카드 2장, 공개 카드 3장이 필요합니다: {len(private)}, {len(table)}")
    hand = private + table
    if len(set(hand)) != len(hand):
        raise ValueError(f"같은 카드가 두 번 나왔습니다: {' '.join(str(c) for c in hand)}")

    claim = HandCategory.parse(claim)
    encoding = Encoding(encoding) if encoding is not None else default_encoding(claim)
    num_of_pair, num_of_same_kind = derive_counts(hand)

    private_values = [encode(c, encoding, field) for c in private]
    table_values = [encode(c, encoding, field) for c in table]

    circuit = HoldemCircuit(
        cards=private_values,
        table_cards=table_values,
        claim=claim,
        num_of_pair=field(num_of_pair),
        num_of_same_kind=field(num_of_same_kind),
        straight_mode=straight_mode,
        bind_public=bind_public,
        field=field,
    )
    instances = table_instances(table_values) if bind_public else [[], []]

    logger.debug("prepared hand %s for '%s' (%s encoding): pairs=%d, same_kind=%d",
                 " ".join(str(c) for c in hand), claim.value, encoding.value,
                 num_of_pair, num_of_same_kind)
    return PreparedHand(circuit, instances, hand, (num_of_pair, num_of_same_kind))
