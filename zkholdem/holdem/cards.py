"""
카드 표현과 필드 인코딩
========================

회로는 카드를 필드 원소로만 본다. 이 모듈은 사람이 읽는 카드
("A♠", "Td", "10h")를 필드 값으로 바꾸는 규칙을 정한다.

**인코딩 규칙**:
  | Encoding     | 값                         | 성질                             |
  |--------------|----------------------------|----------------------------------|
  | RANK         | 랭크 (2..14, A=14)         | 이웃한 랭크는 값이 1 차이        |
  | RANK_ACE_LOW | 랭크, 단 A=1 (1..13)       | 휠(A-2-3-4-5)도 1 차이로 이어짐  |
  | SUIT         | 무늬 (♣=0, ♦=1, ♥=2, ♠=3)  | 같은 무늬는 같은 값              |
  | INDEX        | suit * 13 + (rank - 2)     | 52장 덱의 전단사 (0..51)         |

  게이트는 "이웃 랭크 → 1 차이"와 "같은 무늬 → 같은 값"을 동시에
  요구하는데, 하나의 값으로 둘 다 만족시킬 수는 없다. 그래서 주장할
  족보에 따라 인코딩을 고른다 (플러시는 SUIT, 나머지는 RANK).

  RANK에서는 A가 항상 14이므로 ADJACENT 스트레이트로 휠(A-2-3-4-5)을
  증명할 수 없다. 휠은 RANK_ACE_LOW로 인코딩하고 A를 첫 카드에 둔다.
"""

from enum import Enum

from zkholdem.plonk.field import FR

SUITS = "cdhs"
SUIT_SYMBOLS = "♣♦♥♠"
RANKS = "23456789TJQKA"


class CardParseError(ValueError):
    pass


class Encoding(Enum):
    RANK = "rank"
    RANK_ACE_LOW = "rank_ace_low"
    SUIT = "suit"
    INDEX = "index"


class Card:
    """플레잉 카드 한 장.

    속성:
        rank: 2..14 (J=11, Q=12, K=13, A=14)
        suit: 0..3 (♣, ♦, ♥, ♠)
    """

    __slots__ = ("rank", "suit")

    def __init__(self, rank, suit):
        if not 2 <= rank <= 14:
            raise CardParseError(f"랭크는 2..14 범위여야 합니다: {rank}")
        if not 0 <= suit <= 3:
            raise CardParseError(f"무늬는 0..3 범위여야 합니다: {suit}")
        self.rank = rank
        self.suit = suit

    @property
    def index(self):
        return self.suit * 13 + (self.rank - 2)

    @classmethod
    def from_index(cls, index):
        if not 0 <= index < 52:
            raise CardParseError(f"카드 인덱스는 0..51 범위여야 합니다: {index}")
        return cls(index % 13 + 2, index // 13)

    def __eq__(self, other):
        return isinstance(other, Card) and (self.rank, self.suit) == (other.rank, other.suit)

    def __hash__(self):
        return hash((self.rank, self.suit))

    def __str__(self):
        return RANKS[self.rank - 2] + SUIT_SYMBOLS[self.suit]

    def __repr__(self):
        return f"Card({self})"


def parse_card(text):
    """문자열 한 장을 Card로 바꾼다.

    허용 형식: "A♠", "As", "AS", "10h", "Td", "t♦"

    Raises:
        CardParseError: 형식이 맞지 않을 때
    """
    if isinstance(text, Card):
        return text
    token = str(text).strip()
    if len(token) < 2:
        raise CardParseError(f"카드 형식이 아닙니다: {text!r}")

    rank_part, suit_part = token[:-1].upper(), token[-1]
    if rank_part == "10":
        rank_part = "T"
    if len(rank_part) != 1 or rank_part not in RANKS:
        raise CardParseError(f"알 수 없는 랭크입니다: {text!r}")

    if suit_part in SUIT_SYMBOLS:
        suit = SUIT_SYMBOLS.index(suit_part)
    elif suit_part.lower() in SUITS:
        suit = SUITS.index(suit_part.lower())
    else:
        raise CardParseError(f"알 수 없는 무늬입니다: {text!r}")

    return Card(RANKS.index(rank_part) + 2, suit)


def parse_cards(text):
    """공백/쉼표로 구분된 카드 목록 또는 문자열 리스트를 파싱한다."""
    if isinstance(text, str):
        tokens = text.replace(",", " ").split()
    elif isinstance(text, (list, tuple)):
        tokens = list(text)
    else:
        raise CardParseError(f"카드 목록은 문자열이나 리스트여야 합니다: {text!r}")
    return [parse_card(t) for t in tokens]


def encode(card, encoding=Encoding.RANK, field=FR):
    """카드를 필드 원소로 인코딩한다.

    Args:
        card: Card 또는 카드 문자열
        encoding: Encoding (RANK, RANK_ACE_LOW, SUIT, INDEX)
        field: 필드 클래스 (기본값: FR)

    예시:
        >>> encode("Q♥")                    # FR(12)
        >>> encode("Q♥", Encoding.SUIT)     # FR(2)
        >>> encode("Q♥", Encoding.INDEX)    # FR(36)
        >>> encode("A♠", Encoding.RANK_ACE_LOW)  # FR(1)
    """
    card = parse_card(card)
    encoding = Encoding(encoding)
    if encoding is Encoding.RANK:
        return field(card.rank)
    if encoding is Encoding.RANK_ACE_LOW:
        return field(1 if card.rank == 14 else card.rank)
    if encoding is Encoding.SUIT:
        return field(card.suit)
    return field(card.index)
