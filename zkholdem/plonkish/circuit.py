"""
회로(Circuit) 기반 클래스
==========================

백엔드는 회로를 두 단계로 사용한다.

  1. configure(meta, params): 스키마 선언. 회로 정의당 한 번.
     반환값(config)은 선언된 열/셀렉터 묶음이다.
  2. synthesize(config, layouter): 셀 값 배치. 증명 인스턴스마다 한 번.

without_witnesses()는 값을 모두 unknown으로 바꾼 회로를 돌려준다.
전처리(형태만 필요한 합성)에서 사용하며, 회로 구조를 결정하는 정보
(어떤 셀렉터를 켤지 등)는 유지해야 한다.
"""

from zkholdem.plonk.field import FR


class Circuit:
    field = FR

    def without_witnesses(self):
        raise NotImplementedError

    def params(self):
        """configure에 넘길 구조 파라미터. 기본값은 None."""
        return None

    @classmethod
    def configure(cls, meta, params=None):
        raise NotImplementedError

    def synthesize(self, config, layouter):
        raise NotImplementedError
