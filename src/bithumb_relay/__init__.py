"""빗썸 주문 릴레이 (서버 측 서명 프록시)"""

__version__ = "0.1.0"
