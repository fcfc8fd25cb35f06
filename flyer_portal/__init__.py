"""
Flyer Portal - 매장 전단 관리 포털

입점 신청 승인, 매장 편집(편집 토큰), 공개 전단 조회
"""

__version__ = "1.0.0"
