# pawpal/utils/datetime_utils.py
"""
프로젝트 전체에서 일관된 시간/날짜 처리를 위한 유틸리티 모듈

- 백엔드의 모든 시각은 UTC timezone-aware datetime으로 다룹니다.
- 건강 기록의 날짜(date, nextDue)는 모바일 앱과 같은 'YYYY-MM-DD' 문자열로 저장합니다.
- Firestore 저장 전/조회 후 변환을 한 곳에서 처리합니다.
"""

import logging
from datetime import datetime, date, timezone, time, timedelta
from typing import Any
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'

class DateTimeUtils:
    """시간/날짜 처리를 위한 중앙화된 유틸리티 클래스"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def today() -> date:
        return datetime.now(timezone.utc).date()

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 UTC datetime으로 파싱합니다.
        timezone 정보가 없으면 UTC로 간주합니다.
        """
        try:
            if not iso_string:
                raise ValueError("빈 문자열은 파싱할 수 없습니다")
            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'
            dt = dateutil_parser.isoparse(iso_string)
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt.astimezone(timezone.utc)
        except Exception as e:
            logger.error(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}")

    @staticmethod
    def parse_date_string(date_string: str) -> date:
        """
        'YYYY-MM-DD' 문자열을 date 객체로 파싱합니다.
        모바일 앱이 저장한 ISO 날짜(예: '2025-01-01T00:00:00.000Z')도 날짜 부분만 사용합니다.
        """
        try:
            if not date_string:
                raise ValueError("빈 문자열은 파싱할 수 없습니다")
            return datetime.strptime(date_string[:10], DATE_FORMAT).date()
        except Exception as e:
            logger.error(f"날짜 문자열 파싱 실패: {date_string} - {e}")
            raise ValueError(f"잘못된 날짜 형식입니다: {date_string}")

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime 객체를 'Z' 접미사가 붙은 UTC ISO 문자열로 변환"""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        else:
            dt = dt.astimezone(timezone.utc)
        return dt.isoformat().replace('+00:00', 'Z')

    @staticmethod
    def start_of_day(d: date) -> datetime:
        """해당 날짜의 00:00:00 UTC datetime을 반환 (모바일 앱의 new Date('YYYY-MM-DD')와 동일)"""
        return datetime.combine(d, time.min).replace(tzinfo=timezone.utc)

    @staticmethod
    def days_before(date_string: str, days: int) -> datetime:
        """'YYYY-MM-DD' 날짜의 자정(UTC)에서 days일 전 시각을 반환"""
        due = DateTimeUtils.parse_date_string(date_string)
        return DateTimeUtils.start_of_day(due) - timedelta(days=days)

    @staticmethod
    def days_until(date_string: str, today: date = None) -> int:
        """오늘부터 해당 날짜까지 남은 일수. 지난 날짜는 음수입니다."""
        today = today or DateTimeUtils.today()
        return (DateTimeUtils.parse_date_string(date_string) - today).days

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Firestore 저장을 위해 객체의 날짜/시간 필드를 변환

        변환 규칙:
        - date -> datetime (00:00:00 UTC)
        - timezone-naive datetime -> timezone-aware datetime (UTC)
        - dict/list 내부 재귀적 변환
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, date):
            return DateTimeUtils.start_of_day(obj)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Firestore에서 읽은 값을 timezone-aware datetime(UTC)으로 정규화합니다.
        Firestore의 DatetimeWithNanoseconds는 datetime의 하위 클래스입니다.
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.from_firestore(item) for item in obj]
        return obj

