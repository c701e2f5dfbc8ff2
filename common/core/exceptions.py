class DigestError(Exception):
    """다이제스트 파이프라인 공통 예외"""


class ConfigurationError(DigestError):
    """필수 설정 누락 또는 잘못된 설정. 수집 시작 전에 실행 전체를 중단시킨다."""


class TransportError(DigestError):
    """채팅 전송 계층(텔레그램) 연결/인증 실패"""


class PersistenceError(DigestError):
    """리포트 저장 실패"""
    def __init__(self, report_id: int, message: str):
        self.report_id = report_id
        super().__init__(f"리포트 {report_id} 저장 실패: {message}")


class SummaryError(DigestError):
    """보조 소스 요약 생성 실패"""


class TranscriptError(DigestError):
    """시황 영상 자막을 가져오지 못함 (자막 없음, 비공개 영상 등)"""


class InvalidVideoUrlError(TranscriptError):
    """영상 ID를 추출할 수 없는 URL"""
