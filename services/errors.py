"""문의 배정 워크플로 예외.

라우트는 status_code 와 message 를 그대로 응답 봉투로 옮긴다.
"""


class InquiryError(Exception):
    """문의 처리 실패의 기본 예외."""

    status_code = 500
    default_message = "Inquiry operation failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(InquiryError):
    status_code = 404
    default_message = "Inquiry not found"


class AlreadyClaimed(InquiryError):
    """조건부 UPDATE 가 0행을 갱신함: 다른 사용자가 먼저 가져감."""

    status_code = 404
    default_message = "Inquiry not found or already claimed"


class PermissionDenied(InquiryError):
    status_code = 403
    default_message = "Permission denied"


class InvalidStatus(InquiryError):
    status_code = 400
    default_message = "Invalid status"


class UserNotFound(InquiryError):
    status_code = 400
    default_message = "User not found"
