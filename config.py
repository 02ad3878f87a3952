import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

class Config:
    """기본 설정 (모든 환경 공통)"""
    SECRET_KEY = os.environ.get('SECRET_KEY')
    JWT_SECRET = os.environ.get('JWT_SECRET')
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_HOURS = 24
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # 환경변수 DATABASE_URL이 있으면 사용, 없으면 로컬 SQLite
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f"sqlite:///{os.path.join(BASE_DIR, 'cprice.db')}"
    )
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # 2MB 제한 (JSON API)

    # ── 문의 배정 정책 ──
    INQUIRY_AUTO_RELEASE_DAYS = 7        # 배정 후 자동 반환까지 (고정)
    AUTO_RELEASE_INTERVAL_SECONDS = 300  # 자동 반환 스케줄러 주기
    CRON_SECRET = os.environ.get('CRON_SECRET')

    # ── 목록/대시보드 ──
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
    DASHBOARD_LIST_LIMIT = 10
    DASHBOARD_ANNOUNCEMENT_LIMIT = 5

    # ── 로그인 보호 ──
    LOGIN_MAX_ATTEMPTS = 5
    LOGIN_BLOCK_SECONDS = 300
    LOGIN_RATE_LIMIT = '20 per minute'
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')

    # 로깅 설정
    @staticmethod
    def get_logging_config(log_dir):
        return {
            'version': 1,
            'formatters': {
                'default': {
                    'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
                }
            },
            'handlers': {
                'file': {
                    'class': 'logging.handlers.RotatingFileHandler',
                    'filename': os.path.join(log_dir, 'cprice.log'),
                    'maxBytes': 1024 * 1024 * 10, # 10MB
                    'backupCount': 5,
                    'formatter': 'default',
                    'encoding': 'utf-8'
                },
                'console': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'default'
                }
            },
            'root': {
                'level': 'INFO',
                'handlers': ['file', 'console']
            }
        }

class DevelopmentConfig(Config):
    """개발 환경 설정"""
    DEBUG = True

    def __init__(self):
        # 개발 환경에서는 서명 키가 없으면 고정값 사용
        if not self.SECRET_KEY:
            self.SECRET_KEY = 'dev-secret-key'
        if not self.JWT_SECRET:
            self.JWT_SECRET = 'dev-jwt-secret'

class ProductionConfig(Config):
    """운영 환경 설정"""
    DEBUG = False

    # 운영 환경 필수값 검증
    def __init__(self):
        if not self.SECRET_KEY:
            raise RuntimeError("SECRET_KEY environment variable is not set")
        if not self.JWT_SECRET:
            raise RuntimeError("JWT_SECRET environment variable is not set")

# 환경 변수에 따라 설정 클래스 선택
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
