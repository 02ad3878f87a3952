import os
import logging
from flask import Flask, jsonify
from dotenv import load_dotenv
from flask_migrate import Migrate
from models import db
from extensions import limiter
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

# .env 파일에서 환경변수 로드
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(BASE_DIR, '.env'))

from config import config_by_name

app = Flask(__name__)
# Nginx 프록시 뒤에서 클라이언트 IP/프로토콜을 올바르게 받기 위해 적용
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

# 환경 설정 적용 (기본값 production)
env_name = os.environ.get('FLASK_ENV', 'production')
app_config = config_by_name[env_name]()
app.config.from_object(app_config)
app.json.ensure_ascii = False

# 로깅 설정 적용
LOG_DIR = os.path.join(BASE_DIR, 'logs')
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

from logging.config import dictConfig
dictConfig(app_config.get_logging_config(LOG_DIR))

# 초기화
db.init_app(app)
migrate = Migrate(app, db)
limiter.init_app(app)

# Blueprint 중앙 등록
from routes import register_blueprints
register_blueprints(app)


@app.route('/health')
def health():
    try:
        db.session.execute(db.text('SELECT 1'))
        return jsonify({"status": "healthy", "database": "connected"}), 200
    except Exception as e:
        logging.getLogger(__name__).error("Health check failed: %s", e)
        return jsonify({"status": "unhealthy", "database": "disconnected"}), 503


@app.after_request
def set_security_headers(response):
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    return response


@app.errorhandler(404)
def not_found(e):
    return jsonify({"success": False, "error": "Not found"}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"success": False, "error": "Method not allowed"}), 405


@app.errorhandler(429)
def too_many_requests(e):
    return jsonify({"success": False, "error": "Too many requests"}), 429


@app.errorhandler(500)
def internal_server_error(e):
    logging.getLogger(__name__).exception("500 Internal Server Error: %s", e)
    return jsonify({"success": False, "error": "Internal server error"}), 500


@app.errorhandler(HTTPException)
def http_error(e):
    return jsonify({"success": False, "error": e.description}), e.code


# ── APScheduler 초기화 (문의 자동 반환) ──
from services.scheduler_service import init_scheduler
init_scheduler(app)


if __name__ == '__main__':
    # Nginx가 SSL을 처리하므로 Flask는 보통 5000 포트에서 실행됩니다
    use_debug = os.environ.get('FLASK_DEBUG', '0') == '1'
    app.run(host='127.0.0.1', port=5000, debug=use_debug)
