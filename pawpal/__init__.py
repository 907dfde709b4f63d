# pawpal/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
import click
from flask import Flask, jsonify, current_app
from flask.cli import AppGroup
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials

# - 설정 및 도메인 예외
from pawpal.core.config import config_by_name
from pawpal.core.errors import (
    AuthenticationRequiredError,
    ItemNotFoundError,
    MissingParentError,
    MutationInProgressError
)
from pawpal.utils.datetime_utils import DateTimeUtils

# - API 블루프린트
from pawpal.api.auth.routes import auth_bp
from pawpal.api.uploads.routes import uploads_bp
from pawpal.api.pets.routes import pets_bp
from pawpal.api.feeding.routes import feeding_bp
from pawpal.api.health.routes import health_records_bp, health_bp
from pawpal.api.vets.routes import vets_bp
from pawpal.api.summary.routes import summary_bp

# - 서비스 모듈
from pawpal.services.document_store import FirestoreDocumentStore
from pawpal.services.storage_service import StorageService
from pawpal.services.notification_service import NotificationService
from pawpal.services.reminder_service import HealthReminderService
from pawpal.services.auth_provider import FirebaseAuthProvider
from pawpal.api.auth.services import AuthGateway
from pawpal.api.pets.services import PetService
from pawpal.api.feeding.services import FeedingService
from pawpal.api.health.services import HealthService
from pawpal.api.vets.services import VetService


def _init_firebase(app: Flask):
    if firebase_admin._apps:
        return
    cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
    if not cred_path or not os.path.exists(cred_path):
        raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
    cred = credentials.Certificate(cred_path)
    firebase_admin.initialize_app(cred, {
        'storageBucket': app.config['FIREBASE_STORAGE_BUCKET']
    })


def _build_services(app: Flask) -> dict:
    """Firebase에 연결된 실제 서비스 인스턴스를 생성합니다."""
    services = {}

    # 1. 다른 서비스의 기반이 되는 공용/핵심 서비스
    store = FirestoreDocumentStore()
    services['store'] = store
    try:
        storage_instance = StorageService()
        storage_instance.init_app(app)
        services['storage'] = storage_instance
        logging.info("Storage service initialized successfully")
    except Exception as e:
        logging.error(f"Failed to initialize storage service: {e}")
        raise

    services['notifications'] = NotificationService(store)
    services['reminders'] = HealthReminderService(
        services['notifications'], default_days=app.config['HEALTH_REMINDER_DAYS']
    )

    # 2. 도메인 서비스
    provider = FirebaseAuthProvider(app.config['FIREBASE_WEB_API_KEY'], timeout=app.config['IDENTITY_TOOLKIT_TIMEOUT'])
    services['auth'] = AuthGateway(provider, store)
    services['pets'] = PetService(store)
    services['feeding'] = FeedingService(store)
    services['health'] = HealthService(store)
    services['vets'] = VetService(store)
    return services


def create_app(config_name: str = None, services: dict = None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development' | 'testing' | 'production' (기본값: FLASK_ENV)
    :param services: 미리 만든 서비스 딕셔너리. 전달하면 Firebase 초기화를 건너뜁니다 (테스트용).
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    jwt = JWTManager(app)

    if services is None:
        _init_firebase(app)

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = services if services is not None else _build_services(app)

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        """로그아웃으로 무효화된 토큰인지 확인합니다."""
        return app.services['auth'].is_token_revoked(jwt_payload)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(uploads_bp, url_prefix='/api/uploads')
    app.register_blueprint(pets_bp, url_prefix='/api/pets')

    # - 반려동물 하위 자원 (급여 일정, 건강 기록)
    app.register_blueprint(feeding_bp, url_prefix='/api/pets')
    app.register_blueprint(health_records_bp, url_prefix='/api/pets')

    app.register_blueprint(health_bp, url_prefix='/api/health')
    app.register_blueprint(vets_bp, url_prefix='/api/vets')
    app.register_blueprint(summary_bp, url_prefix='/api/summary')

    # =====================================================================================
    # 7. CLI 명령 (flask reminders dispatch, flask vets seed)
    # =====================================================================================
    reminders_cli = AppGroup('reminders', help="건강 알림 예약/발송 명령")

    @reminders_cli.command('dispatch')
    @click.option('--now', 'now_iso', default=None,
                  help="기준 시각 (ISO 8601, 예: 2025-01-01T09:00:00Z). 생략하면 현재 시각")
    def dispatch_reminders(now_iso):
        """발송 시각이 지난 예약 알림을 FCM으로 보냅니다."""
        now = DateTimeUtils.parse_iso_datetime(now_iso) if now_iso else None
        sent = current_app.services['notifications'].dispatch_due(now=now)
        click.echo(f"{sent} notification(s) sent.")

    vets_cli = AppGroup('vets', help="동물병원 디렉터리 관리 명령")

    @vets_cli.command('seed')
    def seed_vets():
        """vets 컬렉션이 비어 있으면 샘플 병원 데이터를 추가합니다."""
        added = current_app.services['vets'].seed_sample_vets()
        click.echo(f"{added} vet clinic(s) added.")

    app.cli.add_command(reminders_cli)
    app.cli.add_command(vets_cli)

    # =====================================================================================
    # 8. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(AuthenticationRequiredError)
    def handle_authentication_required(err):
        return jsonify({"error_code": "AUTHENTICATION_REQUIRED", "message": str(err)}), 401

    @app.errorhandler(MissingParentError)
    def handle_missing_parent(err):
        return jsonify({"error_code": "PARENT_NOT_FOUND", "message": str(err)}), 404

    @app.errorhandler(ItemNotFoundError)
    def handle_not_found(err):
        return jsonify({"error_code": "NOT_FOUND", "message": str(err)}), 404

    @app.errorhandler(MutationInProgressError)
    def handle_mutation_in_progress(err):
        return jsonify({"error_code": "MUTATION_IN_PROGRESS", "message": str(err)}), 409

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return jsonify({"error_code": err.name.upper().replace(' ', '_'), "message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "An unexpected server error occurred."}
        return jsonify(response), 500

    # =====================================================================================
    # 9. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
