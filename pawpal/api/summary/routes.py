# pawpal/api/summary/routes.py
from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import jwt_required

from pawpal.core.session import session_from_jwt
from pawpal.screens import SummaryScreen

summary_bp = Blueprint('summary_bp', __name__)

@summary_bp.route('', methods=['GET'])
@jwt_required()
def get_summary():
    """반려동물별 급여 일정/건강 기록 수 요약"""
    services = current_app.services
    screen = SummaryScreen(session_from_jwt(), services['pets'], services['feeding'], services['health'])
    summary, notice = screen.load()
    body = dict(summary, notice=notice.to_dict() if notice else None)
    if notice:
        body["error_code"] = "BACKEND_ERROR"
        return jsonify(body), 502
    return jsonify(body), 200
