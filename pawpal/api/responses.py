# pawpal/api/responses.py
from flask import jsonify
from marshmallow import Schema

from pawpal.screens.base import ScreenResult

def screen_response(result: ScreenResult, schema: Schema, success_status: int = 200):
    """
    화면 동작 결과를 {"items", "notice", "item"} JSON으로 변환합니다.
    백엔드 실패로 되돌려진 결과는 502와 함께 되돌린 목록을 반환합니다.
    """
    body = {
        "items": schema.dump(result.items, many=True),
        "notice": result.notice.to_dict() if result.notice else None,
        "item": schema.dump(result.item) if result.item is not None else None,
    }
    if result.failed:
        body["error_code"] = "BACKEND_ERROR"
        return jsonify(body), 502
    return jsonify(body), success_status
