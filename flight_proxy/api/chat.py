"""
Chat relay endpoint.

POST /chat with {"input": str, "system": str?} returns
{"provider": "stub"|"gemini", "text": str}.
"""

from flask import Blueprint, current_app, jsonify, request

from flight_proxy.errors import ValidationError

chat_bp = Blueprint('chat', __name__)


@chat_bp.route('/chat', methods=['POST'])
def chat():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('input required')

    reply = current_app.config['CHAT_RELAY'].converse(
        data.get('input'),
        system=data.get('system'),
    )
    return jsonify(reply.to_dict())
