from flask import Blueprint, current_app, jsonify

bp = Blueprint('index', __name__, url_prefix='/api')


@bp.route('/', methods=['GET'])
def index():
    """Health check"""
    return jsonify({
        'message': f"{current_app.config['APP_NAME']} API",
        'version': current_app.config['APP_VERSION'],
        'status': 'ok',
    })
