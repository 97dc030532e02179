from flask import Blueprint, jsonify, g
from utils.mobile_site import build_full_site_link, build_mobile_site_link, is_mobile

# Create blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.route('/health')
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'message': 'API is running'
    })


@api_bp.route('/site-variant')
def site_variant():
    """Which site variant this request resolved to"""
    decision = g.get('site_decision')
    device = g.get('device')
    return jsonify({
        'is_mobile': is_mobile(),
        'theme': g.get('theme'),
        'decision': decision.as_dict() if decision else None,
        'device': {
            'type': device.device_type,
            'is_iphone': device.is_iphone,
            'is_android': device.is_android,
            'is_opera_mini': device.is_opera_mini,
            'is_blackberry': device.is_blackberry,
        } if device else None,
        'links': {
            'full_site': build_full_site_link(),
            'mobile_site': build_mobile_site_link(),
        },
        'status': 'success'
    })
