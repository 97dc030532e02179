from flask import Blueprint, request, redirect, url_for
from utils.mobile_site import render_themed, mark_redirected

# Create blueprint
main_bp = Blueprint('main', __name__)


@main_bp.before_app_request
def normalize_home_path():
    """Serve /home as / so the page has a single address"""
    if request.path.rstrip('/') == '/home':
        location = url_for('main.index')
        if request.query_string:
            location += '?' + request.query_string.decode('latin-1')
        mark_redirected(location)
        return redirect(location, 301)
    return None


@main_bp.route('/')
def index():
    return render_themed('main/index.html')
