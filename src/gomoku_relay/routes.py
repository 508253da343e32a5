"""
Flask routes for the browser client.

Static assets under public/ are served by Flask's static route at the site
root; these routes cover the index page and the favicon.
"""

from flask import Blueprint, current_app

bp = Blueprint('main', __name__)


@bp.route('/')
def index():
    """Main game page."""
    return current_app.send_static_file('index.html')


@bp.route('/favicon.ico')
def favicon():
    """No favicon; answer with an empty 204 instead of a 404."""
    return '', 204
