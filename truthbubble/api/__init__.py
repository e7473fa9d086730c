from flask import Blueprint

api_bp = Blueprint("api", __name__)

# route modules register themselves on the blueprint
from . import routes, routes2, routes_image, routes_heuristic  # noqa: E402,F401
