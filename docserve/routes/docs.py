from flask import Blueprint, current_app, request

docs_bp = Blueprint('docs', __name__)


@docs_bp.route('/', defaults={'subpath': ''})
@docs_bp.route('/<path:subpath>')
def serve(subpath):
    # request.path carries no query string
    state = current_app.extensions['docserve']
    return state.chain.dispatch(request.path)
