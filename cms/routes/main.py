"""
Main routes for page rendering.
"""
from flask import Blueprint, render_template
from cms.models import DocumentKind
from cms.services import get_document_store

bp = Blueprint('main', __name__)


@bp.route('/')
def index():
    """Document index, text documents and images listed separately."""
    documents = get_document_store().list()

    return render_template(
        'index.html',
        documents=[d for d in documents if d.kind != DocumentKind.IMAGE],
        images=[d for d in documents if d.kind == DocumentKind.IMAGE]
    )
