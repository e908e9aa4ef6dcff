"""
Document routes: create, view, edit, rename, duplicate, delete, upload and history.
"""
import mimetypes

from flask import (
    Blueprint, request, render_template, redirect, url_for, current_app,
    send_file, Response
)
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from cms.auth import get_session_context, login_required
from cms.models import DocumentKind
from cms.services import (
    get_document_store, get_history_store, DocumentNotFound, UnsupportedDocument
)
from cms.utils.markdown_renderer import render_markdown
from cms.utils.validators import ValidationError, validate_name

bp = Blueprint('documents', __name__)


def _redirect_with_message(message: str, endpoint: str = 'main.index', **values):
    get_session_context().flash(message)
    return redirect(url_for(endpoint, **values))


def _not_editable(name: str):
    return _redirect_with_message(f"{name} cannot be edited.")


def _supported_extensions():
    return current_app.config['ALLOWED_TEXT_EXTENSIONS'] | current_app.config['ALLOWED_IMAGE_EXTENSIONS']


@bp.route('/new', methods=['GET'])
@login_required
def new_document():
    return render_template('new.html')


@bp.route('/create', methods=['POST'])
@login_required
def create_document():
    """Create an empty document."""
    filename = request.form.get('filename', '').strip()

    try:
        validate_name(filename, _supported_extensions())
    except ValidationError as e:
        return render_template('new.html', filename=filename, error=str(e)), 422

    documents = get_document_store()
    if documents.exists(filename):
        return render_template(
            'new.html', filename=filename, error=f"{filename} already exists."
        ), 422

    documents.write(filename, b'')
    if documents.classify(filename).is_text:
        get_history_store(documents).record(filename)

    current_app.logger.info(f"Created document {filename}")
    return _redirect_with_message(f"{filename} was created.")


@bp.route('/img_upload', methods=['GET'])
@login_required
def upload_form():
    return render_template('upload.html')


@bp.route('/img_upload', methods=['POST'])
@login_required
def upload_image():
    """Store an uploaded image verbatim."""
    image = request.files.get('image')
    requested_name = request.form.get('filename', '').strip()

    try:
        if image is None or not image.filename:
            raise ValidationError("Choose an image to upload.")
        filename = secure_filename(requested_name or image.filename)
        validate_name(filename, current_app.config['ALLOWED_IMAGE_EXTENSIONS'])
    except ValidationError as e:
        return render_template('upload.html', filename=requested_name, error=str(e)), 422

    get_document_store().write(filename, image.read())

    current_app.logger.info(f"Uploaded image {filename}")
    return _redirect_with_message(f"{filename} was uploaded.")


@bp.errorhandler(RequestEntityTooLarge)
def request_too_large(error):
    limit = current_app.config['MAX_IMAGE_SIZE_MB']
    message = f"Requests are limited to {limit} MB."
    if request.endpoint == 'documents.upload_image':
        return _redirect_with_message(message, 'documents.upload_form')
    if request.endpoint == 'documents.save_document':
        return _redirect_with_message(message, 'documents.edit_document', name=request.view_args['name'])
    return _redirect_with_message(message)


@bp.route('/<name>', methods=['GET'])
def view_document(name):
    """Render markdown, return plain text, or stream an image."""
    documents = get_document_store()

    try:
        if not documents.exists(name):
            raise DocumentNotFound(name)
        kind = documents.classify(name)
        if kind == DocumentKind.MARKDOWN:
            body = render_markdown(documents.read_text(name))
            return render_template('document.html', name=name, body=body)
        elif kind == DocumentKind.TEXT:
            return Response(documents.read(name), mimetype='text/plain')
        elif kind == DocumentKind.IMAGE:
            mimetype, _ = mimetypes.guess_type(name)
            return send_file(documents.path_for(name), mimetype=mimetype)
        else:
            raise UnsupportedDocument(name)
    except (DocumentNotFound, UnsupportedDocument) as e:
        return _redirect_with_message(str(e))


@bp.route('/<name>/edit', methods=['GET'])
@login_required
def edit_document(name):
    documents = get_document_store()

    if not documents.exists(name):
        return _redirect_with_message(f"{name} does not exist.")
    if not documents.classify(name).is_text:
        return _not_editable(name)

    content = documents.read_text(name)

    return render_template('edit.html', name=name, content=content)


@bp.route('/<name>', methods=['POST'])
@login_required
def save_document(name):
    """Overwrite a document, keeping the replaced version in its history."""
    documents = get_document_store()

    if not documents.exists(name):
        return _redirect_with_message(f"{name} does not exist.")
    if not documents.classify(name).is_text:
        return _not_editable(name)

    content = request.form.get('content', '')
    get_history_store(documents).record(name)
    documents.write(name, content)

    current_app.logger.info(f"Updated document {name}")
    return _redirect_with_message(f"{name} has been updated.")


@bp.route('/<name>/delete', methods=['POST'])
@login_required
def delete_document(name):
    documents = get_document_store()

    try:
        documents.delete(name)
    except DocumentNotFound as e:
        return _redirect_with_message(str(e))

    get_history_store(documents).drop(name)
    return _redirect_with_message(f"{name} was deleted.")


@bp.route('/<name>/duplicate', methods=['POST'])
@login_required
def duplicate_document(name):
    documents = get_document_store()

    try:
        new_name = documents.duplicate(name)
    except DocumentNotFound as e:
        return _redirect_with_message(str(e))

    if documents.classify(new_name).is_text:
        get_history_store(documents).record(new_name)
    return _redirect_with_message(f"{name} was duplicated as {new_name}.")


@bp.route('/<name>/rename', methods=['GET'])
@login_required
def rename_form(name):
    if not get_document_store().exists(name):
        return _redirect_with_message(f"{name} does not exist.")
    return render_template('rename.html', name=name, new_name=name)


@bp.route('/<name>/rename', methods=['POST'])
@login_required
def rename_document(name):
    """Rename a document and move its history with it."""
    documents = get_document_store()
    new_name = request.form.get('new_name', '').strip()

    if not documents.exists(name):
        return _redirect_with_message(f"{name} does not exist.")

    try:
        validate_name(new_name, _supported_extensions())
        if documents.classify(new_name).is_text != documents.classify(name).is_text:
            raise ValidationError(f"{name} cannot be renamed to a different kind of document.")
        if new_name != name and documents.exists(new_name):
            raise ValidationError(f"{new_name} already exists.")
    except ValidationError as e:
        return render_template('rename.html', name=name, new_name=new_name, error=str(e)), 422

    if new_name == name:
        return _redirect_with_message(f"{name} was renamed to {new_name}.")

    documents.rename(name, new_name)
    get_history_store(documents).move(name, new_name)
    return _redirect_with_message(f"{name} was renamed to {new_name}.")


@bp.route('/<name>/history', methods=['GET'])
def document_history(name):
    """Show the stored prior versions of a document, newest first."""
    versions = get_history_store().versions(name)
    return render_template('history.html', name=name, versions=versions)
