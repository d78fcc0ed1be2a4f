from functools import wraps
import logging
import os

from flask import (Blueprint, Flask, Response, flash, redirect, render_template,
                   request, session, url_for)

from config import Config
import credentials
import documents

logger = logging.getLogger(__name__)

cms = Blueprint('cms', __name__)


def signed_in():
    return bool(session.get('username'))


def login_required(f):
    """Redirect to the index with a notice unless a user is signed in."""
    @wraps(f)
    def decorated(*args, **kwargs):
        if not signed_in():
            flash("You must be signed in to do that.")
            return redirect(url_for('cms.index'))
        return f(*args, **kwargs)
    return decorated


def missing(filename):
    flash(f"{filename} does not exist.")
    return redirect(url_for('cms.index'))


@cms.route('/')
def index():
    return render_template('index.html', filenames=documents.list_documents())


@cms.route('/new')
@login_required
def new_document():
    return render_template('new.html')


@cms.route('/new', methods=['POST'])
@login_required
def create_document():
    name = request.form.get('name', '')
    error = documents.validate_filename(name)
    if not error:
        name = documents.normalize_filename(name)
        error = documents.create_document(name)
    if error:
        flash(error)
        return render_template('new.html', name=name), 422

    flash(f"{name} was created.")
    return redirect(url_for('cms.index'))


@cms.route('/<filename>')
def view_document(filename):
    filename = os.path.basename(filename)
    try:
        content = documents.read_document(filename)
    except FileNotFoundError:
        return missing(filename)

    body, mimetype, is_html = documents.render_document(filename, content)
    if is_html:
        return render_template('document.html', content=body, current_file=filename)
    return Response(body, mimetype=mimetype)


@cms.route('/<filename>/edit')
@login_required
def edit_document(filename):
    try:
        content = documents.read_document(filename)
    except FileNotFoundError:
        return missing(filename)
    return render_template('edit.html', filename=filename, content=content)


@cms.route('/<filename>/edit', methods=['POST'])
@login_required
def update_document(filename):
    if not documents.document_exists(filename):
        # saving to a missing document creates it, so it must be a valid new name
        error = documents.validate_filename(filename)
        if error:
            flash(error)
            return redirect(url_for('cms.index'))
        filename = documents.normalize_filename(filename)

    documents.write_document(filename, request.form.get('edited_text', ''))
    flash(f"{filename} has been updated.")
    return redirect(url_for('cms.index'))


@cms.route('/<filename>/delete', methods=['POST'])
@login_required
def delete_document(filename):
    documents.delete_document(filename)
    flash(f"{filename} was deleted.")
    return redirect(url_for('cms.index'))


@cms.route('/<filename>/duplicate', methods=['POST'])
@login_required
def duplicate_document(filename):
    try:
        new_name = documents.duplicate_document(filename)
    except FileNotFoundError:
        return missing(filename)
    flash(f"{filename} was duplicated as {new_name}.")
    return redirect(url_for('cms.index'))


@cms.route('/users/signin')
def signin_form():
    return render_template('signin.html')


@cms.route('/users/signin', methods=['POST'])
def signin():
    username = request.form.get('username', '')
    if credentials.valid_login(username, request.form.get('password', '')):
        session['username'] = username
        logger.info("User %s signed in", username)
        flash("Welcome!")
        return redirect(url_for('cms.index'))

    logger.warning("Failed sign in for %r from %s", username, request.remote_addr)
    flash("Invalid Credentials")
    return render_template('signin.html', username=username), 422


@cms.route('/users/signout', methods=['POST'])
def signout():
    session.pop('username', None)
    flash("You have been signed out.")
    return redirect(url_for('cms.index'))


@cms.route('/users/signup')
def signup_form():
    return render_template('signup.html')


@cms.route('/users/signup', methods=['POST'])
def signup():
    username = request.form.get('username', '')
    password = request.form.get('password', '')
    error = credentials.validate_username(username) or credentials.validate_password(password)
    if error:
        flash(error)
        return render_template('signup.html', username=username), 422

    credentials.register_user(username, password)
    session['username'] = username
    flash("Your account has been created.")
    return redirect(url_for('cms.index'))


def create_app(config_class=Config, **overrides):
    """Application factory for the CMS."""
    app = Flask(__name__, template_folder='templates')
    app.config.from_object(config_class)
    app.config.update(overrides)
    app.register_blueprint(cms)
    return app


if __name__ == '__main__':
    create_app().run(host='0.0.0.0', port=5000, debug=True)
