"""
Document storage for the CMS.

Documents are plain files in a single data directory. Only ``.txt`` and
``.md`` names can be created; ``.md`` files are rendered to HTML when viewed.
"""
import logging
import os
import shutil

import markdown
from flask import current_app

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = ('txt', 'md')


def data_path():
    path = current_app.config['DATA_PATH']
    os.makedirs(path, exist_ok=True)
    return path


def document_path(name):
    """Path of a document inside the data directory, ignoring any directory part of *name*."""
    return os.path.join(data_path(), os.path.basename(name))


def _split_name(name):
    pieces = (name or '').split('.')
    while pieces and pieces[-1] == '':
        pieces.pop()
    return [piece.strip() for piece in pieces]


def validate_filename(name):
    """Return an error message for an unusable document name, or None."""
    pieces = _split_name(name)
    if not pieces or pieces == ['']:
        return "A name is required."
    if len(pieces) != 2 or not pieces[0] or '/' in name or '\\' in name:
        return "Please enter a valid name."
    if pieces[1] not in ALLOWED_EXTENSIONS:
        return "Please enter a valid file extension (.txt or .md)."
    return None


def normalize_filename(name):
    return '.'.join(_split_name(name))


def list_documents():
    path = data_path()
    return sorted(
        entry for entry in os.listdir(path)
        if os.path.isfile(os.path.join(path, entry))
    )


def document_exists(name):
    return os.path.isfile(document_path(name))


def read_document(name):
    with open(document_path(name), 'r', encoding='utf-8') as f:
        return f.read()


def create_document(name):
    """Create an empty document. Returns an error message, or None on success."""
    try:
        with open(document_path(name), 'x', encoding='utf-8'):
            pass
    except FileExistsError:
        return f"{name} already exists."
    logger.info("Created document %s", name)
    return None


def write_document(name, text):
    with open(document_path(name), 'w', encoding='utf-8') as f:
        f.write(text)
    logger.info("Updated document %s", name)


def delete_document(name):
    path = document_path(name)
    if not os.path.isfile(path):
        return False
    os.remove(path)
    logger.info("Deleted document %s", name)
    return True


def copy_name(name):
    stem, _, extension = os.path.basename(name).rpartition('.')
    if not stem:
        return f"{extension}_cp"
    return f"{stem}_cp.{extension}"


def duplicate_document(name):
    """Copy ``stem.ext`` to ``stem_cp.ext`` and return the new name.

    Raises FileNotFoundError when the source document does not exist.
    """
    source = document_path(name)
    if not os.path.isfile(source):
        raise FileNotFoundError(source)
    new_name = copy_name(name)
    shutil.copyfile(source, document_path(new_name))
    logger.info("Duplicated document %s as %s", name, new_name)
    return new_name


def render_markdown(text):
    return markdown.markdown(text, extensions=['fenced_code', 'tables'])


def render_document(name, content):
    """Return ``(body, mimetype, is_html)`` for displaying a document."""
    if os.path.splitext(name)[1] == '.md':
        return render_markdown(content), 'text/html', True
    return content, 'text/plain', False
