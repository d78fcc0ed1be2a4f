"""
Credential storage for the CMS.

Users live in a single YAML file mapping username to a bcrypt hash.
"""
import logging
import os
import re

import bcrypt
import yaml
from flask import current_app

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r'[A-Za-z0-9]+')
PASSWORD_PATTERN = re.compile(r'(?=.*?[A-Z])(?=.*?[a-z])(?=.*?[0-9])(?=.*?[#?!@$%^&*-]).{8,}')


def users_path():
    return current_app.config['USERS_PATH']


def load_user_credentials():
    """Load the username -> password hash mapping. A missing file is an empty store."""
    try:
        with open(users_path(), 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    return data or {}


def write_user_credentials(data):
    path = users_path()
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, default_flow_style=False)


def hash_password(password):
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def check_password(password, password_hash):
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except (ValueError, TypeError, AttributeError):
        # stored value is not a bcrypt hash
        return False


def valid_login(username, password):
    credentials = load_user_credentials()
    if not username or username not in credentials:
        return False
    return check_password(password or '', credentials[username])


def validate_username(username):
    """Return an error message for an unusable username, or None."""
    if username in load_user_credentials():
        return "This username has already been taken."
    if not username or not USERNAME_PATTERN.fullmatch(username):
        return "Please enter a valid username (letters and digits only)."
    return None


def validate_password(password):
    """Require 8+ characters with upper, lower, digit and one of #?!@$%^&*-."""
    if not password or not PASSWORD_PATTERN.fullmatch(password):
        return "Please key in a valid password."
    return None


def register_user(username, password):
    credentials = load_user_credentials()
    credentials[username] = hash_password(password)
    write_user_credentials(credentials)
    logger.info("Registered user %s", username)
