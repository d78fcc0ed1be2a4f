"""
Tests for the YAML credential store.
"""

import pytest
import yaml

import credentials


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


class TestCredentialFile:

    def test_missing_file_is_empty(self, ctx):
        assert credentials.load_user_credentials() == {}

    def test_empty_file_is_empty(self, ctx):
        with open(ctx.config['USERS_PATH'], 'w') as f:
            f.write('')
        assert credentials.load_user_credentials() == {}

    def test_written_as_yaml_mapping(self, ctx):
        credentials.write_user_credentials({'admin': 'hash'})
        with open(ctx.config['USERS_PATH']) as f:
            assert yaml.safe_load(f) == {'admin': 'hash'}

    def test_corrupt_file_raises(self, ctx):
        with open(ctx.config['USERS_PATH'], 'w') as f:
            f.write('admin: [unclosed')
        with pytest.raises(yaml.YAMLError):
            credentials.load_user_credentials()


class TestLogin:

    def test_register_then_login(self, ctx):
        credentials.register_user('admin', 'Secret123!')
        stored = credentials.load_user_credentials()['admin']
        assert stored != 'Secret123!'
        assert stored.startswith('$2')
        assert credentials.valid_login('admin', 'Secret123!')
        assert not credentials.valid_login('admin', 'secret123!')

    def test_unknown_user(self, ctx):
        assert not credentials.valid_login('ghost', 'anything')

    def test_malformed_hash(self, ctx):
        credentials.write_user_credentials({'admin': 'not-a-bcrypt-hash'})
        assert not credentials.valid_login('admin', 'not-a-bcrypt-hash')


class TestValidation:

    def test_username_taken(self, ctx):
        credentials.write_user_credentials({'admin': 'hash'})
        assert credentials.validate_username('admin') == "This username has already been taken."

    @pytest.mark.parametrize('username', ['', 'bad name', 'dash-ed', 'émile'])
    def test_username_characters(self, ctx, username):
        assert credentials.validate_username(username) == \
            "Please enter a valid username (letters and digits only)."

    def test_username_ok(self, ctx):
        assert credentials.validate_username('Writer42') is None

    @pytest.mark.parametrize('password', ['', 'Sh0rt!', 'alllower1!', 'ALLUPPER1!', 'NoDigits!!', 'NoSpecial12'])
    def test_password_rejected(self, password):
        assert credentials.validate_password(password) == "Please key in a valid password."

    @pytest.mark.parametrize('password', ['Password1!', 'Credentials1!', 'a-B-c-1-2-3'])
    def test_password_accepted(self, password):
        assert credentials.validate_password(password) is None
