import argparse
import getpass
import logging
import sys

from app import create_app
from config import config
import credentials

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def serve(app, args):
  logging.info(f"Serving documents from {app.config['DATA_PATH']}")
  app.run(host=args.host, port=args.port, debug=args.debug or app.config['DEBUG'])
  return 0


def add_user(app, args):
  password = args.password or getpass.getpass(f"Password for {args.username}: ")
  with app.app_context():
    error = credentials.validate_username(args.username) or credentials.validate_password(password)
    if error:
      logging.error(error)
      return 1
    credentials.register_user(args.username, password)
  print(f"Added user {args.username}.")
  return 0


def list_users(app, args):
  with app.app_context():
    for username in sorted(credentials.load_user_credentials()):
      print(username)
  return 0


def build_parser():
  parser = argparse.ArgumentParser(description="Markdown CMS")
  parser.add_argument('--env', choices=sorted(config), default='default',
                      help="configuration to load")
  commands = parser.add_subparsers(dest='command', required=True)

  serve_parser = commands.add_parser('serve', help="run the web application")
  serve_parser.add_argument('--host', default='0.0.0.0')
  serve_parser.add_argument('--port', type=int, default=5000)
  serve_parser.add_argument('--debug', action='store_true')
  serve_parser.set_defaults(handler=serve)

  adduser_parser = commands.add_parser('adduser', help="add a user to the credential file")
  adduser_parser.add_argument('username')
  adduser_parser.add_argument('--password', help="skip the interactive prompt")
  adduser_parser.set_defaults(handler=add_user)

  users_parser = commands.add_parser('users', help="list registered usernames")
  users_parser.set_defaults(handler=list_users)
  return parser


def main(argv=None):
  args = build_parser().parse_args(argv)
  app = create_app(config[args.env])
  return args.handler(app, args)


if __name__ == '__main__':
  sys.exit(main())
